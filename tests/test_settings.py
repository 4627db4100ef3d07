"""Tests for project settings."""

from pathlib import Path

from qndlog.backwards import DEFAULT_CHUNK_SIZE
from qndlog.settings import LOG_PATH_ENV, Settings, load_settings, save_settings, settings_path


class TestSettings:
    def test_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv(LOG_PATH_ENV, raising=False)
        settings = load_settings(str(tmp_path))
        assert settings.log_path == str(tmp_path / "qnd.log")
        assert settings.chunk_size == DEFAULT_CHUNK_SIZE

    def test_read_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv(LOG_PATH_ENV, raising=False)
        settings_path(str(tmp_path)).write_text("log_path: logs/app.log\nchunk_size: 512\n")
        settings = load_settings(str(tmp_path))
        assert settings.log_path == str(tmp_path / "logs" / "app.log")
        assert settings.chunk_size == 512

    def test_absolute_log_path(self, tmp_path, monkeypatch):
        monkeypatch.delenv(LOG_PATH_ENV, raising=False)
        settings_path(str(tmp_path)).write_text("log_path: /var/tmp/qnd.log\n")
        assert load_settings(str(tmp_path)).log_path == "/var/tmp/qnd.log"

    def test_invalid_chunk_size_ignored(self, tmp_path, monkeypatch):
        monkeypatch.delenv(LOG_PATH_ENV, raising=False)
        settings_path(str(tmp_path)).write_text("chunk_size: -3\n")
        assert load_settings(str(tmp_path)).chunk_size == DEFAULT_CHUNK_SIZE

    def test_corrupted_file(self, tmp_path, monkeypatch, capsys):
        monkeypatch.delenv(LOG_PATH_ENV, raising=False)
        settings_path(str(tmp_path)).write_text("log_path: [unclosed\n")
        settings = load_settings(str(tmp_path))
        assert settings.log_path == str(tmp_path / "qnd.log")
        assert "Warning" in capsys.readouterr().err

    def test_not_a_mapping(self, tmp_path, monkeypatch, capsys):
        monkeypatch.delenv(LOG_PATH_ENV, raising=False)
        settings_path(str(tmp_path)).write_text("- just\n- a list\n")
        assert load_settings(str(tmp_path)).chunk_size == DEFAULT_CHUNK_SIZE
        assert "Warning" in capsys.readouterr().err

    def test_env_override(self, tmp_path, monkeypatch):
        settings_path(str(tmp_path)).write_text("log_path: file.log\n")
        monkeypatch.setenv(LOG_PATH_ENV, "/tmp/env.log")
        assert load_settings(str(tmp_path)).log_path == "/tmp/env.log"

    def test_save_and_load(self, tmp_path, monkeypatch):
        monkeypatch.delenv(LOG_PATH_ENV, raising=False)
        path = save_settings(Settings(log_path="saved.log", chunk_size=64), str(tmp_path))
        assert path == Path(tmp_path) / ".qndlog.yaml"
        settings = load_settings(str(tmp_path))
        assert settings.log_path == str(tmp_path / "saved.log")
        assert settings.chunk_size == 64
        assert not list(Path(tmp_path).glob("*.tmp"))
