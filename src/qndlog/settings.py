"""Project settings (.qndlog.yaml)."""

import os
import sys
import tempfile
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

import yaml

from qndlog.backwards import DEFAULT_CHUNK_SIZE

SETTINGS_FILE = ".qndlog.yaml"
LOG_PATH_ENV = "QNDLOG_PATH"


@dataclass
class Settings:
    """Defaults used by the command line tools."""
    log_path: str = "qnd.log"
    chunk_size: int = DEFAULT_CHUNK_SIZE


def settings_path(project_dir: str = ".") -> Path:
    return Path(project_dir) / SETTINGS_FILE


def load_settings(project_dir: str = ".") -> Settings:
    """Read settings. Returns defaults on missing or corrupted files.

    A relative ``log_path`` is resolved against ``project_dir``, and the
    QNDLOG_PATH environment variable overrides it.
    """
    path = settings_path(project_dir)
    data = {}

    if path.exists():
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (yaml.YAMLError, OSError) as e:
            print(
                f"Warning: corrupted {path}, using defaults: {e}",
                file=sys.stderr,
            )
            data = {}
        if not isinstance(data, dict):
            print(f"Warning: {path} is not a mapping, using defaults", file=sys.stderr)
            data = {}

    settings = Settings()
    if data.get("log_path"):
        settings.log_path = str(data["log_path"])
    chunk_size = data.get("chunk_size")
    if isinstance(chunk_size, int) and chunk_size > 0:
        settings.chunk_size = chunk_size

    env_path: Optional[str] = os.environ.get(LOG_PATH_ENV)
    if env_path:
        settings.log_path = env_path
    elif not Path(settings.log_path).is_absolute():
        settings.log_path = str(Path(project_dir) / settings.log_path)

    return settings


def save_settings(settings: Settings, project_dir: str = ".") -> Path:
    """Write settings atomically (temp file + rename)."""
    path = settings_path(project_dir)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "w") as f:
            yaml.dump(asdict(settings), f, default_flow_style=False, sort_keys=False)
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise

    return path
