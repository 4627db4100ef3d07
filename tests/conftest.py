"""Test fixtures and configuration."""

import json

import pytest


@pytest.fixture
def log_path(tmp_path):
    """Path to a log file that does not exist yet."""
    return tmp_path / "qnd.log"


@pytest.fixture
def sample_log(log_path):
    """Log file with three entries, oldest first."""
    entries = [{"n": i, "entry-id": f"id00{i}"} for i in range(3)]
    log_path.write_text("\n\n".join(json.dumps(e) for e in entries))
    return log_path
