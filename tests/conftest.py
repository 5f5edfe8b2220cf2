import logging
from datetime import datetime, timedelta

import pytest


@pytest.fixture(autouse=True)
def clean_env_and_logging(monkeypatch):
    """
    Ensure tests don't leak env or root logger state.
    """

    for k in [
        "LOGKEEPER_LOGS_DIR",
        "LOGKEEPER_VERBOSE",
        "LOGKEEPER_QUIET",
        "LOG_LEVEL",
        "LOG_RETENTION",
    ]:
        monkeypatch.delenv(k, raising=False)

    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level

    yield

    for h in list(root.handlers):
        if h not in saved_handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(saved_level)


@pytest.fixture
def base_time():
    return datetime(2024, 3, 15, 12, 0, 0)


@pytest.fixture
def make_logs(tmp_path, base_time):
    """Create `count` timestamped logs one minute apart, oldest first."""
    from logkeeper.timestamp import encode

    def _make(count, log_dir=None, start=None):
        log_dir = log_dir or tmp_path
        start = start or base_time
        log_dir.mkdir(parents=True, exist_ok=True)
        paths = []
        for i in range(count):
            p = log_dir / f"{encode(start + timedelta(minutes=i))}.log"
            p.write_text("x")
            paths.append(p)
        return paths

    return _make
