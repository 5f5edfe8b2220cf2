from __future__ import annotations

from datetime import datetime
from pathlib import Path

from platformdirs import user_cache_path

from .env import get_logging_env
from .timestamp import encode


def project_cache_dir(organization: str, app_name: str) -> Path:
    """Per-user cache directory for an application identity."""
    return user_cache_path(appname=app_name, appauthor=organization)


def default_log_dir(organization: str, app_name: str) -> Path:
    return project_cache_dir(organization, app_name) / "logs"


def log_file_path(log_dir: Path, now: datetime) -> Path:
    return log_dir / f"{encode(now)}.log"


def resolve_log_dir(explicit: Path | None, organization: str, app_name: str) -> Path:
    """
    Pick the managed log directory.

    Priority: explicit path, LOGKEEPER_LOGS_DIR, per-user cache dir.
    """
    if explicit is not None:
        return Path(explicit).expanduser().resolve()

    env_dir = get_logging_env().logs_dir
    if env_dir is not None:
        return env_dir

    return default_log_dir(organization, app_name)
