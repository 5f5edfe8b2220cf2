from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

DEFAULT_MAX_LOG_FILES = 5

# ------------------------------------------------------------
# Helpers
# ------------------------------------------------------------


def _as_bool(v: str) -> bool:
    return v.strip().lower() in {"1", "true", "yes", "on"}


def _as_int(v: str, default: int) -> int:
    try:
        return int(v)
    except ValueError:
        return default


def level_to_int(level: str | int) -> int:
    if isinstance(level, int):
        return level
    lvl = logging.getLevelName(str(level).upper())
    return lvl if isinstance(lvl, int) else logging.INFO


# ------------------------------------------------------------
# Logging environment
# ------------------------------------------------------------


@dataclass(frozen=True)
class LoggingEnvironment:
    log_level: str
    log_retention: int
    logs_dir: Optional[Path]
    verbose: bool
    quiet: bool

    @property
    def root_level(self) -> int:
        # verbose forces DEBUG everywhere
        return logging.DEBUG if self.verbose else level_to_int(self.log_level)


def load_env_file(path: Path | None = None) -> bool:
    """
    Load a .env file into os.environ.

    Without a path, the nearest .env at or above the working directory is
    used. Existing variables always win. Returns True when a file was loaded.
    """
    if path is None:
        found = find_dotenv(usecwd=True)
        if not found:
            return False
        path = Path(found)

    if not path.exists():
        return False
    return load_dotenv(dotenv_path=path, override=False)


def get_logging_env() -> LoggingEnvironment:
    log_level = os.environ.get("LOG_LEVEL", "DEBUG")
    log_retention = _as_int(
        os.environ.get("LOG_RETENTION", str(DEFAULT_MAX_LOG_FILES)),
        DEFAULT_MAX_LOG_FILES,
    )

    raw_dir = os.environ.get("LOGKEEPER_LOGS_DIR")
    logs_dir = Path(raw_dir).expanduser().resolve() if raw_dir else None

    return LoggingEnvironment(
        log_level=log_level,
        log_retention=log_retention,
        logs_dir=logs_dir,
        verbose=_as_bool(os.environ.get("LOGKEEPER_VERBOSE", "0")),
        quiet=_as_bool(os.environ.get("LOGKEEPER_QUIET", "0")),
    )
