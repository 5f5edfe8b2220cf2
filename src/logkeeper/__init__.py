"""
logkeeper: console + per-run file logging with bounded log retention.

Each initialization scans the log directory, deletes entries that are not
timestamped logs, evicts the oldest logs beyond the retention limit, then
starts a fresh `<YYYY-MM-DD_HH-MM-SS>.log` for the current run.
"""

from __future__ import annotations

import logging

from .builder import LoggingBuilder
from .errors import (
    ConfigError,
    CorruptEntryCleanupFailed,
    DirectoryUnavailable,
    EvictionFailed,
    LoggingInitError,
    TimestampDecodeError,
)
from .handle import LoggingHandle
from .retention import enforce_retention, evict_overflow
from .scanner import LogFileRecord, scan_log_dir

__all__ = [
    "ConfigError",
    "CorruptEntryCleanupFailed",
    "DirectoryUnavailable",
    "EvictionFailed",
    "LogFileRecord",
    "LoggingBuilder",
    "LoggingHandle",
    "LoggingInitError",
    "TimestampDecodeError",
    "enforce_retention",
    "evict_overflow",
    "get_logger",
    "init_logging",
    "scan_log_dir",
]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def init_logging(*, app_name: str, qualifier: str, organization: str) -> LoggingHandle:
    """
    Initialize logging for the process from environment settings.

    Shorthand for `LoggingBuilder.from_env(...).finish()`.
    """
    return LoggingBuilder.from_env(
        app_name=app_name, qualifier=qualifier, organization=organization
    ).finish()
