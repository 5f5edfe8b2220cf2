from __future__ import annotations


class LoggingInitError(Exception):
    """Logging could not be initialized. Nothing was installed."""


class DirectoryUnavailable(LoggingInitError):
    """The log directory could not be created or read."""


class CorruptEntryCleanupFailed(LoggingInitError):
    """A foreign entry in the log directory could not be deleted."""


class EvictionFailed(LoggingInitError):
    """A log file selected for eviction could not be deleted."""


class ConfigError(ValueError):
    pass


class TimestampDecodeError(ValueError):
    """A filename stem is not a timestamp token."""
