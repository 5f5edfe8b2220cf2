from __future__ import annotations

import logging
from pathlib import Path

from .errors import EvictionFailed
from .scanner import LogFileRecord, scan_log_dir

log = logging.getLogger(__name__)


def evict_overflow(records: list[LogFileRecord], keep: int) -> list[Path]:
    """
    Delete the oldest logs until fewer than `keep` remain.

    `records` must be sorted newest first and is trimmed in place. Room is
    left for the file the current run is about to create.
    """
    if keep < 1:
        raise ValueError(f"keep must be >= 1, got {keep}")

    evicted: list[Path] = []
    while len(records) >= keep:
        oldest = records.pop()
        try:
            oldest.path.unlink()
        except OSError as e:
            raise EvictionFailed(f"Cannot delete old log {oldest.path}: {e}") from e
        log.info(f"Evicted old log: {oldest.path.name}")
        evicted.append(oldest.path)

    return evicted


def enforce_retention(log_dir: Path, keep: int, *, purge_foreign: bool = True) -> list[Path]:
    """One scan-and-evict pass over `log_dir`. Returns the evicted paths."""
    records = scan_log_dir(log_dir, purge_foreign=purge_foreign)
    return evict_overflow(records, keep)
