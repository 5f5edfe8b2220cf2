from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable

from .errors import CorruptEntryCleanupFailed, DirectoryUnavailable, TimestampDecodeError
from .timestamp import decode

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogFileRecord:
    path: Path
    timestamp: datetime


@dataclass(frozen=True)
class ScanResult:
    """
    One enumeration of a log directory, before any cleanup.

    - records: entries whose stem is a timestamp token, in enumeration order
    - foreign: entries whose stem is not, to be purged
    """

    records: list[LogFileRecord]
    foreign: list[Path]


def ensure_log_dir(log_dir: Path) -> Path:
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryUnavailable(f"Cannot create log directory {log_dir}: {e}") from e
    return log_dir


def file_stem(name: str) -> str:
    """
    Filename without its final extension.

    A trailing bare dot counts as an empty extension ("a." -> "a") and a
    leading dot does not start one (".hidden" stays whole). PurePath.stem
    disagrees on the first case before Python 3.14.
    """
    if name in ("", ".", ".."):
        return ""
    before, dot, _ = name.rpartition(".")
    if not dot or not before:
        return name
    return before


def classify_entries(log_dir: Path) -> ScanResult:
    """
    Split the entries of `log_dir` into timestamped records and foreign paths.

    Non-recursive. Directories and entries without a stem are skipped.
    Nothing is deleted here.
    """
    records: list[LogFileRecord] = []
    foreign: list[Path] = []

    try:
        entries = list(log_dir.iterdir())
    except OSError as e:
        raise DirectoryUnavailable(f"Cannot read log directory {log_dir}: {e}") from e

    for path in entries:
        stem = file_stem(path.name)
        if not stem:
            continue

        try:
            # symlinks to directories are purged like any other foreign entry
            if path.is_dir() and not path.is_symlink():
                continue
        except OSError as e:
            raise DirectoryUnavailable(f"Cannot stat {path}: {e}") from e

        try:
            timestamp = decode(stem)
        except TimestampDecodeError:
            foreign.append(path)
            continue

        records.append(LogFileRecord(path=path, timestamp=timestamp))

    return ScanResult(records=records, foreign=foreign)


def purge_foreign_entries(paths: Iterable[Path]) -> list[Path]:
    """
    Delete entries that do not belong in the log directory.

    Stops at the first entry that cannot be deleted.
    """
    purged: list[Path] = []
    for path in paths:
        try:
            path.unlink()
        except OSError as e:
            raise CorruptEntryCleanupFailed(
                f"Cannot delete foreign entry {path}: {e}"
            ) from e
        log.info(f"Removed unrecognized entry from log directory: {path.name}")
        purged.append(path)
    return purged


def sort_log_files(records: Iterable[LogFileRecord]) -> list[LogFileRecord]:
    # sorted() is stable under reverse=True, so ties keep enumeration order
    return sorted(records, key=lambda r: r.timestamp, reverse=True)


def scan_log_dir(log_dir: Path, *, purge_foreign: bool = True) -> list[LogFileRecord]:
    """
    Return the timestamped log files in `log_dir`, newest first.

    Creates the directory if missing. Foreign entries are deleted unless
    `purge_foreign` is False.
    """
    ensure_log_dir(log_dir)
    result = classify_entries(log_dir)

    if purge_foreign:
        purge_foreign_entries(result.foreign)

    log.debug(
        f"Scanned {log_dir}: {len(result.records)} log file(s), "
        f"{len(result.foreign)} foreign entr{'y' if len(result.foreign) == 1 else 'ies'}"
    )
    return sort_log_files(result.records)
