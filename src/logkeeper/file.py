from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from .errors import DirectoryUnavailable
from .timestamp import encode


class TokenFormatter(logging.Formatter):
    """Renders asctime in the same shape as log file names."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return encode(datetime.fromtimestamp(record.created))


def build_file_handler(logfile: Path) -> logging.FileHandler:
    try:
        handler = logging.FileHandler(logfile, encoding="utf-8")
    except OSError as e:
        raise DirectoryUnavailable(f"Cannot open log file {logfile}: {e}") from e

    handler.setLevel(logging.NOTSET)
    handler.setFormatter(
        TokenFormatter("[%(levelname)s] %(asctime)s %(name)s - %(message)s")
    )
    return handler
