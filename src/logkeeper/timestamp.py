from __future__ import annotations

import re
from datetime import datetime

from .errors import TimestampDecodeError

TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"

# strptime alone accepts single-digit fields and non-ASCII digits
_TOKEN_RE = re.compile(r"\d{4}-\d{2}-\d{2}_\d{2}-\d{2}-\d{2}", re.ASCII)


def encode(instant: datetime) -> str:
    """
    Format a point in time as a filename token (local time, seconds).

    Aware datetimes are converted to local time first. The year is always
    four digits wide; strftime does not pad years below 1000 everywhere.
    """
    if instant.tzinfo is not None:
        instant = instant.astimezone().replace(tzinfo=None)

    return (
        f"{instant.year:04d}-{instant.month:02d}-{instant.day:02d}_"
        f"{instant.hour:02d}-{instant.minute:02d}-{instant.second:02d}"
    )


def decode(token: str) -> datetime:
    if not _TOKEN_RE.fullmatch(token):
        raise TimestampDecodeError(f"Not a timestamp token: {token!r}")

    try:
        return datetime.strptime(token, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise TimestampDecodeError(f"Not a timestamp token: {token!r}") from e


def is_token(token: str) -> bool:
    try:
        decode(token)
    except TimestampDecodeError:
        return False
    return True
