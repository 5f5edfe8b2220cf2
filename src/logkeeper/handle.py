from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping


class LoggingHandle:
    """
    Proof that logging is active.

    Owns the handlers installed on the root logger by
    `LoggingBuilder.finish()` and remembers the logger levels it replaced.
    Closing the handle detaches the handlers and restores those levels.
    """

    def __init__(
        self,
        log_dir: Path,
        log_file: Path,
        evicted: list[Path],
        handlers: list[logging.Handler],
        previous_levels: Mapping[str, int] | None = None,
    ):
        self.log_dir = log_dir
        self.log_file = log_file
        self.evicted = list(evicted)
        self._handlers = list(handlers)
        self._previous_levels = dict(previous_levels or {})

    @property
    def active(self) -> bool:
        return bool(self._handlers)

    @property
    def handlers(self) -> tuple[logging.Handler, ...]:
        return tuple(self._handlers)

    def close(self) -> None:
        """Detach and close the owned handlers. Safe to call twice."""
        root = logging.getLogger()
        while self._handlers:
            h = self._handlers.pop()
            root.removeHandler(h)
            h.close()

        for name, level in self._previous_levels.items():
            logging.getLogger(name or None).setLevel(level)
        self._previous_levels.clear()

    def __enter__(self) -> "LoggingHandle":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "active" if self.active else "closed"
        return f"<LoggingHandle {self.log_file} ({state})>"
