from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler


def build_console(file=None) -> Console:
    # stdout so output can be captured and piped
    return Console(file=file or sys.stdout, soft_wrap=True)


def build_console_handler(level: int = logging.DEBUG, console: Console | None = None) -> logging.Handler:
    handler = RichHandler(
        console=console or build_console(),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setLevel(level)

    # RichHandler renders the level column; the formatter must not repeat it.
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))
    return handler
