from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from typing import Optional

from .console import build_console_handler
from .env import DEFAULT_MAX_LOG_FILES, get_logging_env, level_to_int
from .errors import ConfigError
from .file import build_file_handler
from .handle import LoggingHandle
from .log_paths import log_file_path, resolve_log_dir
from .retention import enforce_retention

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoggingBuilder:
    """
    Immutable logging configuration.

    Every `with_*` call returns a new builder; `finish()` validates the
    result, runs one retention pass over the log directory and installs
    the console and file sinks on the root logger.

        handle = (
            LoggingBuilder()
            .with_qualifier("com")
            .with_organization("Acme")
            .with_app_name("Widget")
            .with_level_for("urllib3", "WARNING")
            .finish()
        )
    """

    app_name: str = ""
    qualifier: str = ""
    organization: str = ""
    global_level: int = logging.DEBUG
    level_for: tuple[tuple[str, int], ...] = ()
    max_log_files: int = DEFAULT_MAX_LOG_FILES
    log_dir: Optional[Path] = None
    console: bool = True

    @classmethod
    def from_env(cls, *, app_name: str = "", qualifier: str = "", organization: str = "") -> "LoggingBuilder":
        env = get_logging_env()
        return cls(
            app_name=app_name,
            qualifier=qualifier,
            organization=organization,
            global_level=env.root_level,
            max_log_files=env.log_retention,
            log_dir=env.logs_dir,
            console=not env.quiet,
        )

    # ---- pure transformations ----

    def with_app_name(self, app_name: str) -> "LoggingBuilder":
        return replace(self, app_name=str(app_name))

    def with_qualifier(self, qualifier: str) -> "LoggingBuilder":
        return replace(self, qualifier=str(qualifier))

    def with_organization(self, organization: str) -> "LoggingBuilder":
        return replace(self, organization=str(organization))

    def with_global_level(self, level: str | int) -> "LoggingBuilder":
        return replace(self, global_level=level_to_int(level))

    def with_level_for(self, module: str, level: str | int) -> "LoggingBuilder":
        # later calls for the same module win
        levels = dict(self.level_for)
        levels[str(module)] = level_to_int(level)
        return replace(self, level_for=tuple(levels.items()))

    def with_max_log_files(self, count: int) -> "LoggingBuilder":
        return replace(self, max_log_files=int(count))

    def with_log_dir(self, log_dir: str | Path | None) -> "LoggingBuilder":
        return replace(self, log_dir=Path(log_dir) if log_dir is not None else None)

    def with_console(self, enabled: bool) -> "LoggingBuilder":
        return replace(self, console=bool(enabled))

    # ---- finalization ----

    def validate(self) -> None:
        missing = [
            name
            for name in ("app_name", "qualifier", "organization")
            if not getattr(self, name)
        ]
        if missing:
            raise ConfigError(f"Missing required fields: {', '.join(missing)}")
        if self.max_log_files < 1:
            raise ConfigError(f"max_log_files must be >= 1, got {self.max_log_files}")

    def resolve_log_dir(self) -> Path:
        return resolve_log_dir(self.log_dir, self.organization, self.app_name)

    def finish(self, now: datetime | None = None) -> LoggingHandle:
        """
        Initialize logging and return the handle that owns it.

        Raises ConfigError for an incomplete configuration and a
        LoggingInitError subclass if any filesystem step fails. In both
        cases no handler is installed.
        """
        self.validate()

        log_dir = self.resolve_log_dir()
        evicted = enforce_retention(log_dir, self.max_log_files)

        logfile = log_file_path(log_dir, now or datetime.now())

        handlers: list[logging.Handler] = [build_file_handler(logfile)]
        if self.console:
            handlers.insert(0, build_console_handler(logging.DEBUG))

        root = logging.getLogger()
        previous = {"": root.level}
        for name, _ in self.level_for:
            previous[name] = logging.getLogger(name).level

        root.setLevel(self.global_level)
        for name, level in self.level_for:
            logging.getLogger(name).setLevel(level)
        for h in handlers:
            root.addHandler(h)

        handle = LoggingHandle(
            log_dir=log_dir,
            log_file=logfile,
            evicted=evicted,
            handlers=handlers,
            previous_levels=previous,
        )
        log.debug(f"Logging to {logfile} ({len(evicted)} old log(s) evicted)")
        return handle
