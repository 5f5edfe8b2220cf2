from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.table import Table

from .builder import LoggingBuilder
from .env import get_logging_env, load_env_file
from .errors import ConfigError, LoggingInitError
from .retention import enforce_retention
from .scanner import LogFileRecord, classify_entries, file_stem, sort_log_files
from .timestamp import is_token

console = Console()
log = logging.getLogger(__name__)


# ----------------------------
# Helpers
# ----------------------------


def _add_identity_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--app", dest="app_name", default="", help="Application name")
    p.add_argument("--qualifier", default="", help="Identity qualifier (e.g. com)")
    p.add_argument("--org", dest="organization", default="", help="Organization name")
    p.add_argument("--dir", help="Explicit log directory")


def _builder_from_args(args: argparse.Namespace) -> LoggingBuilder:
    builder = LoggingBuilder.from_env(
        app_name=args.app_name,
        qualifier=args.qualifier,
        organization=args.organization,
    )
    if getattr(args, "dir", None):
        builder = builder.with_log_dir(args.dir)
    return builder


def resolve_cli_log_dir(args: argparse.Namespace) -> Path:
    """
    Log directory for read-only commands.

    An explicit --dir (or LOGKEEPER_LOGS_DIR) needs no identity.
    """
    if args.dir:
        return Path(args.dir).expanduser().resolve()

    env_dir = get_logging_env().logs_dir
    if env_dir is not None:
        return env_dir

    builder = _builder_from_args(args)
    builder.validate()
    return builder.resolve_log_dir()


def list_logs(log_dir: Path) -> list[LogFileRecord]:
    """Timestamped logs in `log_dir`, newest first. Deletes nothing."""
    if not log_dir.is_dir():
        return []
    return sort_log_files(classify_entries(log_dir).records)


def find_log_file(log_dir: Path, name: str) -> Path | None:
    if not log_dir.is_dir():
        return None

    candidate = log_dir / name
    if candidate.is_file():
        return candidate

    if is_token(name):
        for rec in list_logs(log_dir):
            if file_stem(rec.path.name) == name:
                return rec.path

    return None


def print_tail(path: Path, lines: int) -> None:
    data = path.read_text(encoding="utf-8", errors="replace").splitlines()
    tail = data[-lines:] if lines > 0 else data
    for line in tail:
        print(line)


def dispatch_subparser_help(parser: argparse.ArgumentParser, path: list[str] | None) -> int:
    """
    Implements `X help [subcmd ...]` for a subtree parser.
    """
    if not path:
        parser.print_help()
        return 0

    try:
        parser.parse_args(path + ["--help"])
    except SystemExit:
        pass
    return 0


# ----------------------------
# Parsers
# ----------------------------


def build_logs_parser(subparsers: argparse._SubParsersAction) -> None:
    logs = subparsers.add_parser("logs", help="Log utilities")
    lsub = logs.add_subparsers(dest="logs_cmd", required=True)

    help_p = lsub.add_parser("help", help="Show help for logs")
    help_p.add_argument("path", nargs="*", help="Subcommand path (e.g. list, show)")
    help_p.set_defaults(action="help", _help_parser=logs)

    list_p = lsub.add_parser("list", help="List log files, newest first")
    _add_identity_args(list_p)
    list_p.set_defaults(action="list")

    show_p = lsub.add_parser("show", help="Show a log file (tail)")
    show_p.add_argument("name", help="Log filename or timestamp")
    show_p.add_argument("--tail", type=int, default=120, help="Lines from end")
    _add_identity_args(show_p)
    show_p.set_defaults(action="show")

    prune_p = lsub.add_parser("prune", help="Run one retention pass")
    prune_p.add_argument("--keep", type=int, help="Retention limit (default: LOG_RETENTION)")
    _add_identity_args(prune_p)
    prune_p.set_defaults(action="prune")


def build_init_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("init", help="Initialize logging and print the new log file")
    _add_identity_args(p)
    p.add_argument("--quiet", action="store_true", help="No console sink")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="logkeeper")
    sub = p.add_subparsers(dest="command", required=True)

    help_cmd = sub.add_parser("help", help="Show help")
    help_cmd.add_argument("path", nargs="*", help="Command path to show help for")
    help_cmd.set_defaults(_help=True)

    build_init_parser(sub)
    build_logs_parser(sub)
    return p


# ----------------------------
# Handlers
# ----------------------------


def handle_logs(args: argparse.Namespace) -> int:
    if args.action == "help":
        return dispatch_subparser_help(args._help_parser, list(args.path or []))

    log_dir = resolve_cli_log_dir(args)

    if args.action == "list":
        records = list_logs(log_dir)
        if not records:
            console.print(f"No logs in {log_dir}")
            return 0
        table = Table("Log", "Started")
        for rec in records:
            table.add_row(rec.path.name, rec.timestamp.strftime("%Y-%m-%d %H:%M:%S"))
        console.print(table)
        return 0

    if args.action == "show":
        path = find_log_file(log_dir, args.name)
        if not path:
            print(f"Log not found: {args.name}")
            return 1
        print_tail(path, int(args.tail))
        return 0

    if args.action == "prune":
        keep = args.keep if args.keep is not None else get_logging_env().log_retention
        evicted = enforce_retention(log_dir, keep)
        for p in evicted:
            print(f"evicted {p.name}")
        print(f"{len(evicted)} log(s) evicted from {log_dir}")
        return 0

    raise SystemExit(f"Unknown logs action: {args.action}")


def handle_init(args: argparse.Namespace) -> int:
    builder = _builder_from_args(args)
    if args.quiet:
        builder = builder.with_console(False)

    with builder.finish() as handle:
        log.info("Logging initialized")
        if handle.evicted:
            log.info(f"Evicted {len(handle.evicted)} old log(s)")
    print(handle.log_file)
    return 0


def main(argv: list[str] | None = None) -> int:
    load_env_file()

    parser = build_parser()
    args = parser.parse_args(argv)

    if getattr(args, "_help", False):
        return dispatch_subparser_help(parser, list(args.path or []))

    try:
        if args.command == "init":
            return handle_init(args)
        if args.command == "logs":
            return handle_logs(args)
    except (ConfigError, LoggingInitError, ValueError) as e:
        print(f"error: {e}")
        return 1

    raise RuntimeError(f"Unknown command: {args.command}")
