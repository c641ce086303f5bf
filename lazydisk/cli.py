"""Command-line front door for lazydisk.

Parses CLI options, sets up logging and theme, then runs the interactive
volume picker, scan, and tree browser inside the terminal's raw mode.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .render import format_volume_row
from .runtime.app import (
    EXIT_ABORTED,
    EXIT_NO_VOLUMES,
    EXIT_NOT_A_TERMINAL,
    EXIT_OK,
    EXIT_SCAN_FAILED,
    run_app,
)
from .runtime.config import load_log_level, load_poll_interval_ms, load_theme_name, save_theme_name
from .runtime.logging_setup import configure_logging
from .runtime.presenter import TerminalPresenter
from .terminal import TerminalController
from .ui_theme import available_theme_names, resolve_theme
from .volumes import list_volumes, volume_for_path

logger = logging.getLogger(__name__)

EXIT_CODES_HELP = (
    "exit codes: "
    f"{EXIT_OK} done, "
    f"{EXIT_NOT_A_TERMINAL} not a terminal, "
    f"{EXIT_NO_VOLUMES} no volumes found, "
    f"{EXIT_ABORTED} aborted by user, "
    f"{EXIT_SCAN_FAILED} scan root missing or unreadable"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazydisk",
        description="Scan a volume and browse what uses its space.",
        epilog=EXIT_CODES_HELP,
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Directory to scan directly instead of choosing a volume.",
    )
    parser.add_argument("--all", action="store_true", help="Include pseudo filesystems such as proc and tmpfs.")
    parser.add_argument("--list", action="store_true", help="Print volumes and exit.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}); remembered for later runs.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write the log here instead of the default.")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Log verbosity (default from config, else INFO).",
    )
    return parser


def print_volume_list(all_partitions: bool) -> int:
    """Non-interactive ``--list`` output."""
    volumes = list_volumes(all_partitions=all_partitions)
    if not volumes:
        print("No volumes found", file=sys.stderr)
        return EXIT_NO_VOLUMES
    for volume in volumes:
        print(format_volume_row(volume))
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the session, and return the exit code."""
    args = build_parser().parse_args(argv)

    log_path = configure_logging(args.log_level or load_log_level(), args.log_file)
    logger.debug("Starting up")

    if args.theme is not None:
        save_theme_name(args.theme)
    theme_name = args.theme or load_theme_name()

    if args.list:
        return print_volume_list(args.all)

    scan_target = None
    if args.path is not None:
        path = Path(args.path)
        if not path.is_dir():
            print(f"Not a directory: {path}", file=sys.stderr)
            logger.error("Scan root %s is not a directory", path)
            return EXIT_SCAN_FAILED
        scan_target = volume_for_path(path)

    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        print("lazydisk needs an interactive terminal", file=sys.stderr)
        return EXIT_NOT_A_TERMINAL

    terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())
    theme = resolve_theme(theme_name, no_color=args.no_color)
    presenter = TerminalPresenter(terminal, theme)
    with terminal.raw_mode():
        code = run_app(
            presenter,
            lambda: list_volumes(all_partitions=args.all),
            poll_interval=load_poll_interval_ms() / 1000.0,
            scan_target=scan_target,
        )

    if code == EXIT_NO_VOLUMES:
        print("No volumes found", file=sys.stderr)
    elif code == EXIT_SCAN_FAILED:
        where = f"; see {log_path}" if log_path is not None else ""
        print(f"Could not read the scan root{where}", file=sys.stderr)
    logger.debug("Exiting with code %d", code)
    return code


if __name__ == "__main__":
    raise SystemExit(main())
