"""Command-line entry point.

Subcommands:
    run       poll the commands enabled in the config file
    log       log steps/intervals only, no config file needed
    commands  list the commands the config file enables
    check     validate the config file
"""

import argparse
import tempfile
from typing import List, Optional

from timeboxer import __version__
from timeboxer.daemon import build_ticker, start_daemon
from timeboxer.errors import CommandError, ConfigError
from timeboxer.handlers.log import LogHandler
from timeboxer.logging import configure_logging
from timeboxer.messaging import emit_error, emit_info, emit_success, emit_warning
from timeboxer.settings import format_duration, get_settings, load_config, parse_duration
from timeboxer.ticker import Command, Ticker


def _duration_arg(text: str):
    try:
        return parse_duration(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _positive_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {text!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {text!r}")
    return value


def _tick_interval(args: argparse.Namespace) -> float:
    if args.tick_interval is not None:
        return args.tick_interval
    return get_settings().tick_interval


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timeboxer", description="Timeboxer - visualize time passing within intervals"
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"{__version__}",
        help="Show version and exit",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Run the commands enabled in the config file")
    run.add_argument("--config", "-c", type=str, help="Config file path")
    run.add_argument(
        "--tick-interval",
        type=_positive_float,
        help="Seconds between polls (default: TIMEBOXER_TICK_INTERVAL or 1)",
    )

    log = sub.add_parser("log", help="Log every step and interval")
    log.add_argument("--step", type=_duration_arg, default=parse_duration("1m"))
    log.add_argument("--interval", type=_duration_arg, default=parse_duration("15m"))
    log.add_argument("--tick-interval", type=_positive_float, help="Seconds between polls")

    commands = sub.add_parser("commands", help="List enabled commands")
    commands.add_argument("--config", "-c", type=str, help="Config file path")

    check = sub.add_parser("check", help="Validate the config file")
    check.add_argument("--config", "-c", type=str, help="Config file path")

    return parser


def handle_run(args: argparse.Namespace) -> int:
    settings = get_settings()

    try:
        config = load_config(args.config or settings.resolved_config_file)
    except ConfigError as e:
        emit_error(f"read config: {e}")
        return 1

    # Use a temp directory if no work directory is set.
    work_dir = settings.work_dir or config.work_dir
    if not work_dir:
        work_dir = tempfile.mkdtemp(prefix="timeboxer-")

    try:
        ticker = build_ticker(config, work_dir=str(work_dir))
    except ValueError as e:
        emit_error(f"cannot create ticker: {e}")
        return 1

    if not ticker.commands:
        emit_warning("No commands enabled in config; nothing will happen.")

    emit_info(f"Timeboxer running with {len(ticker.commands)} commands...")
    start_daemon(ticker, _tick_interval(args))
    return 0


def handle_log(args: argparse.Namespace) -> int:
    try:
        command = Command("log", args.step, args.interval, LogHandler())
    except CommandError as e:
        emit_error(str(e))
        return 1

    emit_info(
        f"Timeboxer running with {format_duration(args.interval)} intervals "
        f"and {format_duration(args.step)} steps..."
    )
    start_daemon(Ticker([command]), _tick_interval(args))
    return 0


def handle_commands(args: argparse.Namespace) -> bool:
    """List the commands the config file enables."""
    try:
        config = load_config(args.config)
        ticker = build_ticker(config)
    except (ConfigError, ValueError) as e:
        emit_error(str(e))
        return False

    if not ticker.commands:
        emit_info("No commands enabled.")
        return True

    emit_info(f"Commands ({len(ticker.commands)}):\n")
    for cmd in ticker.commands:
        emit_info(f"  {cmd.name}")
        emit_info(f"      Step: {format_duration(cmd.effective_step)}")
        emit_info(f"      Interval: {format_duration(cmd.interval)}")
        emit_info(f"      Steps per interval: {cmd.step_count}")
    return True


def handle_check(args: argparse.Namespace) -> bool:
    try:
        config = load_config(args.config)
        ticker = build_ticker(config)
    except (ConfigError, ValueError) as e:
        emit_error(str(e))
        return False

    emit_success(f"Config OK ({len(ticker.commands)} commands enabled)")
    return True


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(get_settings().log_level)

    if args.command == "run":
        return handle_run(args)
    if args.command == "log":
        return handle_log(args)
    if args.command == "commands":
        return 0 if handle_commands(args) else 1
    return 0 if handle_check(args) else 1


def main_entry():
    """Entry point for the installed CLI tool."""
    raise SystemExit(main())
