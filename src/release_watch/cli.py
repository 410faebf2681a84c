"""Command-line interface for the release watcher."""

from __future__ import annotations

import argparse
import logging
import signal
import sys

from release_watch.fetcher import ReleaseFetcher
from release_watch.scheduler import CycleOutcome, PollingScheduler, UpdateEvent
from release_watch.settings import WatchSettings, load_settings
from release_watch.store import VersionStore
from release_watch.version import format_version


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--repo",
        metavar="OWNER/NAME",
        help="GitHub repository to watch (default: from settings)",
    )
    parser.add_argument(
        "--state-file",
        metavar="PATH",
        help="Version state file (default: from settings)",
    )


def _build_run_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the 'run' subcommand."""
    parser = subparsers.add_parser("run", help="Poll for new releases until interrupted")
    _add_common_arguments(parser)
    parser.add_argument(
        "--startup-delay",
        type=float,
        metavar="SECONDS",
        help="Delay before the first check (default: 300)",
    )
    parser.add_argument(
        "--interval",
        type=float,
        metavar="SECONDS",
        help="Seconds between checks (default: 86400)",
    )


def _build_check_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the 'check' subcommand."""
    parser = subparsers.add_parser("check", help="Run one release check now")
    _add_common_arguments(parser)


def _build_show_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the 'show' subcommand."""
    parser = subparsers.add_parser("show", help="Print the stored release version")
    _add_common_arguments(parser)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="release-watch",
        description="Watch a GitHub repository for new releases.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command")
    _build_run_parser(subparsers)
    _build_check_parser(subparsers)
    _build_show_parser(subparsers)
    return parser


def _apply_overrides(settings: WatchSettings, args: argparse.Namespace) -> WatchSettings:
    if args.repo:
        settings.repo = args.repo
    if args.state_file:
        settings.state_file = args.state_file
    if getattr(args, "startup_delay", None) is not None:
        settings.startup_delay = args.startup_delay
    if getattr(args, "interval", None) is not None:
        settings.poll_interval = args.interval
    return settings


def _print_event(event: UpdateEvent) -> None:
    print(f"New release available: {format_version(event.new)} (was {format_version(event.old)})")


def build_scheduler(settings: WatchSettings) -> PollingScheduler:
    """Wire a scheduler from settings, printing update events to stdout."""
    fetcher = ReleaseFetcher(
        repo=settings.repo,
        user_agent=settings.user_agent,
        timeout=settings.request_timeout,
    )
    return PollingScheduler(
        VersionStore(settings.state_path()),
        fetcher,
        _print_event,
        startup_delay=settings.startup_delay,
        poll_interval=settings.poll_interval,
    )


def _run_command(settings: WatchSettings) -> int:
    """Handle the 'run' subcommand."""
    scheduler = build_scheduler(settings)

    # Graceful shutdown on Ctrl+C
    shutdown = False

    def _signal_handler(sig: int, frame: object) -> None:
        nonlocal shutdown
        print("\nShutting down release watcher...")
        shutdown = True

    signal.signal(signal.SIGINT, _signal_handler)

    print(
        f"Watching {settings.repo}: first check in {settings.startup_delay:g}s,"
        f" then every {settings.poll_interval:g}s"
    )
    scheduler.start()
    try:
        while not shutdown and scheduler.running:
            scheduler.wait(0.5)
    finally:
        scheduler.stop()
    return 0


def _check_command(settings: WatchSettings) -> int:
    """Handle the 'check' subcommand."""
    scheduler = build_scheduler(settings)
    scheduler.run_cycle()

    outcome = scheduler.last_outcome
    if outcome is CycleOutcome.SKIPPED:
        print(f"Error: Could not fetch the latest release of {settings.repo}", file=sys.stderr)
        return 1
    if outcome is CycleOutcome.UNCHANGED:
        print(f"No new release (known: {format_version(scheduler.current)})")
    elif outcome is CycleOutcome.BASELINE:
        print(f"Recorded baseline release {format_version(scheduler.current)}")
    return 0


def _show_command(settings: WatchSettings) -> int:
    """Handle the 'show' subcommand."""
    state = VersionStore(settings.state_path()).load_state()
    if not state.found:
        print("No stored version")
        return 1
    print(format_version(state.version))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    settings = _apply_overrides(load_settings(), args)
    if args.command == "run":
        return _run_command(settings)
    elif args.command == "check":
        return _check_command(settings)
    else:
        return _show_command(settings)


if __name__ == "__main__":
    sys.exit(main())
