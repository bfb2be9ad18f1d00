"""
src/slido_poll/cli.py
Command line entry point: ``poll-create <event name> <poll.json>...``
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List, Optional

from .config import SUPPORTED_BROWSERS, load_config
from .core.runner import PollRunner
from .loader import credential_from_env, load_credential, load_poll
from .utils.env_utils import load_env
from .utils.logger import logger, progress, set_log_profile, step, success
from .utils.progress import print_poll_table

EXIT_OK = 0
EXIT_FAILED = 1


def positive_ms(raw: str) -> int:
    """argparse type for millisecond values; 0 would disable Playwright's timeout."""
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid millisecond value: {raw!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive number of milliseconds, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="poll-create",
        description="Create multiple-choice polls in a Slido event by driving the web UI",
    )
    parser.add_argument("event", help="Event name, matched exactly as displayed")
    parser.add_argument("polls", nargs="+", help="Poll definition JSON files, created in this order")
    parser.add_argument("--credential", help="Credential JSON file (default: CREDENTIAL_PATH or credential.json)")
    parser.add_argument("--browser", choices=list(SUPPORTED_BROWSERS), help="Browser engine override")
    parser.add_argument("--channel", help="Chromium channel: chrome|chrome-beta|msedge|msedge-beta")
    headless = parser.add_mutually_exclusive_group()
    headless.add_argument("--headed", dest="headless", action="store_false", default=None, help="Show the browser window")
    headless.add_argument("--headless", dest="headless", action="store_true", default=None, help="Run without a browser window")
    parser.add_argument("--timeout-ms", type=positive_ms, help="Per-operation timeout in milliseconds")
    parser.add_argument("--dry-run", action="store_true", help="Show the parsed polls and exit (no browser)")
    parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_env()
    args = build_parser().parse_args(argv)
    if args.debug:
        set_log_profile("debug")

    try:
        config = load_config().with_overrides(
            browser_name=args.browser,
            channel=args.channel,
            headless=args.headless,
            timeout_ms=args.timeout_ms,
            credential_path=args.credential,
        )
    except ValueError as exc:
        logger.error(f"Invalid configuration: {exc}")
        return EXIT_FAILED

    step(f"Using {args.event} as event name")
    try:
        polls = [load_poll(path) for path in args.polls]
    except (OSError, ValueError) as exc:
        logger.error(f"Could not read poll definitions: {exc}")
        return EXIT_FAILED
    print_poll_table(polls)

    if args.dry_run:
        success(f"Dry run: {len(polls)} poll(s) parsed, nothing submitted")
        return EXIT_OK

    try:
        credential = credential_from_env() or load_credential(config.credential_path)
    except (OSError, ValueError) as exc:
        logger.error(f"Could not read credential: {exc}")
        return EXIT_FAILED

    runner = PollRunner(config)
    result = asyncio.run(runner.run(credential, args.event, polls))
    if not result.ok:
        # The failure itself was already reported by the runner.
        progress(f"{result.created}/{len(polls)} poll(s) created before the run stopped")
        return EXIT_FAILED
    success(result.message)
    return EXIT_OK


def run() -> None:
    try:
        code = main()
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    run()
