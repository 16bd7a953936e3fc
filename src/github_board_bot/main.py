"""CLI entrypoint.

Runs the board command outside of a chat host and prints each reply as it is produced.
Handy for checking configuration and labels before wiring up the bot.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from github_board_bot import __version__
from github_board_bot.bot.handler import CommandHandler
from github_board_bot.config import BoardSettings
from github_board_bot.github.client import IssueTrackerClient
from github_board_bot.logging import configure_logging
from github_board_bot.reports.runner import ReportRunner

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="github-board",
        description="Snapshot recent activity on a GitHub project board",
    )
    parser.add_argument("--version", action="version", version=f"github-board-bot {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    board = subparsers.add_parser("board", help="Query for recent project activity")
    board.add_argument(
        "project",
        help="Project as '<project>' (default organization) or '<org>/<project>'",
    )

    return parser


async def _print_message(text: str) -> None:
    print(text)
    print()


async def run_board(settings: BoardSettings, argument: str) -> None:
    client = IssueTrackerClient(
        token=settings.github_token,
        base_url=settings.github_base_url,
        timeout=settings.request_timeout_seconds,
    )
    try:
        runner = ReportRunner(client=client, settings=settings)
        handler = CommandHandler(runner=runner, settings=settings)
        await handler.handle(argument, _print_message)
    finally:
        client.close()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = BoardSettings()
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    if not settings.github_token.strip():
        logger.error("BOARD_GITHUB_TOKEN is not set")
        print("BOARD_GITHUB_TOKEN is required", file=sys.stderr)
        return 2

    try:
        if args.command == "board":
            asyncio.run(run_board(settings, args.project))
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
