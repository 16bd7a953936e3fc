"""The `board` chat command.

The hosting chat framework owns routing and delivery; it hands us the command text
and an async `send` callable. Replies go out in a fixed order:

1. acknowledgment + board link
2. recently closed issues
3. issues in review
4. open pull requests
5. in progress issues
6. inbox (untriaged) issues
"""

from __future__ import annotations

import logging
import re
from collections.abc import Awaitable, Callable
from datetime import datetime

from github_board_bot.config import BoardSettings
from github_board_bot.github.client import UpstreamQueryError
from github_board_bot.reports.queries import ReportKind
from github_board_bot.reports.runner import ReportRunner

logger = logging.getLogger(__name__)

SendMessage = Callable[[str], Awaitable[None]]

# Optional bot-name prefix ("hubot", "@bot:"), then the command and nothing else.
COMMAND_PATTERN = re.compile(r"^\s*(?:@?[\w.-]+[:,]?\s+)?board\s+(\S+)\s*$", re.IGNORECASE)

USAGE = "Usage: board <project> or board <org>/<project>"

REPORT_SEQUENCE: tuple[ReportKind, ...] = (
    ReportKind.RECENTLY_CLOSED,
    ReportKind.IN_REVIEW,
    ReportKind.OPEN_PULL_REQUESTS,
    ReportKind.IN_PROGRESS,
    ReportKind.INBOX,
)


class MalformedArgumentError(ValueError):
    """The command argument does not name a project."""


def parse_project_argument(argument: str, default_org: str) -> str:
    """Resolve `[<org>/]<project>` into `org/project`.

    With more than two segments the last two win, so a pasted `github.com/org/repo`
    still resolves.
    """

    segments = argument.strip().split("/")
    project = segments[-1].strip()
    org = segments[-2].strip() if len(segments) >= 2 else ""
    org = org or default_org.strip()

    if not project:
        raise MalformedArgumentError(f"No project name in {argument!r}")
    if not org:
        raise MalformedArgumentError(
            f"No organization in {argument!r} and no default organization is configured"
        )
    return f"{org}/{project}"


class CommandHandler:
    def __init__(self, *, runner: ReportRunner, settings: BoardSettings) -> None:
        self._runner = runner
        self._settings = settings

    async def respond(self, text: str, send: SendMessage) -> bool:
        """Handle `text` if it is a board command; return whether it was."""

        match = COMMAND_PATTERN.match(text)
        if match is None:
            return False
        await self.handle(match.group(1), send)
        return True

    async def handle(
        self,
        argument: str,
        send: SendMessage,
        *,
        now: datetime | None = None,
    ) -> None:
        try:
            org_project = parse_project_argument(argument, self._settings.default_org)
        except MalformedArgumentError as e:
            logger.warning(str(e), extra={"argument": argument})
            await send(f"{e}. {USAGE}")
            return

        logger.info("Generating board snapshot", extra={"org_project": org_project})
        await send(f"Generating project snapshot for {org_project}...")
        await send(self._settings.board_url(org_project))

        # Strictly sequential so messages always arrive in REPORT_SEQUENCE order.
        for kind in REPORT_SEQUENCE:
            try:
                message = await self._runner.run(kind, org_project, now=now)
            except UpstreamQueryError as e:
                logger.exception(
                    "Board report failed",
                    extra={"report": kind.value, "org_project": org_project},
                )
                await send(f"Failed to load {kind.label} for {org_project}: {e.reason}")
                return
            await send(message)
