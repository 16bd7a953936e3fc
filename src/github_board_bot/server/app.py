"""FastAPI app factory.

A chat host (Slack outgoing webhook, Hubot adapter, etc.) POSTs the message text to
`/api/v1/commands`. Replies are streamed back as NDJSON, one `{"text": ...}` object per
chat message, in the order they should be posted.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator

from fastapi import FastAPI, HTTPException
from fastapi.responses import StreamingResponse

from github_board_bot import __version__
from github_board_bot.bot.handler import COMMAND_PATTERN, USAGE, CommandHandler
from github_board_bot.config import BoardSettings
from github_board_bot.github.client import IssueTrackerClient
from github_board_bot.reports.runner import ReportRunner
from github_board_bot.server.models import ChatCommand, ChatMessage

logger = logging.getLogger(__name__)


def create_app(settings: BoardSettings | None = None) -> FastAPI:
    settings = settings or BoardSettings()

    app = FastAPI(
        title="GitHub Board Bot",
        version=__version__,
        description="Chat webhook that snapshots recent activity on a GitHub project board.",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )
    app.state.settings = settings

    @app.get("/api/v1/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    @app.post("/api/v1/commands")
    async def run_command(command: ChatCommand) -> StreamingResponse:
        match = COMMAND_PATTERN.match(command.text)
        if match is None:
            raise HTTPException(status_code=400, detail=f"Not a board command. {USAGE}")
        if not settings.github_token.strip():
            raise HTTPException(
                status_code=409,
                detail="BOARD_GITHUB_TOKEN is required for this endpoint",
            )

        client = IssueTrackerClient(
            token=settings.github_token,
            base_url=settings.github_base_url,
            timeout=settings.request_timeout_seconds,
        )
        handler = CommandHandler(
            runner=ReportRunner(client=client, settings=settings),
            settings=settings,
        )
        return StreamingResponse(
            _stream_replies(handler, client, match.group(1)),
            media_type="application/x-ndjson",
        )

    return app


async def _stream_replies(
    handler: CommandHandler,
    client: IssueTrackerClient,
    argument: str,
) -> AsyncIterator[str]:
    queue: asyncio.Queue[str | None] = asyncio.Queue()

    async def send(text: str) -> None:
        await queue.put(text)

    async def produce() -> None:
        try:
            await handler.handle(argument, send)
        finally:
            client.close()
            await queue.put(None)

    task = asyncio.create_task(produce())
    try:
        while (text := await queue.get()) is not None:
            yield ChatMessage(text=text).model_dump_json() + "\n"

        # Re-raise anything the handler did not turn into a chat message.
        await task
    finally:
        # The chat host hung up mid-stream; stop issuing GitHub requests.
        if not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
