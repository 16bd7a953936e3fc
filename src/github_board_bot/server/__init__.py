"""FastAPI webhook adapter for github-board-bot.

Design intent:
- Keep report logic in `github_board_bot.reports` and `github_board_bot.bot`
- Keep transport concerns (routing, streaming replies) here
"""

from __future__ import annotations

__all__ = ["create_app"]

from github_board_bot.server.app import create_app
