"""Chat command handling."""

from github_board_bot.bot.handler import (
    COMMAND_PATTERN,
    REPORT_SEQUENCE,
    CommandHandler,
    MalformedArgumentError,
    parse_project_argument,
)

__all__ = [
    "COMMAND_PATTERN",
    "REPORT_SEQUENCE",
    "CommandHandler",
    "MalformedArgumentError",
    "parse_project_argument",
]
