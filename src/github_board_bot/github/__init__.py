"""GitHub API access for the board reports."""

from github_board_bot.github.client import IssueTrackerClient, UpstreamQueryError
from github_board_bot.github.models import IssueRecord, Label, Owner

__all__ = [
    "IssueRecord",
    "IssueTrackerClient",
    "Label",
    "Owner",
    "UpstreamQueryError",
]
