"""GitHub Board Bot.

A chat command that snapshots a GitHub project board:
- recently closed issues
- issues in review and in progress
- open pull requests
- untriaged inbox issues
"""

__version__ = "0.1.0"

from github_board_bot.config import BoardSettings

__all__ = ["__version__", "BoardSettings"]
