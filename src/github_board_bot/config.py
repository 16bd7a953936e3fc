"""Configuration for the board bot.

Configuration is loaded once per process from:
- environment variables
- and a local `.env` file (if present)

The token variable is `BOARD_GITHUB_TOKEN` rather than `GITHUB_TOKEN` so the bot
does not pick up credentials meant for other tools.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BoardSettings(BaseSettings):
    """Process-wide, read-only settings for the board reports.

    Environment variables:
    - BOARD_GITHUB_TOKEN
    - GITHUB_BASE_URL                 (optional)
    - BOARD_DEFAULT_ORG               (optional)
    - BOARD_WIP_LABEL
    - BOARD_REVIEW_LABEL
    - BOARD_WORKFLOW_LABELS           (comma separated, e.g. "Backlog,In Progress")
    - BOARD_HOST                      (optional)
    - BOARD_REQUEST_TIMEOUT_SECONDS   (optional)
    - LOG_LEVEL                       (optional)

    Notes:
        Tests can bypass the env file via `BoardSettings(_env_file=None, ...)`.
        Instances are frozen; pass them explicitly to whatever needs them.
    """

    github_token: str = Field(
        default="",
        validation_alias="BOARD_GITHUB_TOKEN",
        description="GitHub token used for API authentication",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )

    default_org: str = Field(
        default="",
        validation_alias="BOARD_DEFAULT_ORG",
        description="Organization used when the command names only a project",
    )
    wip_label: str = Field(
        default="In Progress",
        validation_alias="BOARD_WIP_LABEL",
        description="Label marking work in progress issues",
    )
    review_label: str = Field(
        default="In Review",
        validation_alias="BOARD_REVIEW_LABEL",
        description="Label marking issues in review",
    )
    workflow_labels_raw: str = Field(
        default="",
        validation_alias="BOARD_WORKFLOW_LABELS",
        description=(
            "Comma-separated board column labels. They are hidden from hashtags and "
            "excluded by the inbox search."
        ),
    )

    board_host: str = Field(
        default="waffle.io",
        validation_alias="BOARD_HOST",
        description="Host of the board UI linked in the acknowledgment message",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        validation_alias="BOARD_REQUEST_TIMEOUT_SECONDS",
        description="Timeout applied to each GitHub API request",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    @property
    def workflow_labels(self) -> tuple[str, ...]:
        """Workflow label names in configured order."""

        return tuple(p.strip() for p in self.workflow_labels_raw.split(",") if p.strip())

    def board_url(self, org_project: str) -> str:
        return f"https://{self.board_host.strip('/')}/{org_project}"
