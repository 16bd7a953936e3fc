"""Report kinds and the GitHub queries behind them.

See:
- https://docs.github.com/en/rest/issues/issues#list-repository-issues
- https://docs.github.com/en/rest/pulls/pulls#list-pull-requests
- https://docs.github.com/en/rest/search/search#search-issues-and-pull-requests
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum
from types import MappingProxyType

from github_board_bot.config import BoardSettings

RECENTLY_CLOSED_WINDOW = timedelta(days=7)
RECENTLY_CLOSED_PAGE_SIZE = 10


class ReportKind(str, Enum):
    RECENTLY_CLOSED = "recently_closed"
    IN_REVIEW = "in_review"
    OPEN_PULL_REQUESTS = "open_pull_requests"
    IN_PROGRESS = "in_progress"
    INBOX = "inbox"

    @property
    def label(self) -> str:
        """Plural noun phrase used in report messages."""

        return _REPORT_LABELS[self]


_REPORT_LABELS: dict[ReportKind, str] = {
    ReportKind.RECENTLY_CLOSED: "recently closed issues",
    ReportKind.IN_REVIEW: "issues in review",
    ReportKind.OPEN_PULL_REQUESTS: "open pull requests",
    ReportKind.IN_PROGRESS: "in progress issues",
    ReportKind.INBOX: "new issues",
}


@dataclass(frozen=True, slots=True)
class ReportQuery:
    """A fully-formed GET request for one report."""

    kind: ReportKind
    path: str
    params: Mapping[str, str] = field(default_factory=dict)

    # Search responses wrap the records in {"items": [...]}.
    results_key: str | None = None

    # The issues endpoint mixes pull requests into its results.
    exclude_pull_requests: bool = False

    def __post_init__(self) -> None:
        # Read-only view over a private copy of the caller's parameters.
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))


def recent_closed_since(now: datetime | None = None) -> str:
    """Start of the recently-closed window as an ISO-8601 UTC timestamp."""

    now = now or datetime.now(tz=UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    since = (now - RECENTLY_CLOSED_WINDOW).astimezone(UTC)
    return since.strftime("%Y-%m-%dT%H:%M:%SZ")


def inbox_search_query(org_project: str, workflow_labels: tuple[str, ...]) -> str:
    """Open issues in the repo that carry none of the workflow labels."""

    parts = ["type:issue", "is:open", f"repo:{org_project}"]
    parts.extend(f'-label:"{label}"' for label in workflow_labels)
    return " ".join(parts)


def _issues_path(org_project: str) -> str:
    return f"/repos/{org_project}/issues"


def build_query(
    kind: ReportKind,
    org_project: str,
    settings: BoardSettings,
    *,
    now: datetime | None = None,
) -> ReportQuery:
    if kind is ReportKind.IN_PROGRESS:
        return ReportQuery(
            kind=kind,
            path=_issues_path(org_project),
            params={
                "filter": "all",
                "labels": settings.wip_label,
                "sort": "updated",
                "direction": "asc",
            },
            exclude_pull_requests=True,
        )

    if kind is ReportKind.IN_REVIEW:
        return ReportQuery(
            kind=kind,
            path=_issues_path(org_project),
            params={
                "filter": "all",
                "labels": settings.review_label,
                "sort": "updated",
                "direction": "asc",
            },
            exclude_pull_requests=True,
        )

    if kind is ReportKind.RECENTLY_CLOSED:
        return ReportQuery(
            kind=kind,
            path=_issues_path(org_project),
            params={
                "filter": "all",
                "state": "closed",
                "sort": "updated",
                "direction": "desc",
                "per_page": str(RECENTLY_CLOSED_PAGE_SIZE),
                "since": recent_closed_since(now),
            },
            exclude_pull_requests=True,
        )

    if kind is ReportKind.INBOX:
        return ReportQuery(
            kind=kind,
            path="/search/issues",
            params={
                "q": inbox_search_query(org_project, settings.workflow_labels),
                "sort": "created",
                "order": "asc",
            },
            results_key="items",
        )

    if kind is ReportKind.OPEN_PULL_REQUESTS:
        return ReportQuery(
            kind=kind,
            path=f"/repos/{org_project}/pulls",
            params={"sort": "updated", "direction": "asc"},
        )

    raise ValueError(f"Unknown report kind: {kind!r}")
