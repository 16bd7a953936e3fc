"""One-line summaries of issues and pull requests."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime

from github_board_bot.github.models import IssueRecord


def hashtags_for(issue: IssueRecord, workflow_labels: Iterable[str]) -> str:
    """Topical labels as sorted `#name` tokens; workflow (column) labels are dropped."""

    hidden = set(workflow_labels)
    return " ".join(sorted("#" + label.name for label in issue.labels if label.name not in hidden))


def days_since_update(issue: IssueRecord, now: datetime | None = None) -> int:
    """Whole days elapsed since the issue was closed, or last updated if still open."""

    now = now or datetime.now(tz=UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    last = issue.last_updated_at
    if last.tzinfo is None:
        last = last.replace(tzinfo=UTC)
    return (now - last).days


def render_issue(
    issue: IssueRecord,
    workflow_labels: Iterable[str],
    *,
    now: datetime | None = None,
) -> str:
    """Render `#<number> [<N>d] @<owner> <title> <hashtags>`.

    The age token only appears once at least one full day has passed, and the
    hashtag list is left off entirely when no topical labels remain.
    """

    parts = [f"#{issue.number}"]

    days = days_since_update(issue, now)
    if days > 0:
        parts.append(f"[{days}d]")

    parts.append(f"@{issue.owner.login}")
    parts.append(issue.title)

    hashtags = hashtags_for(issue, workflow_labels)
    if hashtags:
        parts.append(hashtags)

    return " ".join(parts)
