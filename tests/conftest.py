"""Test configuration and fixtures."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from github_board_bot.config import BoardSettings
from github_board_bot.github.client import UpstreamQueryError
from github_board_bot.github.models import IssueRecord
from github_board_bot.reports.queries import ReportKind, ReportQuery

NOW = datetime(2025, 1, 10, 12, 0, tzinfo=UTC)


def make_issue(
    number: int,
    title: str = "Something",
    *,
    labels: list[str] | None = None,
    assignee: str | None = None,
    user: str = "author",
    updated_at: datetime = NOW,
    closed_at: datetime | None = None,
    pull_request: bool = False,
) -> IssueRecord:
    payload: dict[str, Any] = {
        "number": number,
        "title": title,
        "labels": [{"name": name, "color": "ededed"} for name in labels or []],
        "assignee": {"login": assignee} if assignee else None,
        "user": {"login": user},
        "updated_at": updated_at.isoformat(),
        "closed_at": closed_at.isoformat() if closed_at else None,
        "html_url": f"https://github.com/acme/widgets/issues/{number}",
    }
    if pull_request:
        payload["pull_request"] = {"url": f"https://api.github.com/repos/acme/widgets/pulls/{number}"}
    return IssueRecord.model_validate(payload)


def days_ago(days: float) -> datetime:
    return NOW - timedelta(days=days)


class FakeTrackerClient:
    """Stands in for IssueTrackerClient; returns canned records per report kind."""

    def __init__(
        self,
        records: dict[ReportKind, list[IssueRecord]] | None = None,
        *,
        fail_on: ReportKind | None = None,
    ) -> None:
        self.records = records or {}
        self.fail_on = fail_on
        self.queries: list[ReportQuery] = []
        self.closed = False

    async def fetch_records(self, query: ReportQuery) -> list[IssueRecord]:
        self.queries.append(query)
        if query.kind is self.fail_on:
            raise UpstreamQueryError(query.path, "HTTP 502: Bad Gateway", status_code=502)
        return list(self.records.get(query.kind, []))

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings() -> BoardSettings:
    """Provide settings that ignore any local .env file."""
    return BoardSettings(
        _env_file=None,
        github_token="test-token",
        default_org="acme",
        wip_label="In Progress",
        review_label="In Review",
        workflow_labels_raw="Backlog,In Progress,In Review",
        board_host="waffle.io",
    )


@pytest.fixture
def fake_client() -> FakeTrackerClient:
    return FakeTrackerClient()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture(name="make_issue")
def make_issue_fixture():
    return make_issue


@pytest.fixture(name="days_ago")
def days_ago_fixture():
    return days_ago


@pytest.fixture
def tracker_factory():
    return FakeTrackerClient
