"""Run a single board report and turn its results into a chat message."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime

from github_board_bot.config import BoardSettings
from github_board_bot.github.client import IssueTrackerClient
from github_board_bot.github.models import IssueRecord
from github_board_bot.reports.queries import ReportKind, build_query
from github_board_bot.reports.render import render_issue

logger = logging.getLogger(__name__)


def reject_pull_requests(records: Iterable[IssueRecord]) -> list[IssueRecord]:
    return [record for record in records if not record.is_pull_request]


def format_report(
    label: str,
    records: Sequence[IssueRecord],
    org_project: str,
    workflow_labels: Iterable[str],
    *,
    now: datetime | None = None,
) -> str:
    """Build the report message, keeping records in the order they were given."""

    if not records:
        return f"No {label} were found for {org_project}"

    workflow_labels = tuple(workflow_labels)
    lines = [f"These {label} were found for {org_project}:"]
    lines.extend(f"* {render_issue(r, workflow_labels, now=now)}" for r in records)
    return "\n".join(lines)


class ReportRunner:
    """Fetches, filters and formats board reports for one GitHub client."""

    def __init__(self, *, client: IssueTrackerClient, settings: BoardSettings) -> None:
        self._client = client
        self._settings = settings

    async def run(
        self,
        kind: ReportKind,
        org_project: str,
        *,
        now: datetime | None = None,
    ) -> str:
        """Produce the message for one report.

        Raises:
            UpstreamQueryError: If the GitHub request fails. Not retried.
        """

        query = build_query(kind, org_project, self._settings, now=now)
        records = await self._client.fetch_records(query)

        if query.exclude_pull_requests:
            kept = reject_pull_requests(records)
            if len(kept) != len(records):
                logger.debug(
                    "Dropped pull requests from issue report",
                    extra={"report": kind.value, "dropped": len(records) - len(kept)},
                )
            records = kept

        return format_report(
            kind.label,
            records,
            org_project,
            self._settings.workflow_labels,
            now=now,
        )
