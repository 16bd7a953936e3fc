"""GitHub REST client for the board reports.

Wraps a `requests.Session` so report code never touches HTTP directly and tests can
inject a fake session. Calls are blocking underneath; the async entry points run them
in a worker thread so the chat event loop stays responsive.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import requests
from pydantic import ValidationError

from github_board_bot.github.models import IssueRecord

if TYPE_CHECKING:
    from github_board_bot.reports.queries import ReportQuery

logger = logging.getLogger(__name__)


class UpstreamQueryError(Exception):
    """Raised when a GitHub API call fails or returns an unusable body."""

    def __init__(self, path: str, reason: str, *, status_code: int | None = None) -> None:
        super().__init__(f"GET {path} failed: {reason}")
        self.path = path
        self.reason = reason
        self.status_code = status_code


class IssueTrackerClient:
    """Read-only access to the issues, pulls and search endpoints."""

    def __init__(
        self,
        *,
        token: str,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")

        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "github-board-bot",
            }
        )

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def _get_json_sync(self, path: str, params: Mapping[str, str]) -> Any:
        logger.debug("GitHub GET", extra={"path": path, "params": dict(params)})
        try:
            resp = self._session.get(self._url(path), params=dict(params), timeout=self._timeout)
        except requests.RequestException as e:
            raise UpstreamQueryError(path, str(e)) from e

        if not resp.ok:
            detail = resp.reason or "request failed"
            try:
                body = resp.json()
            except ValueError:
                body = None
            message = body.get("message") if isinstance(body, dict) else None
            if isinstance(message, str) and message:
                detail = message
            raise UpstreamQueryError(
                path, f"HTTP {resp.status_code}: {detail}", status_code=resp.status_code
            )

        try:
            return resp.json()
        except ValueError as e:
            raise UpstreamQueryError(path, "response body is not JSON") from e

    async def get_json(self, path: str, params: Mapping[str, str] | None = None) -> Any:
        """GET a single page of `path`; no pagination is followed."""

        return await asyncio.to_thread(self._get_json_sync, path, params or {})

    async def fetch_records(self, query: ReportQuery) -> list[IssueRecord]:
        """Run a report query and parse the returned issues / pull requests."""

        data = await self.get_json(query.path, query.params)

        if query.results_key is not None:
            if not isinstance(data, dict) or query.results_key not in data:
                raise UpstreamQueryError(
                    query.path, f"response has no {query.results_key!r} field"
                )
            data = data[query.results_key]

        if not isinstance(data, list):
            raise UpstreamQueryError(query.path, "expected a JSON array of records")

        try:
            records = [IssueRecord.model_validate(item) for item in data]
        except ValidationError as e:
            raise UpstreamQueryError(query.path, f"malformed record: {e}") from e

        logger.info(
            "Fetched report records",
            extra={"report": query.kind.value, "path": query.path, "count": len(records)},
        )
        return records

    def close(self) -> None:
        """Close the underlying HTTP session."""

        self._session.close()
