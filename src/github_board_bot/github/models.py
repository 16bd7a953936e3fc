"""Typed views over GitHub issue and pull request payloads.

Only the fields the board reports read are modelled; everything else in the REST
payload is ignored. The same model serves issues, search results and pull requests
since all three share this shape.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Owner(BaseModel):
    """A GitHub account (assignee or issue author)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    login: str


class Label(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str


class IssueRecord(BaseModel):
    """An issue or pull request as returned by the issues, search or pulls endpoints."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    number: int
    title: str
    labels: list[Label] = Field(default_factory=list)
    assignee: Owner | None = None
    user: Owner
    updated_at: datetime
    closed_at: datetime | None = None

    # Present only on pull requests returned by the generic issues endpoint.
    pull_request: dict[str, Any] | None = None

    @property
    def is_pull_request(self) -> bool:
        return self.pull_request is not None

    @property
    def owner(self) -> Owner:
        """Assignee when set, otherwise the author."""

        return self.assignee if self.assignee is not None else self.user

    @property
    def last_updated_at(self) -> datetime:
        return self.closed_at if self.closed_at is not None else self.updated_at
