"""Unit tests for the board chat command."""

from __future__ import annotations

import pytest

from github_board_bot.bot.handler import (
    COMMAND_PATTERN,
    REPORT_SEQUENCE,
    CommandHandler,
    MalformedArgumentError,
    parse_project_argument,
)
from github_board_bot.reports.queries import ReportKind
from github_board_bot.reports.runner import ReportRunner


class Outbox:
    def __init__(self) -> None:
        self.messages: list[str] = []

    async def send(self, text: str) -> None:
        self.messages.append(text)


def _handler(settings, client) -> CommandHandler:
    return CommandHandler(runner=ReportRunner(client=client, settings=settings), settings=settings)


def test_project_only_uses_default_org() -> None:
    assert parse_project_argument("myproject", "acme") == "acme/myproject"


def test_explicit_org_overrides_default() -> None:
    assert parse_project_argument("other/myproject", "acme") == "other/myproject"


def test_last_two_segments_win() -> None:
    assert parse_project_argument("github.com/other/myproject", "acme") == "other/myproject"


def test_empty_org_segment_falls_back_to_default() -> None:
    assert parse_project_argument("/myproject", "acme") == "acme/myproject"


@pytest.mark.parametrize("argument", ["acme/", "", "/"])
def test_missing_project_is_rejected(argument: str) -> None:
    with pytest.raises(MalformedArgumentError):
        parse_project_argument(argument, "acme")


def test_missing_default_org_is_rejected() -> None:
    with pytest.raises(MalformedArgumentError):
        parse_project_argument("myproject", "")


def test_command_pattern_is_case_insensitive() -> None:
    match = COMMAND_PATTERN.match("hubot Board acme/widgets")

    assert match is not None
    assert match.group(1) == "acme/widgets"
    assert COMMAND_PATTERN.match("hubot dashboard") is None


@pytest.mark.parametrize(
    ("text", "argument"),
    [
        ("board widgets", "widgets"),
        ("@hubot: board acme/widgets", "acme/widgets"),
        ("  hubot, BOARD widgets  ", "widgets"),
    ],
)
def test_command_pattern_accepts_addressed_commands(text: str, argument: str) -> None:
    match = COMMAND_PATTERN.match(text)

    assert match is not None
    assert match.group(1) == argument


@pytest.mark.parametrize(
    "text",
    [
        "let's look at the board tomorrow",
        "hubot board acme/widgets please",
        "the board widgets are broken",
    ],
)
def test_command_pattern_ignores_prose_mentioning_board(text: str) -> None:
    assert COMMAND_PATTERN.match(text) is None


@pytest.mark.asyncio
async def test_respond_ignores_prose_mentioning_board(settings, tracker_factory) -> None:
    client = tracker_factory()
    outbox = Outbox()

    handled = await _handler(settings, client).respond("let's look at the board tomorrow", outbox.send)

    assert handled is False
    assert outbox.messages == []
    assert client.queries == []


@pytest.mark.asyncio
async def test_handler_sends_reports_in_fixed_order(settings, tracker_factory) -> None:
    client = tracker_factory()
    outbox = Outbox()

    await _handler(settings, client).handle("widgets", outbox.send)

    assert outbox.messages == [
        "Generating project snapshot for acme/widgets...",
        "https://waffle.io/acme/widgets",
        "No recently closed issues were found for acme/widgets",
        "No issues in review were found for acme/widgets",
        "No open pull requests were found for acme/widgets",
        "No in progress issues were found for acme/widgets",
        "No new issues were found for acme/widgets",
    ]
    assert [q.kind for q in client.queries] == list(REPORT_SEQUENCE)
    assert REPORT_SEQUENCE == (
        ReportKind.RECENTLY_CLOSED,
        ReportKind.IN_REVIEW,
        ReportKind.OPEN_PULL_REQUESTS,
        ReportKind.IN_PROGRESS,
        ReportKind.INBOX,
    )


@pytest.mark.asyncio
async def test_each_report_is_sent_before_the_next_query(settings, tracker_factory) -> None:
    client = tracker_factory()
    seen: list[tuple[int, int]] = []

    async def send(text: str) -> None:
        seen.append((len(seen), len(client.queries)))

    await _handler(settings, client).handle("acme/widgets", send)

    # message index -> number of queries issued when it was sent
    assert seen == [(0, 0), (1, 0), (2, 1), (3, 2), (4, 3), (5, 4), (6, 5)]


@pytest.mark.asyncio
async def test_upstream_failure_stops_remaining_reports(settings, tracker_factory) -> None:
    client = tracker_factory(fail_on=ReportKind.OPEN_PULL_REQUESTS)
    outbox = Outbox()

    await _handler(settings, client).handle("acme/widgets", outbox.send)

    assert outbox.messages[:2] == [
        "Generating project snapshot for acme/widgets...",
        "https://waffle.io/acme/widgets",
    ]
    assert outbox.messages[-1] == (
        "Failed to load open pull requests for acme/widgets: HTTP 502: Bad Gateway"
    )
    assert len(outbox.messages) == 5
    assert [q.kind for q in client.queries] == [
        ReportKind.RECENTLY_CLOSED,
        ReportKind.IN_REVIEW,
        ReportKind.OPEN_PULL_REQUESTS,
    ]


@pytest.mark.asyncio
async def test_malformed_argument_replies_with_usage(settings, tracker_factory) -> None:
    client = tracker_factory()
    outbox = Outbox()

    await _handler(settings, client).handle("acme/", outbox.send)

    assert len(outbox.messages) == 1
    assert "Usage: board <project> or board <org>/<project>" in outbox.messages[0]
    assert client.queries == []


@pytest.mark.asyncio
async def test_respond_ignores_other_messages(settings, tracker_factory) -> None:
    client = tracker_factory()
    outbox = Outbox()
    handler = _handler(settings, client)

    assert await handler.respond("hubot ping", outbox.send) is False
    assert outbox.messages == []

    assert await handler.respond("hubot BOARD other/thing", outbox.send) is True
    assert outbox.messages[0] == "Generating project snapshot for other/thing..."
