"""Board reports: query construction, rendering and execution."""

from github_board_bot.reports.queries import ReportKind, ReportQuery, build_query
from github_board_bot.reports.render import render_issue
from github_board_bot.reports.runner import ReportRunner, format_report

__all__ = [
    "ReportKind",
    "ReportQuery",
    "ReportRunner",
    "build_query",
    "format_report",
    "render_issue",
]
