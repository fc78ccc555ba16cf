"""Spreadsheet cell formatters (formulas and glyphs) for the readiness report."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

import pytz

from jira_readiness.analysis.result import CheckStatus
from jira_readiness.core.config import (
    SPARKLINE_COMPLETED_COLOR,
    SPARKLINE_REMAINING_COLOR,
    TIMEZONE,
)
from jira_readiness.core.models import IssueModel

DASH = "—"
CHECK_MARK = "✓"
BALLOT_X = "✗"


def sheet_link(link: str | None, text: str | None) -> str:
    return f'=HYPERLINK("{link or ""}","{text or ""}")'


def market_problem_cell(issue: IssueModel) -> str:
    mp = issue.market_problem
    if mp is None:
        return sheet_link("", "")
    return sheet_link(mp.link, mp.summary)


def sheet_ballot(value: bool) -> str:
    return CHECK_MARK if value else BALLOT_X


def sheet_progress_bar(value: int, maximum: int) -> str:
    """Render completion as an in-cell bar chart; a dash when empty or inconsistent."""
    if value > maximum or (maximum == 0 and value == 0):
        return DASH
    return (
        f"=SPARKLINE({{{value},{maximum - value}}},"
        f'{{"charttype","bar";"color1","{SPARKLINE_COMPLETED_COLOR}";'
        f'"color2","{SPARKLINE_REMAINING_COLOR}"}})'
    )


def sheet_story_points_bar(value: int, maximum: int, complete: bool) -> str:
    """Like sheet_progress_bar but a dash when some stories lack points."""
    if not complete:
        return DASH
    return sheet_progress_bar(value, maximum)


def sheet_check_status(status: CheckStatus) -> str:
    if status == CheckStatus.NONE:
        return DASH
    return str(status)


def sheet_date(value: datetime | None, tz: str | None = TIMEZONE) -> str:
    """Format a timestamp as a day, in ``tz`` or else in its own UTC offset."""
    if value is None:
        return DASH
    if value.tzinfo is None:
        value = pytz.UTC.localize(value)
    if tz:
        value = value.astimezone(pytz.timezone(tz))
    return value.strftime("%Y-%m-%d")


def sheet_sorted_messages(messages: Iterable[str], sep: str = ",") -> str:
    return sep.join(sorted(messages))
