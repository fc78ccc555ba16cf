"""Assemble the readiness report as a DataFrame and emit it as TSV."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import IO

import pandas as pd

from jira_readiness.analysis import analyze_issue, check_issue
from jira_readiness.core.config import REPORT_COLUMNS, SETTINGS, TIMEZONE, UNASSIGNED_SECTION
from jira_readiness.core.models import IssueModel

from .components import ComponentsCollection
from .sheets import (
    market_problem_cell,
    sheet_ballot,
    sheet_check_status,
    sheet_date,
    sheet_link,
    sheet_progress_bar,
    sheet_sorted_messages,
    sheet_story_points_bar,
)

logger = logging.getLogger(__name__)


def issue_report_row(
    issue: IssueModel,
    component: str | None = None,
    tz: str | None = TIMEZONE,
) -> dict[str, str]:
    """Analyse and check one epic, returning its formatted report cells."""
    a = analyze_issue(issue, component)
    r = check_issue(a)
    return {
        "issue": sheet_link(issue.link, issue.key),
        "summary": issue.summary or "",
        "market_problem": market_problem_cell(issue),
        "priority": issue.priority or "",
        "status": issue.status or "",
        "owner": issue.owner or "",
        "qe_assignee": issue.qe_assignee or "",
        "issues_progress": sheet_progress_bar(a.issues_completion.completed, a.issues_completion.total),
        "points_progress": sheet_story_points_bar(
            a.points_completion.completed,
            a.points_completion.total,
            a.points_completion.unknown == 0,
        ),
        "comment_date": sheet_date(a.comment_date, tz),
        "ready": sheet_ballot(r.ready),
        "check_status": sheet_check_status(r.status),
        "messages": sheet_sorted_messages(r.messages),
    }


def _section_row(title: str) -> dict[str, str]:
    row = dict.fromkeys(REPORT_COLUMNS, "")
    row[REPORT_COLUMNS[0]] = title
    return row


def build_report_frame(
    components: ComponentsCollection,
    exclude: Iterable[str] = (),
    tz: str | None = TIMEZONE,
) -> pd.DataFrame:
    """Lay out one section per component followed by the unassigned epics.

    Each section starts with a header row carrying the component name in the
    first column; epics of a component are analysed scoped to it. Header rows,
    the unassigned one included, are padded with empty cells to the full width.
    """
    excluded = set(exclude)
    rows: list[dict[str, str]] = []
    for item in components:
        if item.name in excluded:
            logger.debug("Skipping excluded component %s", item.name)
            continue
        rows.append(_section_row(item.name))
        rows.extend(issue_report_row(i, item.name, tz) for i in item.issues)
    rows.append(_section_row(UNASSIGNED_SECTION))
    rows.extend(issue_report_row(i, tz=tz) for i in components.orphans)
    return pd.DataFrame(rows, columns=list(REPORT_COLUMNS))


def build_verdict_frame(issues: Iterable[IssueModel], component: str | None = None) -> pd.DataFrame:
    """Tabulate raw verdict values (no spreadsheet formulas) for on-screen tables."""
    rows = []
    for issue in issues:
        a = analyze_issue(issue, component)
        r = check_issue(a)
        rows.append(
            {
                "key": issue.key,
                "summary": issue.summary,
                "priority": issue.priority,
                "status": issue.status,
                "owner": issue.owner,
                "qe_assignee": issue.qe_assignee,
                "issues_completed": a.issues_completion.completed,
                "issues_total": a.issues_completion.total,
                "points_completed": a.points_completion.completed,
                "points_total": a.points_completion.total,
                "points_unknown": a.points_completion.unknown,
                "comment_date": a.comment_date,
                "ready": r.ready,
                "check_status": str(r.status),
                "messages": r.messages_string(),
            }
        )
    return pd.DataFrame(rows)


def write_report(frame: pd.DataFrame, stream: IO[str]) -> None:
    frame.to_csv(stream, sep=SETTINGS.report_separator, header=False, index=False)
