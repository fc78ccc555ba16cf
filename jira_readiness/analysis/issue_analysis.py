"""Per-epic derivation of completion metrics and status comment signals (pure functions)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from jira_readiness.core.collection import IssueCollection, Progress
from jira_readiness.core.config import ACTIVITY_TYPES, STATUS_COMMENT_PREFIXES
from jira_readiness.core.models import IssueModel
from jira_readiness.core.predicates import (
    has_component,
    has_no_components,
    in_project,
    is_obsolete,
    of_type,
)

from .result import CheckStatus

_COMMENT_STATUS_BY_PREFIX: dict[str, CheckStatus] = dict(
    zip(STATUS_COMMENT_PREFIXES, (CheckStatus.GREEN, CheckStatus.YELLOW, CheckStatus.RED), strict=True)
)


@dataclass(slots=True, frozen=True)
class IssueAnalysis:
    issue: IssueModel
    component: str | None
    all_linked_issues: IssueCollection
    linked_issues: IssueCollection
    issues_completion: Progress
    points_completion: Progress
    num_activities: int
    issue_no_component: bool
    comment_status: CheckStatus = CheckStatus.NONE
    comment_date: datetime | None = None


def issue_comment_status(issue: IssueModel) -> tuple[CheckStatus, datetime | None]:
    """Return the status asserted by the most recent status comment of ``issue``.

    Comments are walked newest to oldest; the first one starting with
    ``GREEN:``, ``YELLOW:`` or ``RED:`` wins and its last update time is
    returned alongside. Issues without such a comment yield ``NONE``.
    """
    for comment in reversed(issue.comments):
        body = comment.body or ""
        for prefix, status in _COMMENT_STATUS_BY_PREFIX.items():
            if body.startswith(prefix):
                return status, comment.updated
    return CheckStatus.NONE, None


def analyze_issue(issue: IssueModel, component: str | None = None) -> IssueAnalysis:
    """Build the analysis of ``issue`` optionally scoped to a single component.

    Parameters
    ----------
    issue : IssueModel
        Epic with its linked issues already resolved.
    component : str | None
        Component to scope the linked issues by. Empty means no scoping.

    Returns
    -------
    IssueAnalysis
        Immutable derived metrics; ``issue`` is left untouched.
    """
    all_linked = issue.linked_issues.filter(~is_obsolete)

    if component:
        scoped = all_linked.filter(has_component(component))
    else:
        scoped = all_linked

    issue_no_component = len(all_linked.filter(in_project(issue.project_key) & has_no_components)) > 0

    comment_status = CheckStatus.NONE
    comment_date = None
    for candidate in (*scoped, issue):
        status, date = issue_comment_status(candidate)
        if status > comment_status:
            comment_status, comment_date = status, date

    return IssueAnalysis(
        issue=issue,
        component=component or None,
        all_linked_issues=all_linked,
        linked_issues=scoped,
        issues_completion=scoped.progress(),
        points_completion=scoped.story_points_progress(),
        num_activities=len(scoped.filter(of_type(*ACTIVITY_TYPES))),
        issue_no_component=issue_no_component,
        comment_status=comment_status,
        comment_date=comment_date,
    )
