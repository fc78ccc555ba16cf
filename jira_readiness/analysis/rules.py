"""Ordered battery of readiness checks evaluated against an IssueAnalysis.

Every rule is a declared descriptor (condition, diagnostic code, readiness and
status effect) so the evaluation order and the message set can be audited and
tested rule by rule. Rules never raise; they only record diagnostics on the
shared CheckResult.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from jira_readiness.core.config import (
    ALONGSIDE_VERSION_PREFIX,
    ISSUE_TYPE_EPIC,
    ISSUE_TYPE_STORY,
)
from jira_readiness.core.predicates import impeded, is_active, is_done
from jira_readiness.core.status import (
    is_active_status,
    is_done_status,
    is_obsolete_status,
    is_prioritized,
)

from .issue_analysis import IssueAnalysis
from .result import CheckResult, CheckStatus

OBSOLETE_MESSAGE = "OBSOLETE"

Condition = Callable[[IssueAnalysis], bool]
StatusEffect = CheckStatus | Callable[[IssueAnalysis], CheckStatus]


@dataclass(slots=True, frozen=True)
class Rule:
    name: str
    code: str | None
    condition: Condition
    ready: bool = True
    status: StatusEffect = CheckStatus.NONE

    def status_for(self, analysis: IssueAnalysis) -> CheckStatus:
        if callable(self.status):
            return self.status(analysis)
        return self.status

    def apply(self, analysis: IssueAnalysis, result: CheckResult) -> bool:
        """Record the rule's effect on ``result``; return whether it fired."""
        if not self.condition(analysis):
            return False
        result.set_ready(self.ready).set_status(self.status_for(analysis))
        if self.code:
            result.add_message(self.code)
        return True


def _is_epic(a: IssueAnalysis) -> bool:
    return a.issue.issuetype == ISSUE_TYPE_EPIC


def _points_or_issues_incomplete(a: IssueAnalysis) -> bool:
    return not (a.issues_completion.complete and a.points_completion.complete)


def _no_started_linked_issues(a: IssueAnalysis) -> bool:
    return len(a.linked_issues.filter(is_active | is_done)) == 0


def _multi_component(a: IssueAnalysis) -> bool:
    return a.component is not None and len(a.issue.components) != 1


RULES: Sequence[Rule] = (
    Rule(
        "alongside",
        "ALONGSIDE",
        lambda a: any(v.startswith(ALONGSIDE_VERSION_PREFIX) for v in a.issue.fix_versions),
    ),
    Rule("version_presence", "NOVERSION", lambda a: not a.issue.fix_versions, ready=False),
    Rule("version_multiplicity", "MULTIVERSION", lambda a: len(a.issue.fix_versions) > 1),
    Rule("activities", "NOSTORIES", lambda a: _is_epic(a) and a.num_activities == 0, ready=False),
    Rule("description", "NODESCRIPTION", lambda a: not a.issue.description, ready=False),
    Rule("readiness", "NOTREADY", lambda a: _is_epic(a) and not a.issue.readiness.ready, ready=False),
    Rule(
        "approvals",
        "NOACKS",
        lambda a: _is_epic(a) and not a.issue.approvals.approved,
        status=CheckStatus.RED,
    ),
    Rule(
        "delivery_owner",
        "NODELIVERYOWNER",
        lambda a: not a.issue.owner,
        ready=False,
        status=CheckStatus.RED,
    ),
    Rule(
        "qe_mismatch",
        "NOQEMISMATCH",
        lambda a: a.issue.planning.no_quality and bool(a.issue.qe_assignee),
        ready=False,
    ),
    Rule(
        "qe_assignee",
        "NOQEASSIGNEE",
        lambda a: not a.issue.planning.no_quality and not a.issue.qe_assignee,
        ready=False,
        status=CheckStatus.RED,
    ),
    Rule(
        "acceptance_criteria",
        "NOCRITERIA",
        lambda a: not a.issue.acceptance,
        ready=False,
        status=CheckStatus.RED,
    ),
    Rule(
        "priority",
        "NOPRIORITY",
        lambda a: not is_prioritized(a.issue.priority),
        ready=False,
        status=CheckStatus.RED,
    ),
    Rule(
        "started",
        "NOTSTARTED",
        lambda a: not is_active_status(a.issue.status) and not is_done_status(a.issue.status),
        status=CheckStatus.YELLOW,
    ),
    Rule(
        "impediment",
        "IMPEDIMENT",
        lambda a: a.issue.impediment or len(a.all_linked_issues.filter(impeded)) > 0,
        status=CheckStatus.RED,
    ),
    Rule(
        "market_problem",
        "NOMARKETPROBLEM",
        lambda a: _is_epic(a) and a.issue.market_problem is None,
        ready=False,
    ),
    Rule("component_coverage", "ISSUENOCOMPONENT", lambda a: a.issue_no_component, ready=False),
    Rule(
        "multi_component",
        "MULTICOMPONENT",
        _multi_component,
        ready=False,
        status=CheckStatus.YELLOW,
    ),
    Rule(
        "not_done",
        "NOTDONE",
        lambda a: is_done_status(a.issue.status) and _points_or_issues_incomplete(a),
        status=CheckStatus.RED,
    ),
    # Frequently a no-op: earlier rules may already have raised the status.
    Rule(
        "done",
        None,
        lambda a: is_done_status(a.issue.status) and not _points_or_issues_incomplete(a),
        status=CheckStatus.GREEN,
    ),
    Rule(
        "started_stories",
        "NOACTIVESTORIES",
        lambda a: _is_epic(a) and is_active_status(a.issue.status) and _no_started_linked_issues(a),
        status=CheckStatus.RED,
    ),
    Rule(
        "linked_epic",
        "NOEPIC",
        lambda a: a.issue.issuetype == ISSUE_TYPE_STORY and not a.issue.epic_link,
        ready=False,
    ),
    Rule("status_comment_missing", "NOSTATUSCOMMENT", lambda a: a.comment_status == CheckStatus.NONE),
    Rule(
        "status_comment",
        None,
        lambda a: a.comment_status != CheckStatus.NONE,
        status=lambda a: a.comment_status,
    ),
    Rule(
        "design_doc",
        "NODESIGN",
        lambda a: not a.issue.planning.no_feature and not a.issue.design_doc,
        ready=False,
    ),
)


def evaluate_rules(
    analysis: IssueAnalysis,
    rules: Sequence[Rule] = RULES,
    result: CheckResult | None = None,
) -> CheckResult:
    result = result if result is not None else CheckResult()
    for rule in rules:
        rule.apply(analysis, result)
    return result


def check_issue(analysis: IssueAnalysis) -> CheckResult:
    """Compute the verdict of the analysed epic.

    Obsolete epics short-circuit with a single ``OBSOLETE`` message and keep
    the initial ready/NONE verdict.
    """
    if is_obsolete_status(analysis.issue.status):
        return CheckResult().add_message(OBSOLETE_MESSAGE)
    return evaluate_rules(analysis)
