"""Epic analysis and readiness check engine."""

from jira_readiness.analysis.issue_analysis import IssueAnalysis, analyze_issue, issue_comment_status
from jira_readiness.analysis.result import CheckResult, CheckStatus
from jira_readiness.analysis.rules import RULES, Rule, check_issue, evaluate_rules

__all__ = [
    "RULES",
    "CheckResult",
    "CheckStatus",
    "IssueAnalysis",
    "Rule",
    "analyze_issue",
    "check_issue",
    "evaluate_rules",
    "issue_comment_status",
]
