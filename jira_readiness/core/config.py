"""Central configuration, constants, and Jira field definitions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# Jira Connection Settings
# =============================================================================
REST_API_VERSION = "2"
SEARCH_PAGE_SIZE = 50
# Report dates are shown in this zone; None keeps the offset Jira returned
TIMEZONE: str | None = None
PASSWORD_ENV_VARIABLE = "PASSWORD"

# =============================================================================
# Issue Types
# =============================================================================
ISSUE_TYPE_INITIATIVE = "Initiative"
ISSUE_TYPE_EPIC = "Epic"
ISSUE_TYPE_STORY = "Story"
ISSUE_TYPE_TASK = "Task"
ISSUE_TYPE_BUG = "Bug"

# Linked issue types counted as planned activities of an epic
ACTIVITY_TYPES: frozenset[str] = frozenset({ISSUE_TYPE_STORY, ISSUE_TYPE_TASK, ISSUE_TYPE_BUG})

# =============================================================================
# Workflow Status Configuration
# =============================================================================
STATUS_DONE = "Done"
STATUS_OBSOLETE = "Obsolete"

# Statuses that indicate an issue is currently worked on
ACTIVE_STATUSES: frozenset[str] = frozenset(
    {
        "In Progress",
        "Feature Complete",
        "Code Review",
        "QE Review",
    }
)

RESOLUTION_DONE = "Done"
PRIORITY_UNPRIORITIZED = "Unprioritized"

# Fix versions whose name starts with this prefix ship alongside another release
ALONGSIDE_VERSION_PREFIX = "Alongside"

# Prefixes of manually asserted status comments, most severe last
STATUS_COMMENT_PREFIXES: Sequence[str] = ("GREEN:", "YELLOW:", "RED:")

# =============================================================================
# Jira Custom Fields
# Human readable names resolved to instance specific ids once per connection.
# =============================================================================
CUSTOM_FIELD_NAMES: dict[str, str] = {
    "parent_link": "Parent Link",
    "epic_link": "Epic Link",
    "story_points": "Story Points",
    "acks": "5-Acks Check",
    "ready": "Ready Check",
    "planning": "Planning",
    "qe_assignee": "QA Contact",
    "acceptance": "Acceptance Criteria",
    "flagged": "Flagged",
    "design_doc": "Design Doc",
}

# Checkbox values of the "5-Acks Check" field
ACK_FLAG_VALUES: dict[str, str] = {
    "devel_ack": "development",
    "pm_ack": "product",
    "qa_ack": "quality",
    "ux_ack": "experience",
    "doc_ack": "documentation",
}

# Checkbox values of the "Ready Check" field
READY_FLAG_VALUES: dict[str, str] = {
    "devel_ready": "development",
    "pm_ready": "product",
    "qa_ready": "quality",
    "ux_ready": "experience",
    "doc_ready": "documentation",
    "support_ready": "support",
}

# Checkbox values of the "Planning" field
PLANNING_FLAG_VALUES: dict[str, str] = {
    "no_feature": "no_feature",
    "no_qe": "no_quality",
    "no_doc": "no_documentation",
}

IMPEDIMENT_FLAG_VALUE = "Impediment"

# Epic descriptions may name a delivery owner explicitly, otherwise the
# assignee is used.
DELIVERY_OWNER_REGEXP = r"\W*(Delivery Owner|DELIVERY OWNER)\W*:\W*\[~([a-zA-Z0-9]*)\]"

# =============================================================================
# Fetch Settings
# =============================================================================
FETCH_FIELDS: Sequence[str] = ("*all",)

# Query used to collect the issues linked to an epic
LINKED_ISSUES_JQL = '"Epic Link" = "{key}" ORDER BY Key ASC'

# Parallel linked issue fetch tuning. Threads because jira client calls are
# I/O bound and synchronous.
LINKED_FETCH_MAX_WORKERS = 8
LINKED_FETCH_MIN_PARALLEL = 4  # below this, stay sequential to reduce overhead

# =============================================================================
# Report Layout
# =============================================================================
UNASSIGNED_SECTION = "[UNASSIGNED]"

REPORT_COLUMNS: Sequence[str] = (
    "issue",
    "summary",
    "market_problem",
    "priority",
    "status",
    "owner",
    "qe_assignee",
    "issues_progress",
    "points_progress",
    "comment_date",
    "ready",
    "check_status",
    "messages",
)

SPARKLINE_COMPLETED_COLOR = "#93c47d"
SPARKLINE_REMAINING_COLOR = "#efefef"


@dataclass(slots=True)
class AppSettings:
    max_table_rows: int = 1000
    download_encoding: str = "utf-8"
    report_separator: str = "\t"


SETTINGS = AppSettings()
