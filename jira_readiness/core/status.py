"""Status, resolution, and priority classification utilities.

This module centralizes the workflow vocabulary used by the collection
aggregations, the predicates, and the readiness checks. It uses the workflow
configuration from config.py (ACTIVE_STATUSES, STATUS_DONE, STATUS_OBSOLETE,
RESOLUTION_DONE, PRIORITY_UNPRIORITIZED).
"""

from __future__ import annotations

from .config import (
    ACTIVE_STATUSES,
    PRIORITY_UNPRIORITIZED,
    RESOLUTION_DONE,
    STATUS_DONE,
    STATUS_OBSOLETE,
)


def is_active_status(value: str | None) -> bool:
    """Check if the status indicates the issue is currently worked on.

    Parameters
    ----------
    value : str | None
        Jira status name.

    Returns
    -------
    bool
        True for In Progress, Feature Complete, Code Review and QE Review.

    Examples
    --------
    >>> is_active_status("Code Review")
    True
    >>> is_active_status("Done")
    False
    """
    return value in ACTIVE_STATUSES


def is_done_status(value: str | None) -> bool:
    return value == STATUS_DONE


def is_obsolete_status(value: str | None) -> bool:
    return value == STATUS_OBSOLETE


def is_resolved_done(resolution: str | None) -> bool:
    """Check if the resolution counts the issue as completed.

    Completion is driven by the resolution rather than the status so that
    issues closed as duplicates or won't-fix are not counted as delivered.
    """
    return resolution == RESOLUTION_DONE


def is_prioritized(priority: str | None) -> bool:
    """Check if a priority has been assigned.

    Parameters
    ----------
    priority : str | None
        Jira priority name.

    Returns
    -------
    bool
        False for a missing or empty priority and for "Unprioritized".
    """
    if not priority:
        return False
    return priority != PRIORITY_UNPRIORITIZED
