"""Mapping raw Jira issue JSON into IssueModel instances."""

from __future__ import annotations

import re
from typing import Any

import pandas as pd

from .config import (
    ACK_FLAG_VALUES,
    DELIVERY_OWNER_REGEXP,
    IMPEDIMENT_FLAG_VALUE,
    PLANNING_FLAG_VALUES,
    READY_FLAG_VALUES,
)
from .fields import FieldIds
from .models import (
    CommentModel,
    IssueApprovals,
    IssueModel,
    IssuePlanning,
    IssueReadiness,
)

_DELIVERY_OWNER_RE = re.compile(DELIVERY_OWNER_REGEXP)


def parse_dt(val):
    if not val:
        return None
    # keep the offset Jira sent; naive values are taken as UTC
    ts = pd.to_datetime(val, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return ts.to_pydatetime()


def _custom(fields: dict[str, Any], field_id: str | None) -> Any:
    if not field_id:
        return None
    return fields.get(field_id)


def _name(value: Any) -> str | None:
    if isinstance(value, dict):
        return value.get("name")
    return None


def _names(values: Any) -> list[str]:
    out: list[str] = []
    for v in values or []:
        nm = _name(v)
        if nm:
            out.append(nm)
    return out


def _option_values(value: Any) -> set[str]:
    """Collect the selected values of a checkbox/multi-select custom field."""
    selected: set[str] = set()
    if not isinstance(value, list):
        return selected
    for option in value:
        if isinstance(option, dict) and isinstance(option.get("value"), str):
            selected.add(option["value"])
        elif isinstance(option, str):
            selected.add(option)
    return selected


def _flags(value: Any, mapping: dict[str, str]) -> dict[str, bool]:
    selected = _option_values(value)
    return {attr: raw in selected for raw, attr in mapping.items()}


def _user_id(value: Any) -> str | None:
    if not isinstance(value, dict):
        return None
    return value.get("key") or value.get("name") or value.get("accountId")


def map_story_points(value: Any) -> int | None:
    """Story points arrive as floats; a missing value means "unknown"."""
    if value is None:
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def map_delivery_owner(description: str | None, assignee: str | None) -> str | None:
    """Return the delivery owner named in the description, else the assignee.

    Examples
    --------
    >>> map_delivery_owner("Delivery Owner: [~jdoe]", "alice")
    'jdoe'
    >>> map_delivery_owner("", "alice")
    'alice'
    """
    match = _DELIVERY_OWNER_RE.search(description or "")
    if match:
        return match.group(2)
    return assignee


def map_issue(raw: dict[str, Any], field_ids: FieldIds, server: str | None = None) -> IssueModel:
    key = raw.get("key")
    fields = raw.get("fields") or {}
    status = _name(fields.get("status"))
    if not key:
        raise ValueError("Raw Jira issue without a key")
    if not status:
        raise ValueError(f"Raw Jira issue {key} without a status")

    comments_raw = (fields.get("comment") or {}).get("comments", []) or []
    comments = [
        CommentModel(
            author=(c.get("author") or {}).get("displayName"),
            created=parse_dt(c.get("created")),
            updated=parse_dt(c.get("updated") or c.get("created")),
            body=c.get("body"),
        )
        for c in comments_raw
    ]

    description = fields.get("description")
    if not isinstance(description, str):
        description = None
    assignee = _user_id(fields.get("assignee"))

    epic_link = (fields.get("epic") or {}).get("key") or _custom(fields, field_ids.epic_link)
    parent_link = _custom(fields, field_ids.parent_link)

    impediment = IMPEDIMENT_FLAG_VALUE in _option_values(_custom(fields, field_ids.flagged))

    return IssueModel(
        key=key,
        issuetype=_name(fields.get("issuetype")),
        status=status,
        summary=fields.get("summary"),
        description=description,
        priority=_name(fields.get("priority")),
        resolution=_name(fields.get("resolution")),
        assignee=assignee,
        owner=map_delivery_owner(description, assignee),
        qe_assignee=_user_id(_custom(fields, field_ids.qe_assignee)),
        acceptance=_custom(fields, field_ids.acceptance) or None,
        design_doc=_custom(fields, field_ids.design_doc) or None,
        story_points=map_story_points(_custom(fields, field_ids.story_points)),
        impediment=impediment,
        parent_link=parent_link if isinstance(parent_link, str) and parent_link else None,
        epic_link=epic_link if isinstance(epic_link, str) and epic_link else None,
        link=f"{server.rstrip('/')}/browse/{key}" if server else None,
        components=_names(fields.get("components")),
        fix_versions=_names(fields.get("fixVersions")),
        comments=comments,
        approvals=IssueApprovals(**_flags(_custom(fields, field_ids.acks), ACK_FLAG_VALUES)),
        readiness=IssueReadiness(**_flags(_custom(fields, field_ids.ready), READY_FLAG_VALUES)),
        planning=IssuePlanning(**_flags(_custom(fields, field_ids.planning), PLANNING_FLAG_VALUES)),
    )
