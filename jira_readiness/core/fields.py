"""Resolution of human readable custom field names to instance specific ids."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields
from typing import Any

from .config import CUSTOM_FIELD_NAMES

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class FieldIds:
    """Immutable lookup of custom field ids, resolved once per connection."""

    parent_link: str | None = None
    epic_link: str | None = None
    story_points: str | None = None
    acks: str | None = None
    ready: str | None = None
    planning: str | None = None
    qe_assignee: str | None = None
    acceptance: str | None = None
    flagged: str | None = None
    design_doc: str | None = None

    @classmethod
    def from_fields(
        cls,
        descriptors: Iterable[Mapping[str, Any]],
        names: Mapping[str, str] = CUSTOM_FIELD_NAMES,
    ) -> FieldIds:
        """Build the lookup from Jira field descriptors (``{"id": ..., "name": ...}``)."""
        by_name = {}
        for d in descriptors:
            name = d.get("name")
            if name and name not in by_name:
                by_name[name] = d.get("id")
        resolved = {attr: by_name.get(field_name) for attr, field_name in names.items()}
        missing = sorted(names[attr] for attr, value in resolved.items() if value is None)
        if missing:
            logger.warning("Custom fields not found on Jira instance: %s", ", ".join(missing))
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in resolved.items() if k in known})
