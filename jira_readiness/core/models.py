"""Domain data models for Jira epics, their linked issues, and comments."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .collection import IssueCollection


@dataclass(slots=True)
class CommentModel:
    author: str | None
    created: datetime | None
    updated: datetime | None
    body: str | None


@dataclass(slots=True, frozen=True)
class IssueApprovals:
    """Per-discipline acknowledgments gating the commitment of an epic."""

    development: bool = False
    product: bool = False
    quality: bool = False
    experience: bool = False
    documentation: bool = False

    @property
    def approved(self) -> bool:
        return all(
            (self.development, self.product, self.quality, self.experience, self.documentation)
        )


@dataclass(slots=True, frozen=True)
class IssueReadiness:
    """Per-discipline grooming sign-off markers."""

    development: bool = False
    product: bool = False
    quality: bool = False
    experience: bool = False
    documentation: bool = False
    support: bool = False

    @property
    def ready(self) -> bool:
        return all(
            (
                self.development,
                self.product,
                self.quality,
                self.experience,
                self.documentation,
                self.support,
            )
        )


@dataclass(slots=True, frozen=True)
class IssuePlanning:
    no_feature: bool = False
    no_quality: bool = False
    no_documentation: bool = False


@dataclass(slots=True)
class IssueModel:
    key: str
    issuetype: str | None = None
    status: str | None = None
    summary: str | None = None
    description: str | None = None
    priority: str | None = None
    resolution: str | None = None
    assignee: str | None = None
    owner: str | None = None
    qe_assignee: str | None = None
    acceptance: str | None = None
    design_doc: str | None = None
    story_points: int | None = None
    impediment: bool = False
    parent_link: str | None = None
    epic_link: str | None = None
    link: str | None = None
    components: list[str] = field(default_factory=list)
    fix_versions: list[str] = field(default_factory=list)
    comments: list[CommentModel] = field(default_factory=list)
    approvals: IssueApprovals = field(default_factory=IssueApprovals)
    readiness: IssueReadiness = field(default_factory=IssueReadiness)
    planning: IssuePlanning = field(default_factory=IssuePlanning)

    # Graph relations (populated by the provider)
    market_problem: IssueModel | None = None
    linked_issues: IssueCollection = field(default_factory=IssueCollection)

    @property
    def project_key(self) -> str:
        return self.key.rsplit("-", 1)[0]
