"""Ordered issue collections with predicate filtering and progress aggregation."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .config import ISSUE_TYPE_STORY
from .status import is_obsolete_status, is_resolved_done

if TYPE_CHECKING:
    from .models import IssueModel


@dataclass(slots=True, frozen=True)
class Progress:
    """Completion of a series of activities.

    ``unknown`` counts the items left out of ``total`` because the data needed
    to weigh them is missing (e.g. a story without story points).
    """

    completed: int = 0
    total: int = 0
    unknown: int = 0

    @property
    def percentage(self) -> float:
        if self.total == 0:
            return 0.0
        return self.completed / self.total

    @property
    def remaining(self) -> int:
        return self.total - self.completed

    @property
    def complete(self) -> bool:
        return self.completed == self.total


class IssueCollection(Sequence["IssueModel"]):
    """Immutable ordered sequence of issues.

    Order is preserved by every operation; it only matters when scanning for
    status comments, where the first issue wins ties.
    """

    __slots__ = ("_issues",)

    def __init__(self, issues: Iterable[IssueModel] = ()):
        self._issues: tuple[IssueModel, ...] = tuple(issues)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return IssueCollection(self._issues[index])
        return self._issues[index]

    def __len__(self) -> int:
        return len(self._issues)

    def __iter__(self) -> Iterator[IssueModel]:
        return iter(self._issues)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IssueCollection):
            return self._issues == other._issues
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(i.key for i in self._issues))

    def __repr__(self) -> str:
        keys = ", ".join(i.key for i in self._issues)
        return f"IssueCollection([{keys}])"

    @property
    def keys(self) -> list[str]:
        return [i.key for i in self._issues]

    def filter(self, predicate: Callable[[IssueModel], bool]) -> IssueCollection:
        """Return the issues satisfying ``predicate`` in their original order."""
        return IssueCollection(i for i in self._issues if predicate(i))

    def progress(self) -> Progress:
        """Count resolved issues against all non-obsolete issues."""
        completed = 0
        total = 0
        for issue in self._issues:
            if is_obsolete_status(issue.status):
                continue
            total += 1
            if is_resolved_done(issue.resolution):
                completed += 1
        return Progress(completed=completed, total=total)

    def story_points_progress(self) -> Progress:
        """Sum story points of resolved stories against all non-obsolete stories.

        Stories without story points are counted in ``unknown`` instead of
        contributing to ``total``.
        """
        completed = 0
        total = 0
        unknown = 0
        for issue in self._issues:
            if is_obsolete_status(issue.status) or issue.issuetype != ISSUE_TYPE_STORY:
                continue
            if issue.story_points is None:
                unknown += 1
                continue
            total += issue.story_points
            if is_resolved_done(issue.resolution):
                completed += issue.story_points
        return Progress(completed=completed, total=total, unknown=unknown)
