"""Composable issue predicates for collection filtering.

Predicates wrap a plain ``IssueModel -> bool`` callable and combine with
``&``, ``|`` and ``~``::

    scoped = linked.filter(has_component("Networking") & ~is_obsolete)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .status import is_active_status, is_done_status, is_obsolete_status, is_resolved_done

if TYPE_CHECKING:
    from .models import IssueModel


@dataclass(slots=True, frozen=True)
class IssuePredicate:
    func: Callable[[IssueModel], bool]
    name: str = "predicate"

    def __call__(self, issue: IssueModel) -> bool:
        return bool(self.func(issue))

    def __and__(self, other: IssuePredicate) -> IssuePredicate:
        return IssuePredicate(lambda i: self(i) and other(i), f"({self.name} & {other.name})")

    def __or__(self, other: IssuePredicate) -> IssuePredicate:
        return IssuePredicate(lambda i: self(i) or other(i), f"({self.name} | {other.name})")

    def __invert__(self) -> IssuePredicate:
        return IssuePredicate(lambda i: not self(i), f"~{self.name}")

    def __repr__(self) -> str:
        return f"IssuePredicate({self.name})"


def of_type(*types: str) -> IssuePredicate:
    wanted = frozenset(types)
    return IssuePredicate(lambda i: i.issuetype in wanted, f"of_type{tuple(sorted(wanted))}")


def in_status(*statuses: str) -> IssuePredicate:
    wanted = frozenset(statuses)
    return IssuePredicate(lambda i: i.status in wanted, f"in_status{tuple(sorted(wanted))}")


def has_component(component: str) -> IssuePredicate:
    return IssuePredicate(lambda i: component in i.components, f"has_component({component!r})")


def in_project(project_key: str) -> IssuePredicate:
    return IssuePredicate(lambda i: i.project_key == project_key, f"in_project({project_key!r})")


is_active = IssuePredicate(lambda i: is_active_status(i.status), "is_active")
is_done = IssuePredicate(lambda i: is_done_status(i.status), "is_done")
is_obsolete = IssuePredicate(lambda i: is_obsolete_status(i.status), "is_obsolete")
resolved_done = IssuePredicate(lambda i: is_resolved_done(i.resolution), "resolved_done")
has_no_components = IssuePredicate(lambda i: not i.components, "has_no_components")
impeded = IssuePredicate(lambda i: i.impediment, "impeded")
