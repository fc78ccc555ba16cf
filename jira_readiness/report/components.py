"""Group epics by the components they or their linked issues belong to."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from jira_readiness.core.models import IssueModel
from jira_readiness.core.predicates import is_obsolete


@dataclass(slots=True)
class ComponentIssues:
    name: str
    issues: list[IssueModel] = field(default_factory=list)


class ComponentsCollection:
    """Ordered, unique component groups plus the epics without any component."""

    def __init__(self, components: Iterable[str] = ()):
        self.items: list[ComponentIssues] = []
        self.orphans: list[IssueModel] = []
        self._index: dict[str, ComponentIssues] = {}
        for name in components:
            self.add(name)

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def get(self, name: str) -> ComponentIssues | None:
        return self._index.get(name)

    def add(self, component: str, *issues: IssueModel) -> ComponentIssues:
        """Register ``component`` if needed and append ``issues`` to it."""
        item = self._index.get(component)
        if item is None:
            item = ComponentIssues(component)
            self.items.append(item)
            self._index[component] = item
        item.issues.extend(issues)
        return item

    def add_issues(self, issues: Iterable[IssueModel]) -> None:
        """Place each epic under its own components and those of its live linked issues."""
        for issue in issues:
            # ordered set
            names = dict.fromkeys(issue.components)
            for linked in issue.linked_issues.filter(~is_obsolete):
                names.update(dict.fromkeys(linked.components))
            if names:
                for name in names:
                    self.add(name, issue)
            else:
                self.orphans.append(issue)
