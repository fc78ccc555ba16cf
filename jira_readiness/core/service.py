"""IssueService: fetches epics and resolves their linked issue graph."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor

from .collection import IssueCollection
from .config import (
    FETCH_FIELDS,
    LINKED_FETCH_MAX_WORKERS,
    LINKED_FETCH_MIN_PARALLEL,
    LINKED_ISSUES_JQL,
)
from .fields import FieldIds
from .jira_client import JiraAPI
from .mappers import map_issue
from .models import IssueModel

DEFAULT_FIELDS: Sequence[str] = tuple(FETCH_FIELDS)
ProgressCallback = Callable[[str, int | None, int | None], None]

logger = logging.getLogger(__name__)


class IssueService:
    def __init__(self, api: JiraAPI, field_ids: FieldIds | None = None):
        self.api = api
        # Resolved once; every mapped issue of this service shares the lookup.
        self.field_ids = field_ids if field_ids is not None else FieldIds.from_fields(api.fetch_fields())

    def project_components(self, project_key: str) -> list[str]:
        """Fetch the component names of a Jira project."""
        return self.api.project_components(project_key)

    # ------------------ Fetch Methods ------------------
    def find_issues(self, jql: str, *, validate: str = "strict") -> IssueCollection:
        raw = self.api.search(jql, fields=list(DEFAULT_FIELDS), validate=validate)
        return IssueCollection(map_issue(r, self.field_ids, self.api.server) for r in raw)

    def find_epics(
        self,
        jql: str,
        *,
        progress: ProgressCallback | None = None,
    ) -> IssueCollection:
        """Fetch the epics matched by ``jql`` with their linked issue graph resolved.

        Linked issues are fetched concurrently, one query per epic. Any fetch
        failure propagates: the analysis must never run on a partial graph.

        Parameters
        ----------
        jql : str
            Query selecting the epics.
        progress : callback, optional
            Progress reporter.
        """
        if progress:
            progress("Querying epics", None, None)
        epics = self.find_issues(jql)
        logger.info("JQL returned issues: %d", len(epics))
        self._attach_linked_issues(epics, progress=progress)
        if progress:
            progress("Resolving market problems", None, None)
        self._attach_market_problems(epics)
        return epics

    # ------------------ Internal Helpers ------------------
    def _fetch_linked(self, epic: IssueModel) -> None:
        linked = self.find_issues(LINKED_ISSUES_JQL.format(key=epic.key))
        epic.linked_issues = linked
        logger.debug("Fetched %d linked issues for %s", len(linked), epic.key)

    def _attach_linked_issues(
        self,
        epics: IssueCollection,
        *,
        progress: ProgressCallback | None = None,
    ) -> None:
        if not epics:
            return
        label = "Loading linked issues"
        if progress:
            progress(label, 0, len(epics))

        # Sequential short-circuit
        if len(epics) < LINKED_FETCH_MIN_PARALLEL:
            for idx, epic in enumerate(epics, start=1):
                self._fetch_linked(epic)
                if progress:
                    progress(label, idx, len(epics))
            return

        # Parallel fetch using threads (I/O bound HTTP calls)
        with ThreadPoolExecutor(max_workers=LINKED_FETCH_MAX_WORKERS) as pool:
            futures = [pool.submit(self._fetch_linked, epic) for epic in epics]
            for completed, fut in enumerate(futures, start=1):
                fut.result()
                if progress:
                    progress(label, completed, len(epics))

    def _attach_market_problems(self, epics: IssueCollection) -> None:
        parent_keys = sorted({e.parent_link for e in epics if e.parent_link})
        if not parent_keys:
            return
        jql = "key in ({}) ORDER BY Key ASC".format(", ".join(f'"{k}"' for k in parent_keys))
        # unknown or hidden parents are dropped rather than failing the query
        by_key = {p.key: p for p in self.find_issues(jql, validate="warn")}
        for epic in epics:
            if epic.parent_link:
                epic.market_problem = by_key.get(epic.parent_link)
                if epic.market_problem is None:
                    logger.warning("Market problem %s of %s not found", epic.parent_link, epic.key)
