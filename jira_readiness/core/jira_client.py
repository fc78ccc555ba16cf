"""Jira API client wrapper (REST search pagination + field discovery)."""

from __future__ import annotations

import hashlib
import json
import time
from typing import Any

from jira import JIRA, JIRAError

from .config import REST_API_VERSION, SEARCH_PAGE_SIZE

_AUTH_FAILURE_CODES = (401, 403)


class JiraAuthenticationError(RuntimeError):
    """Raised when Jira rejects the supplied credentials."""

    def __init__(self, message: str = "Access Unauthorized: check basic authentication"):
        super().__init__(message)


def _classify_error(exc: JIRAError, action: str) -> RuntimeError:
    if exc.status_code in _AUTH_FAILURE_CODES:
        return JiraAuthenticationError()
    return RuntimeError(f"Failed to {action}: {exc}")


class JiraAPI:
    def __init__(
        self,
        server: str,
        username: str | None,
        token: str | None,
        *,
        rest_api_version: str = REST_API_VERSION,
    ):
        self.server = server.rstrip("/")
        self.rest_api_version = rest_api_version
        basic_auth = (username, token or "") if username else None
        self.client = JIRA(
            basic_auth=basic_auth,
            options={"server": self.server, "rest_api_version": rest_api_version},
        )
        # Simple in-memory cache: {(hash): (timestamp, data)}
        self._cache: dict[str, tuple[float, list]] = {}
        self._cache_ttl = 300.0  # seconds

    def clear_cache(self) -> None:
        """Reset the in-memory search cache."""
        cache = getattr(self, "_cache", None)
        if isinstance(cache, dict):
            cache.clear()

    def _cache_key(self, jql: str, fields, page_size: int, validate: str = "strict") -> str:
        payload = {
            "jql": jql,
            "fields": fields,
            "page_size": page_size,
            "validate": validate,
        }
        return hashlib.sha256(json.dumps(payload, sort_keys=True).encode()).hexdigest()

    def search(
        self,
        jql: str,
        fields: list[str] | None = None,
        page_size: int = SEARCH_PAGE_SIZE,
        validate: str = "strict",
    ) -> list[dict[str, Any]]:
        """Return every raw issue matched by ``jql``, following ``startAt`` pagination.

        ``validate`` is sent as ``validateQuery``; with ``"warn"`` Jira drops
        unknown or hidden issue keys instead of rejecting the query.
        """
        session = getattr(self.client, "_session", None)
        if session is None:
            raise RuntimeError("JIRA session unavailable")
        url = f"{self.server}/rest/api/{self.rest_api_version}/search"
        key = self._cache_key(jql, fields, page_size, validate)
        now = time.time()
        cached = self._cache.get(key)
        if cached and (now - cached[0]) < self._cache_ttl:
            return cached[1]
        params = {"jql": jql, "maxResults": page_size, "validateQuery": validate}
        if fields:
            params["fields"] = ",".join(fields)
        out: list[dict[str, Any]] = []
        while True:
            qp = dict(params)
            qp["startAt"] = len(out)
            resp = session.get(url, params=qp)
            if resp.status_code in _AUTH_FAILURE_CODES:
                raise JiraAuthenticationError()
            if resp.status_code >= 400:
                raise RuntimeError(f"Search failed {resp.status_code}: {resp.text[:200]}")
            data = resp.json()
            page = data.get("issues", []) or []
            out.extend(page)
            total = data.get("total")
            if not page or (isinstance(total, int) and len(out) >= total):
                break
        self._cache[key] = (now, out)
        return out

    def fetch_fields(self) -> list[dict[str, Any]]:
        """Return the field descriptors (id, name, custom) known to the instance."""
        try:
            return list(self.client.fields())
        except JIRAError as exc:  # pragma: no cover - network error path
            raise _classify_error(exc, "list Jira fields") from exc

    def project_components(self, project_key: str) -> list[str]:
        try:
            components = self.client.project_components(project_key)
        except JIRAError as exc:  # pragma: no cover - network error path
            raise _classify_error(exc, f"fetch components of {project_key}") from exc
        return [c.name for c in components]
