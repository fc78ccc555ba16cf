"""Load search profiles (JQL + component filters) from a YAML configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


@dataclass(slots=True)
class SearchProfile:
    id: str
    jql: str
    include_components: list[str] = field(default_factory=list)
    exclude_components: list[str] = field(default_factory=list)


@dataclass(slots=True)
class Configuration:
    instance_url: str
    profiles: list[SearchProfile] = field(default_factory=list)

    def find_profile(self, profile_id: str) -> SearchProfile | None:
        for p in self.profiles:
            if p.id == profile_id:
                return p
        return None


def _profile_from_dict(data: dict[str, Any]) -> SearchProfile:
    components = data.get("components") or {}
    return SearchProfile(
        id=str(data.get("id") or ""),
        jql=str(data.get("jql") or ""),
        include_components=list(components.get("include") or []),
        exclude_components=list(components.get("exclude") or []),
    )


def parse_configuration(text: str) -> Configuration:
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError("Configuration must be a YAML mapping")
    instance = data.get("instance") or {}
    return Configuration(
        instance_url=str(instance.get("url") or ""),
        profiles=[_profile_from_dict(p) for p in data.get("profiles") or []],
    )


def load_configuration(path: str | Path) -> Configuration:
    """Read a configuration file; raises FileNotFoundError when it is missing."""
    return parse_configuration(Path(path).read_text())
