"""Layered binding resolution.

A stack holds one scope per source (global config, manifest, project
config, command line), lowest priority first.  Resolving a section overlays
each scope's mapping on the ones below it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


def deep_merge(base: dict, override: dict) -> dict:
    """Overlay *override* on *base* and return a new dict.

    Nested dicts merge key by key.  A ``None`` value in *override* removes
    the key.  Keys keep their first-seen order.
    """
    merged = dict(base)
    for key, value in override.items():
        if value is None:
            merged.pop(key, None)
        elif isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@dataclass(frozen=True)
class ConfigScope:
    """One source of bindings and where it came from."""

    level: str
    source: Path | None
    data: dict


class ConfigStack:
    def __init__(self) -> None:
        self._scopes: list[ConfigScope] = []

    def push(self, scope: ConfigScope) -> None:
        """Add *scope* above every scope pushed so far."""
        self._scopes.append(scope)

    def resolve_section(self, key: str) -> dict:
        """Merge the *key* mapping of every scope; non-mapping values are skipped."""
        result: dict = {}
        for scope in self._scopes:
            section = scope.data.get(key)
            if isinstance(section, dict):
                result = deep_merge(result, section)
        return result

    @property
    def scopes(self) -> list[ConfigScope]:
        return list(self._scopes)
