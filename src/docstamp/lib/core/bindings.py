# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Binding set construction for release-time rendering.

Bindings are resolved from a stack of scopes, lowest priority first:

  1. ``global``   - ``bindings:`` section of the global config file
  2. ``manifest`` - ``VERSION`` read from Cargo.toml / pyproject.toml /
                    package.json (or ``git`` - an exact ``vX.Y.Z`` tag at HEAD
                    when no manifest provides a version)
  3. ``project``  - ``bindings:`` section of ``docstamp.yml``
  4. ``cli``      - ``--release-version`` and ``--set KEY=VALUE`` overrides

A ``null`` value in a higher scope removes a binding inherited from a lower
one.
"""

from __future__ import annotations

import json
import subprocess
import tomllib
from collections.abc import Iterable, Mapping
from pathlib import Path

from .._util.config_stack import ConfigScope, ConfigStack
from . import config as _config
from .template import is_valid_name

VERSION_KEY = "VERSION"

MANIFEST_NAMES = ("Cargo.toml", "pyproject.toml", "package.json")


class BindingError(ValueError):
    """Raised when a binding set cannot be built."""


def parse_assignments(items: Iterable[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` strings into a dict.

    The value may be empty and may itself contain ``=``.  Later assignments
    override earlier ones.
    """
    result: dict[str, str] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep:
            raise BindingError(f"Expected KEY=VALUE, got {item!r}")
        if not is_valid_name(key):
            raise BindingError(
                f"Invalid binding name {key!r} (use letters, digits and underscores)"
            )
        result[key] = value
    return result


# ---------- Version sources ----------


def detect_manifest(directory: Path) -> Path | None:
    """Return the first known manifest file present in *directory*."""
    for name in MANIFEST_NAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def _clean_version(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _table(data: dict, *keys: str) -> dict:
    for key in keys:
        data = data.get(key)
        if not isinstance(data, dict):
            return {}
    return data


def read_manifest_version(path: Path) -> str | None:
    """Read the package version declared in *path*.

    Supports ``Cargo.toml`` (``[package].version``), ``pyproject.toml``
    (``[project].version``, then ``[tool.poetry].version``) and
    ``package.json`` (``"version"``).  Returns None when the manifest does
    not declare a static version (e.g. ``dynamic = ["version"]``,
    ``version.workspace = true``, or a ``package`` key that is not a table).
    """
    try:
        if path.suffix == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
        else:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise BindingError(f"Could not parse manifest {path}: {e}") from e

    if not isinstance(data, dict):
        return None

    if path.name == "package.json":
        return _clean_version(data.get("version"))
    if path.name == "Cargo.toml":
        return _clean_version(_table(data, "package").get("version"))

    version = _clean_version(_table(data, "project").get("version"))
    if version:
        return version
    return _clean_version(_table(data, "tool", "poetry").get("version"))


def git_release_tag(directory: Path) -> str | None:
    """Return the version of an exact ``vX.Y.Z`` tag at HEAD, without the ``v``.

    Returns None when git is unavailable, *directory* is not inside a work
    tree, or HEAD is not at a release tag.
    """
    try:
        result = subprocess.run(
            ["git", "describe", "--exact-match", "--tags", "HEAD"],
            capture_output=True,
            text=True,
            timeout=2,
            cwd=str(directory),
        )
    except (OSError, subprocess.SubprocessError):
        return None
    if result.returncode != 0:
        return None
    tag = result.stdout.strip()
    if len(tag) > 1 and tag.startswith("v") and tag[1].isdigit():
        return tag[1:]
    return None


# ---------- Stack assembly ----------


def _bindings_scope(level: str, source: Path | None, data: Mapping) -> ConfigScope:
    section = data.get("bindings")
    if section is not None and not isinstance(section, dict):
        where = source or level
        raise BindingError(f"'bindings' in {where} must be a mapping")
    return ConfigScope(level=level, source=source, data={"bindings": dict(section or {})})


def _version_scope(
    project_dir: Path,
    project_cfg: Mapping,
    project_cfg_path: Path,
    manifest: Path | None,
    use_git: bool,
) -> ConfigScope | None:
    if manifest is None and project_cfg.get("manifest"):
        manifest = project_cfg_path.parent / str(project_cfg["manifest"])
    if manifest is not None and not manifest.is_file():
        raise BindingError(f"Manifest not found: {manifest}")
    if manifest is None:
        manifest = detect_manifest(project_dir)

    if manifest is not None:
        version = read_manifest_version(manifest)
        if version:
            return ConfigScope("manifest", manifest, {"bindings": {VERSION_KEY: version}})

    if use_git:
        tag_version = git_release_tag(project_dir)
        if tag_version:
            return ConfigScope("git", None, {"bindings": {VERSION_KEY: tag_version}})
    return None


def build_binding_stack(
    *,
    project_dir: Path | None = None,
    config_file: Path | None = None,
    manifest: Path | None = None,
    release_version: str | None = None,
    overrides: Mapping[str, str] | None = None,
    use_git: bool = True,
) -> ConfigStack:
    """Assemble the scope stack that :func:`resolve_bindings` flattens.

    Args:
        project_dir: Directory searched for ``docstamp.yml`` and a manifest
            (defaults to the current directory).
        config_file: Explicit project config path (``--config``).
        manifest: Explicit manifest path (``--manifest``).
        release_version: Explicit ``VERSION`` (``--release-version``).
        overrides: ``--set`` assignments.
        use_git: Fall back to an exact release tag when no manifest version
            is found.
    """
    project_dir = project_dir or Path.cwd()
    stack = ConfigStack()

    global_path = _config.global_config_path()
    stack.push(_bindings_scope("global", global_path, _config.load_global_config()))

    project_cfg_path = _config.project_config_path(config_file, cwd=project_dir)
    if config_file is not None and not project_cfg_path.is_file():
        raise BindingError(f"Config file not found: {project_cfg_path}")
    project_cfg = _config.load_project_config(project_cfg_path)

    version_scope = _version_scope(project_dir, project_cfg, project_cfg_path, manifest, use_git)
    if version_scope is not None:
        stack.push(version_scope)

    stack.push(_bindings_scope("project", project_cfg_path, project_cfg))

    cli: dict[str, str] = {}
    if release_version is not None:
        cli[VERSION_KEY] = release_version
    cli.update(overrides or {})
    if cli:
        stack.push(ConfigScope("cli", None, {"bindings": cli}))
    return stack


def resolve_bindings(stack: ConfigStack) -> dict[str, str]:
    """Flatten *stack* into a binding set with string keys and values."""
    bindings: dict[str, str] = {}
    for key, value in stack.resolve_section("bindings").items():
        if not isinstance(key, str) or not is_valid_name(key):
            raise BindingError(f"Invalid binding name {key!r}")
        if isinstance(value, (dict, list)):
            raise BindingError(f"Binding {key!r} must be a scalar, got {type(value).__name__}")
        bindings[key] = str(value)
    return bindings
