"""Shared argcomplete completers and helpers for CLI commands."""

from __future__ import annotations

import argparse
from collections.abc import Callable
from typing import Any

from argcomplete.completers import FilesCompleter

from ...lib.core.template import list_bundled_templates

template_files = FilesCompleter(allowednames=("template",), directories=True)
manifest_files = FilesCompleter(allowednames=("toml", "json"), directories=True)
config_files = FilesCompleter(allowednames=("yml", "yaml"), directories=True)


def complete_bundled_templates(
    prefix: str, parsed_args: argparse.Namespace, **kwargs: object
) -> list[str]:  # pragma: no cover
    """Return bundled template names matching *prefix* for argcomplete."""
    return [name for name in list_bundled_templates() if name.startswith(prefix)]


def set_completer(action: argparse.Action, fn: Callable[..., Any]) -> None:
    """Attach an argcomplete completer to *action*."""
    action.completer = fn  # type: ignore[attr-defined]
