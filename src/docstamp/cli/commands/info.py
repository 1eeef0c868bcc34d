"""Informational CLI commands: placeholders, bindings, templates, config."""

from __future__ import annotations

import argparse
import os
from pathlib import Path

from ...lib.core.bindings import MANIFEST_NAMES
from ...lib.core.config import (
    PROJECT_CONFIG_NAME,
    config_root as _config_root,
    get_render_encoding as _get_render_encoding,
    global_config_path as _global_config_path,
    global_config_search_paths as _global_config_search_paths,
    state_root as _state_root,
)
from ...lib.core.template import bundled_templates_dir, list_bundled_templates, load_template
from ...ui_utils.terminal import (
    gray as _gray,
    supports_color as _supports_color,
    violet as _violet,
    yes_no as _yes_no,
)
from ._completers import set_completer, template_files
from .render import add_binding_arguments, resolve_from_args


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Register informational subcommands."""
    p_ph = subparsers.add_parser("placeholders", help="List the placeholder names of a template")
    _a = p_ph.add_argument("template", type=Path, help="Template file")
    set_completer(_a, template_files)
    p_ph.add_argument("--encoding", help="Template encoding (default: utf-8)")

    p_bind = subparsers.add_parser(
        "bindings", help="Show the resolved binding set (with provenance per level)"
    )
    add_binding_arguments(p_bind)

    subparsers.add_parser("templates", help="List bundled templates")

    subparsers.add_parser("config", help="Show configuration, template and state paths")


def dispatch(args: argparse.Namespace) -> bool:
    """Handle informational commands.  Returns True if handled."""
    if args.cmd == "placeholders":
        template = load_template(args.template, encoding=args.encoding or _get_render_encoding())
        for name in template.names:
            print(name)
        return True
    if args.cmd == "bindings":
        _cmd_bindings(args)
        return True
    if args.cmd == "templates":
        for name in list_bundled_templates():
            print(name)
        return True
    if args.cmd == "config":
        _print_config()
        return True
    return False


def _cmd_bindings(args: argparse.Namespace) -> None:
    """Show resolved bindings with provenance annotations."""
    color_enabled = _supports_color()
    stack, resolved = resolve_from_args(args)

    for scope in stack.scopes:
        keys = ", ".join(sorted(str(k) for k in scope.data.get("bindings", {})))
        where = f" {_gray(str(scope.source), color_enabled)}" if scope.source else ""
        print(f"  [{_violet(scope.level, color_enabled)}]{where} keys: {keys or '-'}")

    print()
    if not resolved:
        print("No bindings defined")
        return
    width = max(len(k) for k in resolved)
    for key in sorted(resolved):
        print(f"{key.ljust(width)} = {resolved[key]}")


def _print_config() -> None:
    """Display configuration, template and state paths."""
    color_enabled = _supports_color()
    print("Configuration (read):")
    gcfg = _global_config_path()
    print(
        f"- Global config file: {_gray(str(gcfg), color_enabled)} "
        f"(exists: {_yes_no(gcfg.is_file(), color_enabled)})"
    )
    paths = _global_config_search_paths()
    if paths:
        print("- Global config search order:")
        for p in paths:
            print(f"  • {_gray(str(p), color_enabled)} (exists: {_yes_no(p.is_file(), color_enabled)})")
    pcfg = Path.cwd() / PROJECT_CONFIG_NAME
    print(
        f"- Project config: {_gray(str(pcfg), color_enabled)} "
        f"(exists: {_yes_no(pcfg.is_file(), color_enabled)})"
    )
    print(f"- User config dir: {_gray(str(_config_root()), color_enabled)}")
    print(f"- Render encoding: {_get_render_encoding()}")

    print("Version manifests (searched in order):")
    for name in MANIFEST_NAMES:
        path = Path.cwd() / name
        print(f"  • {name} (exists: {_yes_no(path.is_file(), color_enabled)})")

    print("Templates (read):")
    print(f"- Bundled templates dir: {_gray(str(bundled_templates_dir()), color_enabled)}")
    for n in list_bundled_templates():
        print(f"  • {_violet(n, color_enabled)}")

    print("Writable locations (write):")
    sroot = _state_root()
    print(
        f"- State root: {_gray(str(sroot), color_enabled)} "
        f"(exists: {_yes_no(sroot.is_dir(), color_enabled)})"
    )
    print(f"- Debug log: {_gray(str(sroot / 'docstamp.log'), color_enabled)}")

    print("Environment overrides (if set):")
    for var in (
        "DOCSTAMP_CONFIG_FILE",
        "DOCSTAMP_CONFIG_DIR",
        "DOCSTAMP_STATE_DIR",
        "XDG_CONFIG_HOME",
        "NO_COLOR",
        "FORCE_COLOR",
    ):
        val = os.environ.get(var)
        if val is not None:
            print(f"- {var}={_gray(val, color_enabled)}")
