# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Rendering commands: render, check."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ...lib.core.bindings import build_binding_stack, parse_assignments, resolve_bindings
from ...lib.core.config import (
    check_encoding,
    get_render_encoding,
    load_project_config,
    project_config_path,
)
from ...lib.core.template import (
    TEMPLATE_SUFFIX,
    Template,
    TemplateError,
    load_bundled_template,
    load_template,
)
from ...lib.util.fs import write_text_atomic
from ...lib.util.logging_utils import _log_debug
from ...ui_utils.terminal import gray, green, red, supports_color
from ._completers import (
    complete_bundled_templates,
    config_files,
    manifest_files,
    set_completer,
    template_files,
)


def add_binding_arguments(parser: argparse.ArgumentParser) -> None:
    """Options shared by every command that resolves a binding set."""
    parser.add_argument(
        "--release-version",
        metavar="VERSION",
        help="Value for {{VERSION}} (overrides manifest and config)",
    )
    parser.add_argument(
        "--set",
        dest="assignments",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Bind KEY to VALUE (repeatable, highest priority)",
    )
    _a = parser.add_argument(
        "--manifest",
        type=Path,
        help="Read VERSION from this Cargo.toml, pyproject.toml or package.json",
    )
    set_completer(_a, manifest_files)
    _a = parser.add_argument(
        "--config",
        type=Path,
        help="Project config file (default: ./docstamp.yml)",
    )
    set_completer(_a, config_files)
    parser.add_argument(
        "--no-git",
        action="store_true",
        help="Do not fall back to a vX.Y.Z git tag at HEAD for VERSION",
    )


def resolve_from_args(args: argparse.Namespace):
    """Build the binding stack for parsed *args*; returns ``(stack, bindings)``."""
    stack = build_binding_stack(
        config_file=args.config,
        manifest=args.manifest,
        release_version=args.release_version,
        overrides=parse_assignments(args.assignments),
        use_git=not args.no_git,
    )
    return stack, resolve_bindings(stack)


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Register rendering subcommands (render, check)."""
    p_render = subparsers.add_parser(
        "render",
        help="Render a template, substituting {{NAME}} placeholders",
        description=(
            "Render TEMPLATE with the resolved binding set. Without --output the\n"
            "result is written next to the template with the .template suffix\n"
            "removed (README.md.template -> README.md)."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _a = p_render.add_argument(
        "template", nargs="?", type=Path, help="Template file (default: 'template' in docstamp.yml)"
    )
    set_completer(_a, template_files)
    _a = p_render.add_argument("--bundled", metavar="NAME", help="Render a bundled template")
    set_completer(_a, complete_bundled_templates)
    p_render.add_argument("-o", "--output", type=Path, help="Output file")
    p_render.add_argument(
        "--stdout", action="store_true", help="Print the rendered document instead of writing it"
    )
    p_render.add_argument("--encoding", help="Template and output encoding (default: utf-8)")
    add_binding_arguments(p_render)

    p_check = subparsers.add_parser(
        "check", help="Verify templates are well formed and fully bound, without writing"
    )
    _a = p_check.add_argument("templates", nargs="+", type=Path, help="Template files")
    set_completer(_a, template_files)
    p_check.add_argument("--encoding", help="Template encoding (default: utf-8)")
    add_binding_arguments(p_check)


def dispatch(args: argparse.Namespace) -> bool:
    """Handle render and check commands.  Returns True if handled."""
    if args.cmd == "render":
        _cmd_render(args)
        return True
    if args.cmd == "check":
        _cmd_check(args)
        return True
    return False


def _encoding(args: argparse.Namespace) -> str:
    if args.encoding:
        return check_encoding(args.encoding)
    return get_render_encoding()


def _project_defaults(args: argparse.Namespace) -> tuple[dict, Path]:
    cfg_path = project_config_path(args.config)
    return load_project_config(cfg_path), cfg_path.parent


def _load_source(
    args: argparse.Namespace, cfg: dict, base: Path, encoding: str
) -> tuple[Template, Path | None]:
    """Return the template to render and its path (None for bundled ones)."""
    if args.bundled and args.template:
        raise SystemExit("Give either a TEMPLATE path or --bundled, not both")
    if args.bundled:
        return load_bundled_template(args.bundled), None

    path = args.template
    if path is None and cfg.get("template"):
        path = base / str(cfg["template"])
    if path is None:
        raise SystemExit(
            "No template given (pass TEMPLATE or --bundled, or set 'template' in docstamp.yml)"
        )
    return load_template(path, encoding=encoding), path


def _output_path(args: argparse.Namespace, cfg: dict, base: Path, source: Path | None) -> Path:
    if args.output is not None:
        return args.output
    if cfg.get("output"):
        return base / str(cfg["output"])
    if source is not None and source.name.endswith(TEMPLATE_SUFFIX):
        return source.with_name(source.name[: -len(TEMPLATE_SUFFIX)])
    raise SystemExit("Cannot derive an output name; pass --output or --stdout")


def _cmd_render(args: argparse.Namespace) -> None:
    encoding = _encoding(args)
    cfg, base = _project_defaults(args)
    template, source = _load_source(args, cfg, base, encoding)
    _, bindings = resolve_from_args(args)

    rendered = template.render(bindings)

    if args.stdout:
        sys.stdout.write(rendered)
        _log_debug(f"render {template.source} -> <stdout> keys={sorted(bindings)}")
        return

    output = _output_path(args, cfg, base, source)
    if source is not None and output.resolve() == source.resolve():
        raise SystemExit(f"Refusing to overwrite the template itself: {output}")
    write_text_atomic(output, rendered, encoding=encoding)
    _log_debug(f"render {template.source} -> {output} keys={sorted(bindings)}")

    color_enabled = supports_color()
    version = bindings.get("VERSION")
    suffix = f" (VERSION={version})" if version is not None else ""
    print(f"Rendered {gray(template.source, color_enabled)} -> {output}{suffix}")


def _cmd_check(args: argparse.Namespace) -> None:
    encoding = _encoding(args)
    _, bindings = resolve_from_args(args)
    color_enabled = supports_color()

    failures = 0
    for path in args.templates:
        try:
            template = load_template(path, encoding=encoding)
        except TemplateError as e:
            failures += 1
            print(f"{red('FAIL', color_enabled)} {e}")
            continue
        except (OSError, UnicodeDecodeError) as e:
            failures += 1
            print(f"{red('FAIL', color_enabled)} {path}: {e}")
            continue
        missing = template.missing(bindings)
        if missing:
            failures += 1
            print(f"{red('FAIL', color_enabled)} {path}: missing binding(s): {', '.join(missing)}")
        else:
            count = len(template.names)
            print(f"{green('ok', color_enabled)}   {path} ({count} placeholder(s))")

    _log_debug(f"check {len(args.templates)} template(s), {failures} failure(s)")
    if failures:
        raise SystemExit(1)
