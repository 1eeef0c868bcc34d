#!/usr/bin/env python3

import argparse
import sys

import argcomplete
import yaml

from ..lib.core.version import format_version_string, get_version_info
from ..lib.util.logging_utils import _log_debug
from ..ui_utils.terminal import red, supports_color
from .commands import info, render

COMMAND_MODULES = (render, info)


def build_parser() -> argparse.ArgumentParser:
    version, branch = get_version_info()
    version_string = format_version_string(version, branch)

    parser = argparse.ArgumentParser(
        prog="docstamp",
        description="docstamp – stamp release metadata into {{NAME}} documentation templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Quick start:\n"
            "  docstamp render README.md.template   (VERSION from Cargo.toml/pyproject.toml)\n"
            "  docstamp render README.md.template --release-version 2.3.1\n"
            "  docstamp render README.md.template -o dist/README.md --set PRODUCT=Recorder\n"
            "  docstamp check docs/*.template       (validate without writing)\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"docstamp {version_string}")
    sub = parser.add_subparsers(dest="cmd", required=True)
    for module in COMMAND_MODULES:
        module.register(sub)
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    argcomplete.autocomplete(parser)  # pragma: no cover - shell integration
    args = parser.parse_args(argv)

    try:
        for module in COMMAND_MODULES:
            if module.dispatch(args):
                return
    except (ValueError, OSError, yaml.YAMLError) as e:
        # TemplateError and BindingError are ValueErrors
        _log_debug(f"{args.cmd} failed: {e}")
        raise SystemExit(red(f"docstamp: {e}", supports_color(sys.stderr))) from e
    parser.error(f"Unknown command: {args.cmd}")


if __name__ == "__main__":
    main()
