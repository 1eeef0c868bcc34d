"""docstamp package.

Modules:
- docstamp.cli: CLI entry point package (docstamp)
- docstamp.lib.core: Template renderer, binding supply, config, paths, version
- docstamp.lib.util: Output writing and debug logging
- docstamp.lib._util: Internal helpers (config stack, ANSI colors)
- docstamp.ui_utils: Terminal formatting helpers
"""

__all__ = [
    "cli",
    "lib",
    "ui_utils",
]

# Version information - single source of truth using importlib.metadata
try:
    from importlib.metadata import version

    __version__ = version("docstamp")
except Exception:
    # Fallback for development mode when package is not installed
    try:
        import tomllib
        from pathlib import Path

        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                pyproject_data = tomllib.load(f)
                __version__ = pyproject_data["tool"]["poetry"]["version"]
        else:
            __version__ = "unknown"
    except Exception:
        __version__ = "unknown"
