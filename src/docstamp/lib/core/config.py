import codecs
import os
import sys
from pathlib import Path
from typing import Any

import yaml  # pip install pyyaml

from .paths import config_root as _config_root_base, state_root as _state_root_base

PROJECT_CONFIG_NAME = "docstamp.yml"

# ---------- Global config ----------


def global_config_search_paths() -> list[Path]:
    """Return the ordered list of paths that will be checked for global config.

    Behavior matches global_config_path():
    - If DOCSTAMP_CONFIG_FILE is set, only that single path is considered.
    - Otherwise, check in order:
        1) ${XDG_CONFIG_HOME:-~/.config}/docstamp/config.yml
        2) sys.prefix/etc/docstamp/config.yml
        3) /etc/docstamp/config.yml
    """
    env_file = os.environ.get("DOCSTAMP_CONFIG_FILE")
    if env_file:
        return [Path(env_file).expanduser().resolve()]

    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    user_cfg = (Path(xdg_home) if xdg_home else Path.home() / ".config") / "docstamp" / "config.yml"
    sp_cfg = Path(sys.prefix) / "etc" / "docstamp" / "config.yml"
    etc_cfg = Path("/etc/docstamp/config.yml")
    return [user_cfg, sp_cfg, etc_cfg]


def global_config_path() -> Path:
    """Global config file path (resolved based on search paths).

    Resolution order (first existing wins, except explicit override is returned even
    if missing to make intent visible to the user):
    - DOCSTAMP_CONFIG_FILE env (returned as-is)
    - ${XDG_CONFIG_HOME:-~/.config}/docstamp/config.yml (user override)
    - sys.prefix/etc/docstamp/config.yml (pip wheels)
    - /etc/docstamp/config.yml (system default)
    If none exist, return the last path (/etc/docstamp/config.yml).
    """
    candidates = global_config_search_paths()
    if len(candidates) == 1:
        return candidates[0]

    for c in candidates:
        if c.is_file():
            return c.resolve()
    return candidates[-1]


def _load_yaml_mapping(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def load_global_config() -> dict[str, Any]:
    cfg_path = global_config_path()
    if not cfg_path.is_file():
        return {}
    return _load_yaml_mapping(cfg_path)


def get_global_section(key: str) -> dict[str, Any]:
    """Return a top-level section from the global config, defaulting to ``{}``.

    If the value under *key* is not a dict (e.g. the user wrote ``render: "oops"``),
    returns ``{}`` to avoid ``AttributeError`` in callers that expect ``.get()``.
    """
    cfg = load_global_config()
    value = cfg.get(key, {})
    if not isinstance(value, dict):
        return {}
    return value or {}


# ---------- Project config ----------


def project_config_path(explicit: Path | None = None, cwd: Path | None = None) -> Path:
    """Path of the project config: *explicit* if given, else ``./docstamp.yml``."""
    if explicit is not None:
        return Path(explicit).expanduser().resolve()
    return (cwd or Path.cwd()) / PROJECT_CONFIG_NAME


def load_project_config(path: Path) -> dict[str, Any]:
    """Load the project config at *path*; a missing file yields ``{}``."""
    if not path.is_file():
        return {}
    return _load_yaml_mapping(path)


# ---------- Path resolution ----------


def state_root() -> Path:
    """Writable state directory (debug log).

    Precedence:
    - Environment variable DOCSTAMP_STATE_DIR (handled first)
    - If set in global config (paths.state_root), use it.
    - Otherwise, use docstamp.lib.core.paths.state_root() (FHS/XDG handling).
    """
    env = os.environ.get("DOCSTAMP_STATE_DIR")
    if env:
        return Path(env).expanduser().resolve()

    try:
        val = get_global_section("paths").get("state_root")
        if val:
            return Path(val).expanduser().resolve()
    except (OSError, TypeError, ValueError, yaml.YAMLError):
        pass

    return _state_root_base().resolve()


def config_root() -> Path:
    """User configuration directory (see ``paths.config_root``)."""
    return _config_root_base().resolve()


def check_encoding(name: str) -> str:
    """Return *name* if Python knows the codec, else raise ValueError."""
    try:
        codecs.lookup(name)
    except LookupError as e:
        raise ValueError(f"Unknown encoding: {name!r}") from e
    return name


def get_render_encoding() -> str:
    """Return ``render.encoding`` from global config (default ``utf-8``)."""
    return check_encoding(str(get_global_section("render").get("encoding", "utf-8")))
