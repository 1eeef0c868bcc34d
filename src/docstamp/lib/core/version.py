# SPDX-FileCopyrightText: 2026 Jiri Vyskocil
# SPDX-License-Identifier: Apache-2.0

"""Version and branch information for docstamp itself (``docstamp --version``)."""

import json
import subprocess
from importlib import metadata
from pathlib import Path
from typing import Any


def get_version_info() -> tuple[str, str | None]:
    """Get version and branch information.

    Version comes from the installed ``docstamp`` package (``__version__``).
    The branch is resolved in order:

      1. PEP 610 ``direct_url.json`` for VCS installs
         (``pip install git+https://...``): requested revision or commit id.
      2. Live git detection when running from a source checkout (detected by
         ``pyproject.toml`` next to ``src/``).  Suppressed when HEAD sits on a
         ``vX.Y.Z`` release tag.

    Returns:
        tuple: (version_string, branch_name) where branch_name is None for releases
               or when branch info is not available
    """
    # version.py -> core -> lib -> docstamp -> src -> repo
    repo_root = Path(__file__).parents[4]

    try:
        from docstamp import __version__

        version = __version__
    except (ImportError, AttributeError):
        version = "unknown"

    pep610_revision = _get_pep610_revision()
    if pep610_revision:
        return version, pep610_revision

    branch_name = None
    if (repo_root / "pyproject.toml").exists():
        branch_name = _get_git_branch(repo_root)
    return version, branch_name


def _git(repo_root: Path, *args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        ["git", *args],
        capture_output=True,
        text=True,
        timeout=1,
        cwd=str(repo_root),
    )


def _get_git_branch(repo_root: Path) -> str | None:
    """Return the checked-out branch unless HEAD is at a release tag."""
    try:
        result = _git(repo_root, "rev-parse", "--is-inside-work-tree")
        if result.returncode != 0 or result.stdout.strip() != "true":
            return None
        branch_result = _git(repo_root, "branch", "--show-current")
        detected_branch = branch_result.stdout.strip() if branch_result.returncode == 0 else ""
        if not detected_branch:
            return None
        tag = _git(repo_root, "describe", "--exact-match", "--tags", "HEAD")
        tag_name = tag.stdout.strip()
        is_release = (
            tag.returncode == 0
            and tag_name.startswith("v")
            and len(tag_name) > 1
            and tag_name[1].isdigit()
        )
        return None if is_release else detected_branch
    except (OSError, subprocess.SubprocessError):
        # Git not available - continue without branch info
        return None


def _get_pep610_revision(dist_name: str = "docstamp") -> str | None:
    """Return VCS revision from PEP 610 metadata, if available."""
    try:
        dist = metadata.distribution(dist_name)
        direct_url = dist.read_text("direct_url.json")
    except (
        metadata.PackageNotFoundError,
        FileNotFoundError,
        PermissionError,
        UnicodeDecodeError,
        OSError,
    ):
        return None

    if not direct_url:
        return None

    try:
        data = json.loads(direct_url)
    except json.JSONDecodeError:
        return None

    vcs_info = data.get("vcs_info")
    if not isinstance(vcs_info, dict):
        return None

    def validate_and_strip(value: Any) -> str | None:
        """Validate that value is a non-empty string after stripping whitespace."""
        if isinstance(value, str):
            stripped = value.strip()
            if stripped:
                return stripped
        return None

    if result := validate_and_strip(vcs_info.get("requested_revision")):
        return result
    return validate_and_strip(vcs_info.get("commit_id"))


def format_version_string(version: str, branch: str | None) -> str:
    """Format version and branch into a display string.

    Args:
        version: The version string (e.g., "0.3.1")
        branch: The branch name or None

    Returns:
        Formatted string like "0.3.1" or "0.3.1 [feature-branch]"
    """
    if branch:
        return f"{version} [{branch}]"
    return version
