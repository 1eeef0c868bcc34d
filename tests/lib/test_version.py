"""Tests for docstamp's own version and branch detection."""

import json
import subprocess
import unittest
from pathlib import Path
from unittest import mock

from docstamp.lib.core import version as v


def _completed(returncode: int, stdout: str) -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(["git"], returncode, stdout=stdout, stderr="")


class VersionDetectionTests(unittest.TestCase):
    """Test version detection in __init__.py."""

    def test_version_attribute_exists(self) -> None:
        """Test that __version__ attribute exists and is a string."""
        import docstamp

        self.assertIsInstance(docstamp.__version__, str)
        self.assertNotEqual(docstamp.__version__, "")

    def test_get_version_info_returns_package_version(self) -> None:
        import docstamp

        with mock.patch.object(v, "_get_pep610_revision", return_value=None), mock.patch.object(
            v, "_get_git_branch", return_value=None
        ):
            self.assertEqual(v.get_version_info(), (docstamp.__version__, None))

    def test_pep610_revision_wins(self) -> None:
        with mock.patch.object(v, "_get_pep610_revision", return_value="main"):
            self.assertEqual(v.get_version_info()[1], "main")


class BranchDetectionTests(unittest.TestCase):
    """Live git branch detection."""

    def test_branch_shown_when_not_on_release_tag(self) -> None:
        results = [_completed(0, "true\n"), _completed(0, "feature-x\n"), _completed(128, "")]
        with mock.patch("docstamp.lib.core.version.subprocess.run", side_effect=results):
            self.assertEqual(v._get_git_branch(Path(".")), "feature-x")

    def test_branch_hidden_on_release_tag(self) -> None:
        results = [_completed(0, "true\n"), _completed(0, "main\n"), _completed(0, "v1.2.3\n")]
        with mock.patch("docstamp.lib.core.version.subprocess.run", side_effect=results):
            self.assertIsNone(v._get_git_branch(Path(".")))

    def test_not_a_work_tree(self) -> None:
        with mock.patch(
            "docstamp.lib.core.version.subprocess.run", return_value=_completed(128, "")
        ):
            self.assertIsNone(v._get_git_branch(Path(".")))

    def test_git_not_installed(self) -> None:
        with mock.patch(
            "docstamp.lib.core.version.subprocess.run", side_effect=FileNotFoundError("git")
        ):
            self.assertIsNone(v._get_git_branch(Path(".")))


class Pep610Tests(unittest.TestCase):
    def _dist(self, payload: str | None) -> mock.MagicMock:
        dist = mock.MagicMock()
        dist.read_text.return_value = payload
        return dist

    def _patched(self, payload: str | None):
        return mock.patch(
            "docstamp.lib.core.version.metadata.distribution", return_value=self._dist(payload)
        )

    def test_requested_revision(self) -> None:
        payload = json.dumps(
            {"vcs_info": {"vcs": "git", "requested_revision": " dev ", "commit_id": "abc"}}
        )
        with self._patched(payload):
            self.assertEqual(v._get_pep610_revision(), "dev")

    def test_commit_id_fallback(self) -> None:
        payload = json.dumps({"vcs_info": {"vcs": "git", "commit_id": "abc123"}})
        with self._patched(payload):
            self.assertEqual(v._get_pep610_revision(), "abc123")

    def test_local_install_has_no_vcs_info(self) -> None:
        payload = json.dumps({"url": "file:///src/docstamp", "dir_info": {"editable": True}})
        with self._patched(payload):
            self.assertIsNone(v._get_pep610_revision())

    def test_not_installed(self) -> None:
        with mock.patch(
            "docstamp.lib.core.version.metadata.distribution",
            side_effect=v.metadata.PackageNotFoundError("docstamp"),
        ):
            self.assertIsNone(v._get_pep610_revision())


class FormatVersionStringTests(unittest.TestCase):
    def test_without_branch(self) -> None:
        self.assertEqual(v.format_version_string("0.2.0", None), "0.2.0")

    def test_with_branch(self) -> None:
        self.assertEqual(v.format_version_string("0.2.0", "dev"), "0.2.0 [dev]")
