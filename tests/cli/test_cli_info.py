"""Tests for the informational commands."""

import contextlib
import io
import unittest

from docstamp.cli.main import main
from test_utils import docstamp_env


def run_cli(*argv: str) -> str:
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        main(list(argv))
    return out.getvalue()


class InfoCommandTests(unittest.TestCase):
    def test_placeholders(self) -> None:
        with docstamp_env(files={"t.template": "{{B}} {{A}} {{B}}"}):
            self.assertEqual(run_cli("placeholders", "t.template"), "B\nA\n")

    def test_placeholders_malformed(self) -> None:
        with docstamp_env(files={"t.template": "{{ A }}"}):
            with self.assertRaises(SystemExit) as ctx:
                run_cli("placeholders", "t.template")
            self.assertIn("invalid placeholder name", str(ctx.exception.code))

    def test_bindings_shows_provenance(self) -> None:
        with docstamp_env(
            global_config="bindings:\n  VENDOR: Acme\n",
            project_config="bindings:\n  PRODUCT: Recorder\n",
            files={"Cargo.toml": '[package]\nversion = "2.3.1"\n'},
        ):
            output = run_cli("bindings", "--no-git", "--set", "EXTRA=1")
            for level in ("[global]", "[manifest]", "[project]", "[cli]"):
                self.assertIn(level, output)
            self.assertIn("VERSION = 2.3.1", output)
            self.assertIn("PRODUCT = Recorder", output)
            self.assertIn("VENDOR  = Acme", output)

    def test_bindings_empty(self) -> None:
        with docstamp_env():
            self.assertIn("No bindings defined", run_cli("bindings", "--no-git"))

    def test_templates(self) -> None:
        with docstamp_env():
            self.assertIn("README.md", run_cli("templates").splitlines())

    def test_config(self) -> None:
        with docstamp_env() as env:
            output = run_cli("config")
            self.assertIn(str(env.config_file.resolve()), output)
            self.assertIn("DOCSTAMP_STATE_DIR=", output)
            self.assertIn("Cargo.toml", output)
