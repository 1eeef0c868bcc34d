import contextlib
import os
import tempfile
import types
import unittest.mock
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path


def write_file(root: Path, name: str, text: str) -> Path:
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@contextmanager
def docstamp_env(
    *,
    global_config: str | None = None,
    project_config: str | None = None,
    files: dict[str, str] | None = None,
    extra_env: dict[str, str] | None = None,
) -> Iterator[types.SimpleNamespace]:
    """Create a temp project directory, chdir into it and isolate env vars.

    Yields a namespace with: base, project, state_dir, config_file.
    The global config file path is always set (it need not exist), so the
    user's real ``~/.config/docstamp/config.yml`` never leaks into tests.
    """
    with tempfile.TemporaryDirectory() as td:
        base = Path(td)
        project = base / "project"
        project.mkdir()
        state_dir = base / "state"
        config_file = base / "global" / "config.yml"
        if global_config is not None:
            write_file(config_file.parent, config_file.name, global_config)
        if project_config is not None:
            write_file(project, "docstamp.yml", project_config)
        for name, text in (files or {}).items():
            write_file(project, name, text)

        env_vars: dict[str, str] = {
            "DOCSTAMP_CONFIG_FILE": str(config_file),
            "DOCSTAMP_STATE_DIR": str(state_dir),
            "NO_COLOR": "1",
        }
        if extra_env:
            env_vars.update(extra_env)

        with (
            unittest.mock.patch.dict(os.environ, env_vars),
            contextlib.chdir(project),
        ):
            yield types.SimpleNamespace(
                base=base,
                project=project,
                state_dir=state_dir,
                config_file=config_file,
            )
