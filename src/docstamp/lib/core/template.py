# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Single-pass ``{{NAME}}`` placeholder substitution.

A template is plain text with zero or more markers of the form ``{{NAME}}``
where ``NAME`` is made of ASCII letters, digits and underscores.  Rendering
replaces every marker with its bound value.  Replacement text is emitted as
is and never scanned again, so a value that happens to contain ``{{X}}``
ends up in the output verbatim.

The renderer is all-or-nothing: an unterminated marker or a marker whose
name has no binding raises, and no partial document is returned.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path

OPEN = "{{"
CLOSE = "}}"

NAME_PATTERN = re.compile(r"[A-Za-z0-9_]+")

STRING_SOURCE = "<string>"


class TemplateError(ValueError):
    """Base class for rendering failures tied to a position in a template."""

    def __init__(self, message: str, *, source: str, offset: int, line: int, column: int):
        self.source = source
        self.offset = offset
        self.line = line
        self.column = column
        super().__init__(f"{source}:{line}:{column}: {message}")


class MalformedTemplateError(TemplateError):
    """A marker is unterminated or does not enclose a valid name."""

    def __init__(self, message: str, *, fragment: str, **kwargs):
        self.fragment = fragment
        super().__init__(message, **kwargs)


class MissingBindingError(TemplateError):
    """A well-formed marker names a placeholder with no binding."""

    def __init__(self, name: str, **kwargs):
        self.name = name
        super().__init__(f"missing binding for '{name}'", **kwargs)


def is_valid_name(name: str) -> bool:
    """Return True if *name* is usable as a placeholder name."""
    return NAME_PATTERN.fullmatch(name) is not None


def _location(text: str, offset: int) -> tuple[int, int]:
    """Return the 1-based (line, column) of *offset* within *text*."""
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return line, column


def _fragment(text: str, start: int, limit: int = 40) -> str:
    snippet = text[start : start + limit]
    return snippet if start + limit >= len(text) else snippet + "..."


@dataclass(frozen=True)
class _Marker:
    name: str
    start: int


def _scan(text: str, source: str) -> Iterator[str | _Marker]:
    """Yield literal chunks and markers of *text* in order."""
    pos = 0
    while True:
        start = text.find(OPEN, pos)
        if start < 0:
            if pos < len(text):
                yield text[pos:]
            return
        if start > pos:
            yield text[pos:start]

        close = text.find(CLOSE, start + len(OPEN))
        if close < 0:
            line, column = _location(text, start)
            raise MalformedTemplateError(
                "unterminated placeholder (missing '}}')",
                fragment=_fragment(text, start),
                source=source,
                offset=start,
                line=line,
                column=column,
            )

        name = text[start + len(OPEN) : close]
        if not is_valid_name(name):
            line, column = _location(text, start)
            raise MalformedTemplateError(
                f"invalid placeholder name {name!r}",
                fragment=text[start : close + len(CLOSE)],
                source=source,
                offset=start,
                line=line,
                column=column,
            )

        pos = close + len(CLOSE)
        yield _Marker(name, start)


@dataclass(frozen=True)
class Template:
    """A read-only template document.

    Scanning happens at construction time, so a malformed template is
    rejected as soon as it is loaded.
    """

    content: str
    source: str = STRING_SOURCE
    names: tuple[str, ...] = field(init=False, default=())

    def __post_init__(self) -> None:
        seen: dict[str, None] = {}
        for part in _scan(self.content, self.source):
            if isinstance(part, _Marker):
                seen.setdefault(part.name, None)
        object.__setattr__(self, "names", tuple(seen))

    @classmethod
    def from_string(cls, text: str, source: str = STRING_SOURCE) -> Template:
        return cls(content=text, source=source)

    @property
    def placeholders(self) -> frozenset[str]:
        """All placeholder names used by the template."""
        return frozenset(self.names)

    def missing(self, bindings: Mapping[str, object]) -> list[str]:
        """Return the sorted placeholder names that *bindings* leaves unbound."""
        return sorted(name for name in self.names if name not in bindings)

    def render(self, bindings: Mapping[str, object]) -> str:
        return render(self, bindings)


def render(template: str | Template, bindings: Mapping[str, object]) -> str:
    """Replace every ``{{NAME}}`` marker in *template* with ``bindings[NAME]``.

    Args:
        template: Template text or a loaded :class:`Template`.
        bindings: Placeholder name to replacement value.  Values are
            converted with ``str()``.

    Returns:
        The fully resolved document.

    Raises:
        MalformedTemplateError: A marker is unterminated or its name is invalid.
        MissingBindingError: A marker names a placeholder absent from *bindings*.
    """
    if isinstance(template, Template):
        text, source = template.content, template.source
    else:
        text, source = template, STRING_SOURCE

    out: list[str] = []
    for part in _scan(text, source):
        if isinstance(part, _Marker):
            if part.name not in bindings:
                line, column = _location(text, part.start)
                raise MissingBindingError(
                    part.name, source=source, offset=part.start, line=line, column=column
                )
            out.append(str(bindings[part.name]))
        else:
            out.append(part)
    return "".join(out)


def load_template(path: Path, encoding: str = "utf-8") -> Template:
    """Read *path* and parse it as a template.

    Line endings are kept as they are in the file.
    """
    return Template.from_string(path.read_bytes().decode(encoding), source=str(path))


# ---------- Bundled templates ----------

TEMPLATE_SUFFIX = ".template"


def bundled_templates_dir():
    """Traversable for templates shipped inside the package."""
    return resources.files("docstamp") / "resources" / "templates"


def list_bundled_templates() -> list[str]:
    """Names (without the ``.template`` suffix) of the bundled templates."""
    try:
        children = list(bundled_templates_dir().iterdir())
    except FileNotFoundError:
        return []
    return sorted(
        child.name[: -len(TEMPLATE_SUFFIX)]
        for child in children
        if child.is_file() and child.name.endswith(TEMPLATE_SUFFIX)
    )


def load_bundled_template(name: str) -> Template:
    """Load the bundled template *name* (e.g. ``"README.md"``)."""
    resource = bundled_templates_dir() / f"{name}{TEMPLATE_SUFFIX}"
    if not resource.is_file():
        available = ", ".join(list_bundled_templates()) or "none"
        raise FileNotFoundError(f"No bundled template named '{name}' (available: {available})")
    return Template.from_string(
        resource.read_bytes().decode("utf-8"), source=f"bundled:{name}"
    )
