# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Tests for the generic config stack engine."""

import unittest
from pathlib import Path

from docstamp.lib._util.config_stack import ConfigScope, ConfigStack, deep_merge


class DeepMergeTests(unittest.TestCase):
    """Tests for deep_merge()."""

    def test_simple_override(self) -> None:
        self.assertEqual(deep_merge({"a": 1, "b": 2}, {"b": 3, "c": 4}), {"a": 1, "b": 3, "c": 4})

    def test_nested_merge(self) -> None:
        base = {"x": {"a": 1, "b": 2}}
        override = {"x": {"b": 3, "c": 4}}
        self.assertEqual(deep_merge(base, override), {"x": {"a": 1, "b": 3, "c": 4}})

    def test_none_deletes_key(self) -> None:
        self.assertEqual(deep_merge({"a": 1, "b": 2}, {"b": None}), {"a": 1})

    def test_null_for_absent_key_is_ignored(self) -> None:
        self.assertEqual(deep_merge({"a": 1}, {"b": None}), {"a": 1})

    def test_key_order_follows_first_appearance(self) -> None:
        self.assertEqual(list(deep_merge({"b": 1, "a": 1}, {"c": 1, "b": 2})), ["b", "a", "c"])

    def test_inputs_not_mutated(self) -> None:
        base = {"x": {"a": 1}}
        override = {"x": {"a": None}}
        deep_merge(base, override)
        self.assertEqual(base, {"x": {"a": 1}})


class ConfigStackTests(unittest.TestCase):
    """Tests for ConfigStack resolution."""

    def test_resolve_section_in_priority_order(self) -> None:
        stack = ConfigStack()
        stack.push(ConfigScope("global", Path("/g.yml"), {"bindings": {"A": "g", "B": "g"}}))
        stack.push(ConfigScope("project", None, {"bindings": {"B": "p"}, "other": 1}))
        stack.push(ConfigScope("cli", None, {"bindings": "not a dict"}))
        self.assertEqual(stack.resolve_section("bindings"), {"A": "g", "B": "p"})
        self.assertEqual([s.level for s in stack.scopes], ["global", "project", "cli"])

    def test_null_in_higher_scope_removes_binding(self) -> None:
        stack = ConfigStack()
        stack.push(ConfigScope("global", None, {"bindings": {"A": "g", "B": "g"}}))
        stack.push(ConfigScope("cli", None, {"bindings": {"A": None}}))
        self.assertEqual(stack.resolve_section("bindings"), {"B": "g"})

    def test_scopes_is_a_copy(self) -> None:
        stack = ConfigStack()
        stack.scopes.append(ConfigScope("x", None, {}))
        self.assertEqual(stack.scopes, [])
