"""Tests for apicontext.serialization."""

from __future__ import annotations

import json
from datetime import date

import yaml

from apicontext.serialization import (
    CIRCULAR_PLACEHOLDER,
    break_cycles,
    safe_json,
    to_json,
    to_yaml,
)


class TestToJson:
    def test_indented(self) -> None:
        assert to_json({"a": 1}) == '{\n  "a": 1\n}'

    def test_unicode_kept(self) -> None:
        assert "café" in to_json({"name": "café"})

    def test_unknown_values_stringified(self) -> None:
        assert json.loads(to_json({"when": date(2024, 1, 2)})) == {"when": "2024-01-02"}

    def test_cycle_degrades(self) -> None:
        data: dict = {"name": "loop"}
        data["self"] = data

        result = json.loads(to_json(data))

        assert result == {"name": "loop", "self": CIRCULAR_PLACEHOLDER}

    def test_safe_json(self) -> None:
        assert json.loads(safe_json({"schema": {"type": "string"}})) == {
            "schema": {"type": "string"}
        }


class TestToYaml:
    def test_block_style_in_order(self) -> None:
        text = to_yaml({"b": 1, "a": {"c": [1, 2]}})
        assert text == "b: 1\na:\n  c:\n  - 1\n  - 2\n"

    def test_no_anchors_for_shared_nodes(self) -> None:
        shared = {"type": "string"}
        text = to_yaml({"x": shared, "y": shared})
        assert "&" not in text and "*" not in text
        assert yaml.safe_load(text) == {"x": shared, "y": shared}

    def test_long_lines_not_wrapped(self) -> None:
        long = "word " * 60
        text = to_yaml({"description": long.strip()})
        assert len(text.splitlines()) == 1

    def test_cycle_degrades(self) -> None:
        data: list = [1]
        data.append(data)
        assert yaml.safe_load(to_yaml(data)) == [1, CIRCULAR_PLACEHOLDER]

    def test_unrepresentable_value(self) -> None:
        text = to_yaml({"obj": object()})
        assert yaml.safe_load(text)["obj"].startswith("<object object")


class TestBreakCycles:
    def test_shared_sibling_copied(self) -> None:
        shared = {"k": "v"}
        assert break_cycles({"a": shared, "b": shared}) == {"a": shared, "b": shared}

    def test_nested_cycle(self) -> None:
        outer: dict = {"inner": {}}
        outer["inner"]["back"] = outer
        assert break_cycles(outer) == {"inner": {"back": CIRCULAR_PLACEHOLDER}}

    def test_scalars_unchanged(self) -> None:
        assert break_cycles(5) == 5
