"""JSON and YAML serialization of documents and schema fragments.

Serialization feeds template text (``openapi-yaml``, ``jsonSchema``...), so
it must never abort a transform. When a structure cannot be dumped as-is --
typically a cycle the dereferencer could not break, or a value with no
JSON/YAML representation -- the dump is retried on a copy where cycles are
replaced by the string ``"[Circular]"`` and unknown values by their ``str()``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CIRCULAR_PLACEHOLDER = "[Circular]"


class _BlockDumper(yaml.SafeDumper):
    """Safe dumper that never emits anchors/aliases for shared nodes."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def to_json(data: Any, indent: int = 2) -> str:
    """Dump *data* as indented JSON, degrading gracefully on cycles."""
    try:
        return json.dumps(data, indent=indent, ensure_ascii=False, default=str)
    except (ValueError, RecursionError) as exc:
        logger.warning("JSON serialization fell back to cycle-safe mode: %s", exc)
        return json.dumps(
            break_cycles(data), indent=indent, ensure_ascii=False, default=str
        )


def to_yaml(data: Any) -> str:
    """Dump *data* as block-style YAML preserving key order, degrading gracefully."""
    try:
        return _dump_yaml(data)
    except (yaml.YAMLError, RecursionError) as exc:
        logger.warning("YAML serialization fell back to cycle-safe mode: %s", exc)
        # Round-trip through JSON to coerce unrepresentable values to strings
        return _dump_yaml(json.loads(to_json(break_cycles(data))))


def safe_json(data: Any) -> str:
    """Serialize a schema fragment for documentation fields such as ``jsonSchema``."""
    return to_json(data)


def break_cycles(data: Any, _stack: tuple[int, ...] = ()) -> Any:
    """Return a copy of *data* with self-referencing containers replaced.

    Only containers that appear again inside themselves are replaced; an
    object shared by two siblings is copied twice.
    """
    if isinstance(data, (dict, list)):
        if id(data) in _stack:
            return CIRCULAR_PLACEHOLDER
        stack = _stack + (id(data),)
        if isinstance(data, dict):
            return {key: break_cycles(value, stack) for key, value in data.items()}
        return [break_cycles(item, stack) for item in data]
    return data


def _dump_yaml(data: Any) -> str:
    return yaml.dump(
        data,
        Dumper=_BlockDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=float("inf"),
    )
