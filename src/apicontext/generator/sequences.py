"""List helpers for template iteration."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from pydantic import BaseModel

M = TypeVar("M", bound=BaseModel)


def mark_has_more(items: Sequence[M]) -> list[M]:
    """Return copies of *items* with ``has_more`` false on the last one only.

    Templates use the flag to emit separators between, but not after,
    list elements.
    """
    last = len(items) - 1
    return [
        item.model_copy(update={"has_more": index != last})
        for index, item in enumerate(items)
    ]
