"""Dereference ``$ref`` pointers, leaving a marker naming each origin.

Every ``{"$ref": "#/..."}`` node is replaced by a copy of its target with an
extra marker key (``x-oldref`` by default) holding the original reference
string. Downstream code can therefore treat the document as a plain tree yet
still recover the component a node came from -- the operation extractor uses
it to name response types after their schema component.

Only **internal** references (``#/...``) are followed. Circular references
are detected per branch and left as ``$ref`` nodes at the cycle point, and a
container that contains itself becomes ``"[Circular]"``, so the result is
always a finite tree.

The single public function is :func:`dereference`.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from apicontext.exceptions import DocumentError
from apicontext.serialization import CIRCULAR_PLACEHOLDER

logger = logging.getLogger(__name__)

REF_MARKER = "x-oldref"
"""Key recording the original ``$ref`` string on each inlined node."""


def dereference(
    document: dict[str, Any],
    marker: str = REF_MARKER,
    strict: bool = True,
) -> dict[str, Any]:
    """Return a dereferenced deep copy of *document*.

    Args:
        document: The API document; never modified.
        marker: Key under which each inlined node records its ``$ref``.
        strict: When ``True``, unresolvable and external references raise.
            When ``False`` they are kept as ``$ref`` nodes and logged.

    Returns:
        A new document in which every resolvable internal reference has
        been inlined.

    Raises:
        DocumentError: In strict mode, for a dangling or external reference.

    Example::

        doc = dereference(raw)
        schema = doc["paths"]["/pets"]["get"]["responses"]["200"]["content"][
            "application/json"]["schema"]
        schema["x-oldref"]  # '#/components/schemas/Pets'
    """
    root = copy.deepcopy(document)
    return _deep_resolve(root, root, marker, strict, frozenset())


def _resolve_pointer(ref: str, root: dict[str, Any]) -> Any:
    """Follow the JSON Pointer in *ref* through *root* (RFC 6901 escaping).

    Raises:
        DocumentError: For external references or missing path segments.
    """
    if not ref.startswith("#/"):
        raise DocumentError(
            f"External $ref not supported: {ref}. "
            "Only internal references (#/...) are handled."
        )

    current: Any = root
    for segment in ref[2:].split("/"):
        segment = segment.replace("~1", "/").replace("~0", "~")

        if isinstance(current, dict):
            if segment not in current:
                raise DocumentError(
                    f"Cannot resolve $ref '{ref}': key '{segment}' not found"
                )
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError) as exc:
                raise DocumentError(
                    f"Cannot resolve $ref '{ref}': invalid array index '{segment}'"
                ) from exc
        else:
            raise DocumentError(
                f"Cannot resolve $ref '{ref}': "
                f"cannot navigate into {type(current).__name__}"
            )

    return current


def _deep_resolve(
    obj: Any,
    root: dict[str, Any],
    marker: str,
    strict: bool,
    seen: frozenset[str],
    stack: tuple[int, ...] = (),
) -> Any:
    """Recursively inline references below *obj*.

    *seen* holds the references currently being expanded on this branch;
    sibling branches get their own copy so a component used twice is
    inlined twice. *stack* holds the ids of the containers being expanded
    since the last followed reference; a container that contains itself is
    replaced by :data:`~apicontext.serialization.CIRCULAR_PLACEHOLDER`.
    """
    if isinstance(obj, (dict, list)):
        if id(obj) in stack:
            logger.warning("Replacing self-containing object with %s", CIRCULAR_PLACEHOLDER)
            return CIRCULAR_PLACEHOLDER
        stack = stack + (id(obj),)

    if isinstance(obj, dict):
        ref = obj.get("$ref")
        if isinstance(ref, str):
            if ref in seen:
                return dict(obj)
            try:
                target = _resolve_pointer(ref, root)
            except DocumentError:
                if strict:
                    raise
                logger.warning("Leaving unresolvable reference in place: %s", ref)
                return dict(obj)

            resolved = _deep_resolve(target, root, marker, strict, seen | {ref})
            if not isinstance(resolved, dict):
                return resolved

            # OpenAPI 3.1 lets summary/description sit beside a $ref
            siblings = {
                key: _deep_resolve(value, root, marker, strict, seen, stack)
                for key, value in obj.items()
                if key != "$ref"
            }
            return {**resolved, **siblings, marker: ref}

        return {
            key: _deep_resolve(value, root, marker, strict, seen, stack)
            for key, value in obj.items()
        }

    if isinstance(obj, list):
        return [_deep_resolve(item, root, marker, strict, seen, stack) for item in obj]

    return obj
