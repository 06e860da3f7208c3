"""Per-language type-name strategies.

A *type map* rewrites a raw OpenAPI type keyword (``integer``, ``array``...)
into the spelling a target language's templates expect. The strategy is
selected once per :func:`~apicontext.generator.context_builder.transform`
call with :func:`get_type_map` and handed explicitly to the operation
extractor and the schema flattener, so concurrent transforms targeting
different languages never share state.

Built-in dialects:

* ``nop`` / ``generic`` -- identity.
* ``java`` -- appends ``?`` to the type of every non-required value.
* ``javascript`` -- ``integer`` becomes ``number``.
* ``typescript`` -- ``integer`` becomes ``number`` and arrays become
  ``Array<Element>`` with the element type mapped recursively.
"""

from __future__ import annotations

from typing import Any, Optional


class TypeMap:
    """Identity type map. Subclasses override :meth:`map_type`."""

    name = "nop"

    def map_type(
        self,
        type_name: Optional[str],
        required: bool,
        schema: dict[str, Any],
    ) -> Optional[str]:
        """Return the target-language spelling of *type_name*.

        Args:
            type_name: The raw ``type`` keyword, or ``None`` when the schema
                declares none.
            required: Whether the value is required in its parent.
            schema: The full schema node, needed for container element types.
        """
        return type_name

    def __call__(
        self,
        type_name: Optional[str],
        required: bool,
        schema: dict[str, Any],
    ) -> Optional[str]:
        return self.map_type(type_name, required, schema)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class JavaTypeMap(TypeMap):
    """Nullable-style mapping: optional values get a ``?`` suffix."""

    name = "java"

    def map_type(self, type_name, required, schema):
        if type_name is None:
            return None
        if not required:
            return type_name + "?"
        return type_name


class JavaScriptTypeMap(TypeMap):
    name = "javascript"

    def map_type(self, type_name, required, schema):
        if type_name == "integer":
            return "number"
        return type_name


class TypeScriptTypeMap(TypeMap):
    """Array-generic mapping: ``array`` of ``integer`` becomes ``Array<number>``."""

    name = "typescript"

    def map_type(self, type_name, required, schema):
        if type_name == "integer":
            return "number"
        if type_name == "array":
            items = schema.get("items")
            item_type = schema_type(items)
            if item_type:
                return f"Array<{self.map_type(item_type, False, items)}>"
            return "Array"
        return type_name


_REGISTRY: dict[str, type[TypeMap]] = {
    "nop": TypeMap,
    "generic": TypeMap,
    "java": JavaTypeMap,
    "javascript": JavaScriptTypeMap,
    "typescript": TypeScriptTypeMap,
}


def available_languages() -> list[str]:
    """Return the language names accepted by :func:`get_type_map`."""
    return sorted(_REGISTRY)


def get_type_map(language: Optional[str]) -> TypeMap:
    """Return a fresh type map for *language* (case-insensitive).

    Unknown or empty language names fall back to the identity map.
    """
    cls = _REGISTRY.get((language or "").lower(), TypeMap)
    return cls()


def schema_type(schema: Any) -> Optional[str]:
    """Return the ``type`` keyword of *schema*, or ``None`` when absent.

    OpenAPI 3.1 type arrays (``["string", "null"]``) yield their first
    non-null member.
    """
    if not isinstance(schema, dict):
        return None
    type_value = schema.get("type")
    if isinstance(type_value, list):
        non_null = [t for t in type_value if t != "null"]
        return str(non_null[0]) if non_null else None
    if type_value is None:
        return None
    return str(type_value)
