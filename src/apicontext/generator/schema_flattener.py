"""Flatten named schemas into lists of model variables.

:func:`walk_schema` is a depth-bounded traversal over the schema edges that
can carry properties: ``properties``, ``additionalProperties`` and
``items``. It yields one :class:`SchemaVisit` per node with the node's
depth, its parent and the edge it was reached through.

:func:`flatten_schema` keeps only depth-1 visits that resolve to a name --
the schema's own top-level properties -- and turns each into a
:class:`~apicontext.models.Variable`. Nested object structure is not
flattened into the parent; it remains available through the model's
``modelJson`` payload.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any, NamedTuple, Optional

from apicontext.generator.sequences import mark_has_more
from apicontext.models import Model, ModelContainer, Variable
from apicontext.naming import component_name, optional_str, to_camel_case
from apicontext.parser.resolver import REF_MARKER
from apicontext.serialization import safe_json
from apicontext.typemaps import TypeMap, schema_type

logger = logging.getLogger(__name__)

_CONTAINER_TYPES = frozenset({"object", "array"})
_NAMED_EDGES = frozenset({"properties", "additionalProperties"})


class SchemaVisit(NamedTuple):
    """One node reached by :func:`walk_schema`."""

    node: dict[str, Any]
    parent: Optional[dict[str, Any]]
    depth: int
    path: tuple[str, ...]
    edge: tuple[str, ...]


def walk_schema(
    schema: dict[str, Any],
    max_depth: int = 1,
    *,
    parent: Optional[dict[str, Any]] = None,
    depth: int = 0,
    path: tuple[str, ...] = (),
    edge: tuple[str, ...] = (),
) -> Iterator[SchemaVisit]:
    """Yield *schema* and its descendants down to *max_depth*, pre-order.

    Args:
        schema: The node to start from (depth 0 on the initial call).
        max_depth: Nodes deeper than this are not visited.
        parent: The node *schema* was reached from.
        depth: Depth of *schema* relative to the traversal root.
        path: Keys leading from the root to *schema*.
        edge: The keys of the last step only, e.g. ``("properties", "id")``.
    """
    yield SchemaVisit(schema, parent, depth, path, edge)
    if depth >= max_depth:
        return

    children: list[tuple[tuple[str, ...], Any]] = []
    properties = schema.get("properties")
    if isinstance(properties, dict):
        children.extend((("properties", key), child) for key, child in properties.items())
    children.append((("additionalProperties",), schema.get("additionalProperties")))
    children.append((("items",), schema.get("items")))

    for child_edge, child in children:
        if isinstance(child, dict):
            yield from walk_schema(
                child,
                max_depth,
                parent=schema,
                depth=depth + 1,
                path=path + child_edge,
                edge=child_edge,
            )


def variable_name(visit: SchemaVisit) -> Optional[str]:
    """Resolve the name of a visited node.

    An explicit ``name`` or ``title`` wins; otherwise a node reached through
    ``properties`` or ``additionalProperties`` is named after the property key.
    """
    for key in ("name", "title"):
        value = visit.node.get(key)
        if isinstance(value, str) and value:
            return value
    if visit.edge and visit.edge[0] in _NAMED_EDGES and len(visit.edge) > 1:
        return visit.edge[1]
    return None


def flatten_schema(schema: dict[str, Any], type_map: TypeMap) -> list[Variable]:
    """Return one :class:`~apicontext.models.Variable` per top-level named property."""
    variables = []
    for visit in walk_schema(schema, max_depth=1):
        if visit.depth != 1:
            continue
        name = variable_name(visit)
        if name is None:
            continue
        variables.append(_build_variable(name, visit, type_map))
    return mark_has_more(variables)


def _build_variable(name: str, visit: SchemaVisit, type_map: TypeMap) -> Variable:
    node = visit.node
    required_names = (visit.parent or {}).get("required") or []
    required = isinstance(required_names, list) and name in required_names

    raw_type = schema_type(node)
    mapped = type_map(raw_type, required, node)
    is_primitive = raw_type not in _CONTAINER_TYPES

    complex_type = None
    if REF_MARKER in node and raw_type in (None, "object"):
        complex_type = component_name(node[REF_MARKER])

    return Variable(
        name=name,
        base_name=name.lower(),
        getter=to_camel_case(f"get_{name}"),
        setter=to_camel_case(f"set_{name}"),
        type=mapped,
        datatype=mapped,
        datatype_with_enum=mapped,
        required=required,
        data_format=optional_str(node.get("format")),
        default_value=node.get("default"),
        is_enum=False,
        is_primitive_type=is_primitive,
        is_not_container=is_primitive,
        complex_type=complex_type,
        json_schema=safe_json(node),
    )


def build_models(schemas: dict[str, Any], type_map: TypeMap) -> list[ModelContainer]:
    """Build one :class:`~apicontext.models.ModelContainer` per named schema.

    Non-mapping entries (e.g. boolean schemas) are skipped.
    """
    if not isinstance(schemas, dict):
        return []

    containers = []
    for name, schema in schemas.items():
        if not isinstance(schema, dict):
            logger.debug("Skipping non-object schema %s", name)
            continue
        variables = flatten_schema(schema, type_map)
        model = Model(
            name=name,
            classname=name,
            class_var_name=name,
            title=optional_str(schema.get("title")),
            unescaped_description=optional_str(schema.get("description")),
            model_json=safe_json(schema),
            vars=variables,
            has_vars=bool(variables),
        )
        containers.append(ModelContainer(model=model))
    return containers
