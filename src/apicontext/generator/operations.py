"""Extract normalized operation records from a dereferenced ``paths`` object.

For every path + HTTP method pair this module builds an
:class:`~apicontext.models.Operation`:

* **Parameters** are merged from the path item and the operation (an
  operation-level parameter replaces a path-level one with the same ``name``
  and ``in``), classified by location into ``pathParams``, ``queryParams``,
  ``headerParams``, ``formParams`` and ``cookieParams``, and typed with the
  type map handed in by the caller.
* **allParams** lists required parameters before optional ones (stable
  sort), then the synthesized ``body`` parameter last, whatever its own
  ``required`` flag.
* **Responses** get a ``response<code>`` nickname and, when content is
  declared, a data type -- the component name for schemas that were
  references, else the schema ``type``.
* **hasMore** is set on every list independently: true everywhere except
  the last element.

The single public entry point is :func:`extract_operations`.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from apicontext.generator.sequences import mark_has_more
from apicontext.models import Operation, OperationContainer, Parameter, Response
from apicontext.naming import component_name, default_nickname, optional_str
from apicontext.parser.resolver import REF_MARKER
from apicontext.serialization import safe_json
from apicontext.typemaps import TypeMap, schema_type

logger = logging.getLogger(__name__)

EXTENSION_PREFIX = "x-"

# Path-item keys that are not HTTP methods
_STRUCTURAL_KEYS = frozenset({"description", "summary", "parameters", "$ref", "servers"})

_PARAMETER_LOCATIONS = ("path", "query", "header", "form", "cookie")

BODY_PARAM_NAME = "body"


def extract_operations(
    paths: dict[str, Any],
    type_map: TypeMap,
    *,
    sort_by_required: bool = True,
) -> list[OperationContainer]:
    """Build one container per operation in *paths*, in document order.

    Args:
        paths: The dereferenced ``paths`` object.
        type_map: Type-name strategy for parameter data types.
        sort_by_required: Place required parameters first in ``allParams``.

    Returns:
        Operation containers; only the last operation has ``hasMore`` false.
    """
    containers: list[OperationContainer] = []

    if not isinstance(paths, dict):
        return []

    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue

        path_parameters = path_item.get("parameters") or []

        for method, raw_operation in path_item.items():
            if method in _STRUCTURAL_KEYS or method.startswith(EXTENSION_PREFIX):
                continue
            if not isinstance(raw_operation, dict):
                logger.debug("Skipping non-object operation %s %s", method, path)
                continue

            operation = build_operation(
                path,
                method,
                raw_operation,
                type_map,
                path_parameters=path_parameters,
                sort_by_required=sort_by_required,
            )
            containers.append(
                OperationContainer(
                    base_name=operation.nickname,
                    classname=operation.nickname,
                    operation=operation,
                )
            )

    last = len(containers) - 1
    return [
        container.model_copy(
            update={
                "operation": container.operation.model_copy(
                    update={"has_more": index != last}
                )
            }
        )
        for index, container in enumerate(containers)
    ]


def build_operation(
    path: str,
    method: str,
    raw: dict[str, Any],
    type_map: TypeMap,
    *,
    path_parameters: Optional[list[dict[str, Any]]] = None,
    sort_by_required: bool = True,
) -> Operation:
    """Normalize a single OpenAPI operation object."""
    merged = _merge_parameters(path_parameters or [], raw.get("parameters") or [])
    params = [
        param
        for param in (_build_parameter(entry, type_map) for entry in merged)
        if param is not None
    ]
    if sort_by_required:
        params = sorted(params, key=lambda p: not p.required)

    body: Optional[Parameter] = None
    request_body = raw.get("requestBody")
    if isinstance(request_body, dict):
        body = _build_body_parameter(request_body)

    all_params = mark_has_more(params + ([body] if body else []))
    by_location = {
        location: mark_has_more([p for p in params if getattr(p, f"is_{location}_param")])
        for location in _PARAMETER_LOCATIONS
    }
    body_params = mark_has_more([body]) if body else []

    raw_responses = raw.get("responses")
    if not isinstance(raw_responses, dict):
        raw_responses = {}
    responses = mark_has_more(_build_responses(raw_responses))
    raw_tags = raw.get("tags")
    tags = [str(tag) for tag in raw_tags] if isinstance(raw_tags, list) else []
    operation_id = optional_str(raw.get("operationId"))
    nickname = operation_id or default_nickname(method, path)

    return Operation(
        nickname=nickname,
        operation_id=operation_id,
        http_method=method,
        path=path,
        summary=optional_str(raw.get("summary")),
        notes=optional_str(raw.get("description")),
        base_name=tags[0] if tags else "Default",
        tags=tags,
        imports=tags,
        all_params=all_params,
        path_params=by_location["path"],
        query_params=by_location["query"],
        header_params=by_location["header"],
        form_params=by_location["form"],
        cookie_params=by_location["cookie"],
        body_param=all_params[-1] if body else None,
        body_params=body_params,
        has_params=bool(params),
        has_path_params=bool(by_location["path"]),
        has_query_params=bool(by_location["query"]),
        has_header_params=bool(by_location["header"]),
        has_form_params=bool(by_location["form"]),
        has_cookie_params=bool(by_location["cookie"]),
        has_body_param=body is not None,
        responses=responses,
        produces=_produces(raw_responses),
        deprecated=bool(raw.get("deprecated", False)),
        vendor_extensions=_extensions(raw),
    )


def _merge_parameters(
    path_params: list[Any],
    op_params: list[Any],
) -> list[Any]:
    """Path-level parameters first, minus those the operation redefines."""
    path_params = path_params if isinstance(path_params, list) else []
    op_params = op_params if isinstance(op_params, list) else []
    overridden = {
        (param.get("name", ""), param.get("in", ""))
        for param in op_params
        if isinstance(param, dict)
    }
    merged = [
        param
        for param in path_params
        if isinstance(param, dict)
        and (param.get("name", ""), param.get("in", "")) not in overridden
    ]
    merged.extend(op_params)
    return merged


def _build_parameter(raw: Any, type_map: TypeMap) -> Optional[Parameter]:
    """Build a :class:`Parameter`, or ``None`` for unusable entries.

    Entries with an unrecognised ``in`` are skipped. Path parameters are
    always required. Parameters described with ``content`` instead of
    ``schema`` use the first media type's schema.
    """
    if not isinstance(raw, dict):
        return None

    location = raw.get("in")
    if location not in _PARAMETER_LOCATIONS:
        logger.debug("Skipping parameter %r with location %r", raw.get("name"), location)
        return None

    schema = raw.get("schema")
    if not isinstance(schema, dict):
        schema = _first_media_schema(raw.get("content")) or {}

    name = str(raw.get("name", ""))
    required = location == "path" or bool(raw.get("required", False))

    return Parameter(
        param_name=name,
        base_name=name,
        required=required,
        data_type=type_map(schema_type(schema), required, schema),
        data_format=optional_str(schema.get("format")),
        description=optional_str(raw.get("description")),
        unescaped_description=optional_str(raw.get("description")),
        default_value=schema.get("default"),
        vendor_extensions=_extensions(raw),
        **{f"is_{location}_param": True},
    )


def _build_body_parameter(request_body: dict[str, Any]) -> Parameter:
    """Synthesize the single ``body`` parameter from a ``requestBody``."""
    schema = _first_media_schema(request_body.get("content")) or {}

    return Parameter(
        param_name=BODY_PARAM_NAME,
        base_name=BODY_PARAM_NAME,
        required=bool(request_body.get("required", False)),
        data_type="object",
        description=optional_str(request_body.get("description")),
        unescaped_description=optional_str(request_body.get("description")),
        is_body_param=True,
        type=schema_type(schema),
        schema_=schema,
        json_schema=safe_json({"schema": schema}),
        vendor_extensions=_extensions(request_body),
    )


def _build_responses(responses: dict[Any, Any]) -> list[Response]:
    result: list[Response] = []

    for code, raw in responses.items():
        if not isinstance(raw, dict):
            continue

        code_str = str(code)
        schema: dict[str, Any] = {}
        data_type: Optional[str] = None

        content = raw.get("content")
        if isinstance(content, dict) and content:
            data_type = "object"
            media_schema = _first_media_schema(content)
            if media_schema:
                schema = media_schema
                data_type = schema_type(schema) or data_type
                if REF_MARKER in schema:
                    data_type = component_name(schema[REF_MARKER])

        result.append(
            Response(
                code=code_str,
                nickname=f"response{code_str}",
                message=optional_str(raw.get("description")),
                schema_=schema,
                json_schema=safe_json({"schema": schema}),
                data_type=data_type,
            )
        )

    return result


def _first_media_schema(content: Any) -> Optional[dict[str, Any]]:
    """Return the schema of the first declared media type, if any."""
    if not isinstance(content, dict) or not content:
        return None
    media = next(iter(content.values()))
    if isinstance(media, dict) and isinstance(media.get("schema"), dict):
        return media["schema"]
    return None


def _produces(responses: dict[Any, Any]) -> list[dict[str, str]]:
    """Distinct response media types in declaration order."""
    seen: list[str] = []
    for raw in responses.values():
        if isinstance(raw, dict) and isinstance(raw.get("content"), dict):
            for media_type in raw["content"]:
                if media_type not in seen:
                    seen.append(media_type)
    return [{"mediaType": media_type} for media_type in seen]


def _extensions(raw: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in raw.items() if str(key).startswith(EXTENSION_PREFIX)}
