"""Validate API documents, reporting the outcome as a value.

Schema validation is delegated to ``openapi-spec-validator``. Its exceptions
are caught here and folded into a
:class:`~apicontext.models.ValidationResult`, so the context builder decides
what a failure means (a recorded message) instead of unwinding the whole
transform.

With ``lint=True`` a handful of stricter style rules run after the schema
check. Only the first problem is reported either way.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from openapi_spec_validator import validate
from openapi_spec_validator.validation.exceptions import (
    OpenAPIValidationError,
    ValidatorDetectError,
)

from apicontext.models import ValidationResult

logger = logging.getLogger(__name__)

_NON_OPERATION_KEYS = frozenset({"summary", "description", "parameters", "servers", "$ref"})


def validate_document(document: dict[str, Any], lint: bool = False) -> ValidationResult:
    """Validate *document* against the OpenAPI 3.x schema.

    Args:
        document: The (dereferenced) API document.
        lint: Also apply the lint rules of :func:`lint_document`.

    Returns:
        :meth:`ValidationResult.success`, or a failure carrying the JSON
        pointer of the offending element and the error text.
    """
    try:
        validate(document)
    except OpenAPIValidationError as exc:
        return ValidationResult.failure(json_pointer(exc.absolute_path), exc.message)
    except ValidatorDetectError as exc:
        return ValidationResult.failure("#", str(exc))
    except Exception as exc:  # noqa: BLE001 - third-party resolver errors
        logger.debug("Validator raised %s", type(exc).__name__, exc_info=True)
        return ValidationResult.failure("#", str(exc) or type(exc).__name__)

    if lint:
        for element_id, message in lint_document(document):
            return ValidationResult.failure(element_id, message)

    return ValidationResult.success()


def lint_document(document: dict[str, Any]) -> Iterator[tuple[str, str]]:
    """Yield ``(element_id, message)`` for each lint rule violation.

    Rules:

    * ``info`` should declare a ``contact``.
    * Every operation should have an ``operationId``.
    * Every operation should have a ``summary`` or ``description``.
    """
    info = document.get("info") or {}
    if not info.get("contact"):
        yield "#/info", "Linting: info object should contain a contact object"

    for path, path_item in (document.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            continue
        for method, operation in path_item.items():
            if method in _NON_OPERATION_KEYS or method.startswith("x-"):
                continue
            if not isinstance(operation, dict):
                continue
            pointer = json_pointer(("paths", path, method))
            if not operation.get("operationId"):
                yield pointer, "Linting: operation should have an operationId"
            if not (operation.get("summary") or operation.get("description")):
                yield pointer, "Linting: operation should have a summary or description"


def json_pointer(segments: Iterable[Any]) -> str:
    """Render path segments as a URI-fragment JSON Pointer (``#/a/b~1c``)."""
    escaped = [str(s).replace("~", "~0").replace("/", "~1") for s in segments]
    return "#/" + "/".join(escaped) if escaped else "#"
