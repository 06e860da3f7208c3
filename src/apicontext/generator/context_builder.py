"""Build the template context for one OpenAPI document.

:func:`transform` is the orchestrator. Given a parsed document and an
options mapping it:

1. Merges the options over the generator defaults table and selects the
   type map for ``options.language``.
2. Serializes the pre-conversion document (``swagger-yaml``,
   ``swagger-json``) and the dereferenced document (``openapi-yaml``,
   ``openapi-json``).
3. Computes document metadata: names derived from the title, versions,
   contact and license, host and base path from the first server, and the
   package names derived from ``packageName``.
4. Dereferences the document and validates it, recording exactly one
   validation message. A failed validation never stops the transform.
5. Extracts auth methods, operations and models.

Each call is self-contained: the type map is created for the call and
passed down explicitly, and the caller's document is never modified.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any, Optional

from apicontext import __version__
from apicontext.config import merge_options
from apicontext.exceptions import DocumentError
from apicontext.generator.operations import extract_operations
from apicontext.generator.schema_flattener import build_models
from apicontext.generator.security import summarize_security_schemes
from apicontext.models import (
    ApiGroup,
    ApiInfo,
    Context,
    MessageLevel,
    TransformOptions,
    ValidationMessage,
    ValidationResult,
)
from apicontext.naming import classname_from_title, optional_str, split_server_url
from apicontext.parser.resolver import REF_MARKER, dereference
from apicontext.parser.validator import validate_document
from apicontext.serialization import to_json, to_yaml
from apicontext.typemaps import get_type_map

logger = logging.getLogger(__name__)

Validator = Callable[..., ValidationResult]

VALID_MESSAGE = "No validation errors detected"


def transform(
    document: Mapping[str, Any],
    options: Optional[Mapping[str, Any]] = None,
    *,
    validator: Validator = validate_document,
) -> Context:
    """Convert an OpenAPI 3.x document into a template context.

    Args:
        document: The parsed document. It is not modified.
        options: Caller options: ``language``, ``swagger``, ``lint``,
            ``verbose``, ``debug``, ``configName``, any defaults-table key,
            and arbitrary extras passed through to the context.
        validator: Callable taking ``(document, lint=...)`` and returning a
            :class:`~apicontext.models.ValidationResult`.

    Returns:
        The assembled :class:`~apicontext.models.Context`.

    Raises:
        DocumentError: If *document* is not a mapping or lacks ``info.title``.
        ConfigError: If an option has a value of the wrong type.
    """
    info = _require_info(document)
    opts = merge_options(options)

    type_map = get_type_map(opts.language)
    logger.debug("Transforming %r with %r", info["title"], type_map)

    api = dereference(dict(document), marker=REF_MARKER, strict=False)
    original = opts.swagger if opts.swagger is not None else document

    computed: dict[str, Any] = {
        "swagger-yaml": to_yaml(original),
        "swagger-json": to_json(original),
        "openapi-yaml": to_yaml(api),
        "openapi-json": to_json(api),
    }
    computed.update(_document_metadata(api, opts))
    computed.update(_package_fields(opts.package_name))

    computed["swagger"] = (
        opts.swagger if opts.swagger is not None else _swagger_projection(api)
    )
    computed["tags"] = _list_or_none(api.get("tags"))
    computed["externalDocs"] = api.get("externalDocs")
    computed["servers"] = _list_or_none(api.get("servers"))

    components = api.get("components")
    if not isinstance(components, dict):
        components = {}

    computed["messages"] = [_validation_message(api, opts, validator)]

    auth_methods = summarize_security_schemes(components.get("securitySchemes"))
    computed["authMethods"] = auth_methods
    computed["hasAuthMethods"] = bool(auth_methods)

    operations = extract_operations(
        api.get("paths") or {},
        type_map,
        sort_by_required=opts.sort_params_by_required_flag,
    )
    computed["operations"] = operations
    computed["apiInfo"] = ApiInfo(apis=[ApiGroup(operations=operations)])

    models = build_models(components.get("schemas") or {}, type_map)
    computed["models"] = models

    if opts.debug:
        computed["debugOperations"] = to_json([op.to_dict() for op in operations])
        computed["debugModels"] = to_json([model.to_dict() for model in models])

    base = opts.model_dump(by_alias=True, exclude={"swagger"})
    return Context.model_validate({**base, **computed})


def _require_info(document: Any) -> dict[str, Any]:
    if not isinstance(document, Mapping):
        kind = type(document).__name__ if document is not None else "None"
        raise DocumentError(f"Document must be a mapping (got {kind})")

    info = document.get("info")
    if not isinstance(info, Mapping):
        raise DocumentError("Document has no 'info' object")
    if not info.get("title"):
        raise DocumentError("Document 'info' object has no 'title'")
    return dict(info)


def _document_metadata(api: dict[str, Any], opts: TransformOptions) -> dict[str, Any]:
    """Names, versions, contact/license and server fields derived from *api*."""
    info = api["info"]
    title = str(info["title"])
    version = optional_str(info.get("version"))
    contact = info.get("contact")
    if not isinstance(contact, dict):
        contact = {}
    license_ = info.get("license")
    if not isinstance(license_, dict):
        license_ = {}
    classname = classname_from_title(title)

    host, base_path = "", "/"
    servers = api.get("servers")
    if isinstance(servers, list) and servers and isinstance(servers[0], dict):
        url = servers[0].get("url")
        if url:
            host, base_path = split_server_url(str(url))

    config_name = opts.config_name

    return {
        "projectName": title,
        "appName": title,
        "appVersion": version,
        "apiVersion": version,
        "packageVersion": version,
        "version": version,
        "swaggerVersion": optional_str(api.get("openapi")),
        "swaggerCodegenVersion": f"apicontext-v{__version__}",
        "appDescription": optional_str(info.get("description")) or "No description",
        "classname": classname,
        "classVarName": "default",
        "exportedName": classname,
        "name": classname,
        "classFilename": classname,
        "jsModuleName": classname,
        "jsProjectName": classname,
        "infoEmail": optional_str(contact.get("email")),
        "infoUrl": optional_str(contact.get("url")),
        "licenseInfo": optional_str(license_.get("name")),
        "licenseUrl": optional_str(license_.get("url")),
        "host": host,
        "basePath": base_path,
        "contextPath": "/",
        "hasImport": True,
        "hasMore": True,
        "generatedDate": datetime.now(timezone.utc).isoformat(),
        "generatorClass": config_name,
        "sourceFolder": f"./out/{config_name}",
        "templateDir": f"./templates/{config_name}",
        "httpUserAgent": f"OpenAPI-Codegen/{version}/{config_name}",
    }


def _package_fields(package_name: str) -> dict[str, Any]:
    return {
        "packageName": package_name,
        "apiPackage": package_name,
        "modelPackage": package_name,
        "invokerPackage": package_name,
        "generatorPackage": package_name,
        "phpInvokerPackage": package_name,
        "perlModuleName": package_name,
        "pythonPackageName": package_name,
        "package": f"{package_name}.Api",
        "clientPackage": f"{package_name}.Client",
        "importPath": f"{package_name}.Api.Default",
        "imports": [{"import": f"{package_name}.Model.Default"}],
    }


def _swagger_projection(api: dict[str, Any]) -> dict[str, Any]:
    """Swagger 2.0-shaped view of an OpenAPI 3 document for legacy templates."""
    projection: dict[str, Any] = {
        "swagger": api.get("openapi"),
        "info": api.get("info"),
        "paths": api.get("paths"),
    }
    components = api.get("components")
    if isinstance(components, dict):
        projection["parameters"] = components.get("parameters")
        projection["headers"] = components.get("headers")
        projection["responses"] = components.get("responses")
        projection["definitions"] = components.get("schemas")
    return projection


def _validation_message(
    api: dict[str, Any],
    opts: TransformOptions,
    validator: Validator,
) -> ValidationMessage:
    """Run *validator* and turn its result into the context's single message."""
    result = validator(api, lint=opts.lint)

    if result.valid:
        message = ValidationMessage(
            level=MessageLevel.VALID, element_id="None", message=VALID_MESSAGE
        )
        if opts.verbose:
            logger.info("%s", VALID_MESSAGE)
        return message

    logger.error("Validation failed at %s: %s", result.element_id, result.message)
    return ValidationMessage(
        level=MessageLevel.ERROR,
        element_id=result.element_id,
        message=result.message or "Validation failed",
    )


def _list_or_none(value: Any) -> Optional[list[Any]]:
    return value if isinstance(value, list) else None
