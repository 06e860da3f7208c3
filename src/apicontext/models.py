"""Canonical Pydantic models shared across all apicontext modules.

This is the single source of truth for data shapes in the project. The
models fall into two groups:

**Configuration models** -- the generator defaults table and the per-call
transform options merged over it:
    :class:`ModelPropertyNaming`, :class:`GeneratorDefaults` and
    :class:`TransformOptions`.

**Context models** -- produced by the generator and handed to a template
engine:
    :class:`Parameter`, :class:`Response`, :class:`Operation`,
    :class:`OperationContainer`, :class:`Variable`, :class:`Model`,
    :class:`ModelContainer`, :class:`AuthMethod`, :class:`ValidationMessage`
    and :class:`Context`.

Python attributes are snake_case. Every model serializes with the camelCase
names templates are written against (``allParams``, ``hasMore``...), via
``model_dump(by_alias=True)`` or the :meth:`CamelModel.to_dict` shortcut.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model whose fields serialize under camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, protected_namespaces=()
    )

    def to_dict(self) -> dict[str, Any]:
        """Dump the model as a JSON-compatible dict keyed by template names."""
        return self.model_dump(by_alias=True, mode="json")


# --- Configuration ---


class ModelPropertyNaming(str, enum.Enum):
    """Naming convention a generator applies to model properties."""

    CAMEL_CASE = "camelCase"
    PASCAL_CASE = "PascalCase"
    SNAKE_CASE = "snake_case"
    ORIGINAL = "original"
    UPPERCASE = "UPPERCASE"


class GeneratorDefaults(CamelModel):
    """Generator-agnostic knobs passed through to the rendering stage.

    None of these change how the context is computed except
    ``sort_params_by_required_flag`` and ``package_name``; the rest are
    consumed by templates. Unknown keys supplied by the caller are kept as
    extras and flow into the context unchanged.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    supporting_files: list[Any] = Field(default_factory=list)
    model_tests: list[Any] = Field(default_factory=list)
    model_docs: list[Any] = Field(default_factory=list)
    api_tests: list[Any] = Field(default_factory=list)
    api_docs: list[Any] = Field(default_factory=list)
    allow_unicode_identifiers: bool = False
    license_name: Optional[str] = "Unlicense"
    license_url: Optional[str] = "https://unlicense.org"
    local_variable_prefix: str = ""
    serializable_model: bool = True
    big_decimal_as_string: bool = False
    sort_params_by_required_flag: bool = Field(
        default=True,
        description="Place required parameters before optional ones in allParams",
    )
    use_date_time_offset: bool = False
    ensure_unique_params: bool = False
    optional_method_argument: bool = False
    optional_assembly_info: bool = False
    net_core_project_file: bool = True
    use_collection: bool = False
    interface_prefix: str = ""
    return_i_collection: bool = False
    optional_project_file: bool = False
    model_property_naming: ModelPropertyNaming = ModelPropertyNaming.ORIGINAL
    target_framework: int = 4
    model_name_prefix: str = ""
    model_name_suffix: str = ""
    release_note: str = "Minor update"
    supports_es6: bool = Field(default=True, alias="supportsES6")
    supports_async: bool = True
    exclude_tests: bool = False
    generate_api_docs: bool = True
    generate_api_tests: bool = True
    generate_model_docs: bool = True
    generate_model_tests: bool = True
    hide_generation_timestamp: bool = False
    generate_property_changed: bool = True
    non_public_api: bool = False
    validatable: bool = True
    ignore_file_override: str = ".swagger-codegen-ignore"
    remove_operation_id_prefix: bool = False
    package_name: str = Field(
        default="IO.OpenAPI", description="Root package for generated code"
    )


class TransformOptions(GeneratorDefaults):
    """Options for a single transform: the defaults table plus call controls.

    Built by :func:`~apicontext.config.merge_options`; frozen afterwards.
    """

    language: str = Field(default="", description="Type-map dialect, case-insensitive")
    swagger: Optional[dict[str, Any]] = Field(
        default=None, description="Pre-conversion source document, echoed verbatim"
    )
    lint: bool = Field(default=False, description="Apply lint rules during validation")
    verbose: bool = False
    debug: bool = Field(default=False, description="Attach JSON dumps of operations/models")
    config_name: str = Field(default="", description="Generator configuration name")


# --- Validation ---


class MessageLevel(str, enum.Enum):
    VALID = "Valid"
    ERROR = "Error"


class ValidationResult(BaseModel):
    """Outcome of validating a document: success, or the first failure found."""

    valid: bool
    element_id: Optional[str] = None
    message: str = ""

    @classmethod
    def success(cls) -> ValidationResult:
        return cls(valid=True)

    @classmethod
    def failure(cls, element_id: str, message: str) -> ValidationResult:
        return cls(valid=False, element_id=element_id, message=message)


class ValidationMessage(CamelModel):
    """The single validation outcome recorded in :attr:`Context.messages`."""

    level: MessageLevel
    element_type: str = "Context"
    element_id: Optional[str] = None
    message: str


# --- Operations ---


class Parameter(CamelModel):
    """A parameter of an operation, including the synthesized ``body`` parameter."""

    param_name: str
    base_name: str
    required: bool = False
    data_type: Optional[str] = None
    data_format: Optional[str] = None
    description: Optional[str] = None
    unescaped_description: Optional[str] = None
    default_value: Any = None
    has_more: bool = True
    is_path_param: bool = False
    is_query_param: bool = False
    is_header_param: bool = False
    is_form_param: bool = False
    is_cookie_param: bool = False
    is_body_param: bool = False
    is_enum: bool = False
    # Body parameter only
    type: Optional[str] = None
    schema_: Optional[dict[str, Any]] = Field(default=None, alias="schema")
    json_schema: Optional[str] = None
    vendor_extensions: dict[str, Any] = Field(default_factory=dict)


class Response(CamelModel):
    """One declared response of an operation."""

    code: str
    nickname: str
    message: Optional[str] = None
    simple_type: bool = True
    schema_: dict[str, Any] = Field(default_factory=dict, alias="schema")
    json_schema: str = ""
    data_type: Optional[str] = None
    has_more: bool = True


class Operation(CamelModel):
    """One HTTP method at one path, normalized for template iteration."""

    nickname: str
    operation_id: Optional[str] = None
    http_method: str
    path: str
    summary: Optional[str] = None
    notes: Optional[str] = None
    base_name: str = "Default"
    tags: list[str] = Field(default_factory=list)
    imports: list[str] = Field(default_factory=list)
    all_params: list[Parameter] = Field(default_factory=list)
    path_params: list[Parameter] = Field(default_factory=list)
    query_params: list[Parameter] = Field(default_factory=list)
    header_params: list[Parameter] = Field(default_factory=list)
    form_params: list[Parameter] = Field(default_factory=list)
    cookie_params: list[Parameter] = Field(default_factory=list)
    body_param: Optional[Parameter] = None
    body_params: list[Parameter] = Field(default_factory=list)
    has_params: bool = False
    has_path_params: bool = False
    has_query_params: bool = False
    has_header_params: bool = False
    has_form_params: bool = False
    has_cookie_params: bool = False
    has_body_param: bool = False
    responses: list[Response] = Field(default_factory=list)
    response_headers: list[Any] = Field(default_factory=list)
    produces: list[dict[str, str]] = Field(default_factory=list)
    has_produces: bool = True
    is_response_binary: bool = False
    deprecated: bool = False
    vendor_extensions: dict[str, Any] = Field(default_factory=dict)
    has_more: bool = True


class OperationContainer(CamelModel):
    base_name: str
    classname: str
    operation: Operation


class ApiGroup(CamelModel):
    operations: list[OperationContainer] = Field(default_factory=list)


class ApiInfo(CamelModel):
    apis: list[ApiGroup] = Field(default_factory=list)


# --- Models ---


class Variable(CamelModel):
    """One flattened top-level property of a named schema.

    ``is_not_container`` always mirrors ``is_primitive_type`` and ``is_enum``
    is always ``False``; enum properties are rendered as their base type.
    """

    name: str
    base_name: str
    getter: str
    setter: str
    type: Optional[str] = None
    datatype: Optional[str] = None
    datatype_with_enum: Optional[str] = None
    required: bool = False
    data_format: Optional[str] = None
    default_value: Any = None
    is_enum: bool = False
    is_primitive_type: bool = True
    is_not_container: bool = True
    complex_type: Optional[str] = None
    json_schema: str = ""
    has_more: bool = True


class Model(CamelModel):
    name: str
    classname: str
    class_var_name: str
    title: Optional[str] = None
    unescaped_description: Optional[str] = None
    model_json: str = ""
    vars: list[Variable] = Field(default_factory=list)
    has_vars: bool = False


class ModelContainer(CamelModel):
    model: Model


# --- Security ---


class AuthMethod(CamelModel):
    """Template-friendly summary of one security scheme."""

    name: str
    is_basic: bool = False
    is_o_auth: bool = Field(default=False, alias="isOAuth")
    authorization_url: Optional[str] = None
    token_url: Optional[str] = None
    is_api_key: bool = False
    key_param_name: Optional[str] = None
    is_key_in_query: bool = False
    is_key_in_header: bool = False
    is_key_in_cookie: bool = False
    has_more: bool = True


# --- Context ---


class ImportEntry(CamelModel):
    import_: str = Field(alias="import")


class Context(GeneratorDefaults):
    """The complete template context produced by one transform.

    Carries every generator default (plus caller extras), the serialized
    documents, document metadata, and the operation, model, security and
    validation collections.
    """

    swagger_yaml: str = Field(default="", alias="swagger-yaml")
    swagger_json: str = Field(default="", alias="swagger-json")
    openapi_yaml: str = Field(default="", alias="openapi-yaml")
    openapi_json: str = Field(default="", alias="openapi-json")

    project_name: str
    app_name: str
    app_version: Optional[str] = None
    api_version: Optional[str] = None
    package_version: Optional[str] = None
    version: Optional[str] = None
    swagger_version: Optional[str] = None
    swagger_codegen_version: str = ""
    app_description: str = "No description"
    classname: str
    class_var_name: str = "default"
    exported_name: str
    name: str
    class_filename: str
    js_module_name: str
    js_project_name: str
    info_email: Optional[str] = None
    info_url: Optional[str] = None
    license_info: Optional[str] = None

    host: str = ""
    base_path: str = "/"
    context_path: str = "/"

    api_package: str = ""
    model_package: str = ""
    invoker_package: str = ""
    generator_package: str = ""
    php_invoker_package: str = ""
    perl_module_name: str = ""
    python_package_name: str = ""
    package: str = ""
    client_package: str = ""
    import_path: str = ""
    has_import: bool = True
    imports: list[ImportEntry] = Field(default_factory=list)

    has_more: bool = True
    generated_date: str = ""
    generator_class: str = ""
    source_folder: str = ""
    template_dir: str = ""
    http_user_agent: str = ""

    swagger: dict[str, Any] = Field(default_factory=dict)
    tags: Optional[list[Any]] = None
    external_docs: Optional[Any] = None
    servers: Optional[list[Any]] = None

    has_auth_methods: bool = False
    auth_methods: list[AuthMethod] = Field(default_factory=list)
    messages: list[ValidationMessage] = Field(default_factory=list)
    operations: list[OperationContainer] = Field(default_factory=list)
    api_info: ApiInfo = Field(default_factory=ApiInfo)
    models: list[ModelContainer] = Field(default_factory=list)
    debug_operations: Optional[str] = None
    debug_models: Optional[str] = None
