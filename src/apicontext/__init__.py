"""apicontext -- Turn OpenAPI 3.x documents into template contexts.

The package reads an OpenAPI document and produces a flat, denormalized
*context*: operations with their parameters and responses, models with their
top-level variables, security summaries, serialized copies of the document and
a table of generator defaults. A template engine renders code or docs from it.

Typical usage::

    from apicontext import transform
    from apicontext.parser import load_document

    context = transform(load_document("petstore.yaml"), {"language": "typescript"})
    data = context.to_dict()

Modules:
    app: Typer command-line entry point.
    models: Pydantic models for options and the context.
    config: Option merging, option files and ``--set`` parsing.
    typemaps: Per-language type-name strategies.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.1.0"

from apicontext.generator.context_builder import transform  # noqa: E402

__all__ = ["__version__", "transform"]
