"""Document handling -- load, dereference and validate OpenAPI documents.

This sub-package holds the collaborators the context builder leans on
before it extracts anything:

* :mod:`~apicontext.parser.loader` -- I/O layer (URL, file, stdin) with
  JSON/YAML parsing and OpenAPI version checks.
* :mod:`~apicontext.parser.resolver` -- ``$ref`` inlining that tags each
  inlined node with ``x-oldref``.
* :mod:`~apicontext.parser.validator` -- schema validation and lint rules,
  returning a :class:`~apicontext.models.ValidationResult`.

Typical usage::

    from apicontext.parser import load_document, dereference, validate_document

    raw = load_document("petstore.yaml")
    doc = dereference(raw)
    result = validate_document(doc, lint=True)
"""

from apicontext.parser.loader import load_document, validate_openapi_version
from apicontext.parser.resolver import REF_MARKER, dereference
from apicontext.parser.validator import validate_document

__all__ = [
    "REF_MARKER",
    "dereference",
    "load_document",
    "validate_document",
    "validate_openapi_version",
]
