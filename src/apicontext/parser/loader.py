"""Read API documents from a URL, local file, or stdin.

This is the I/O edge of apicontext: the context builder itself only ever
sees an in-memory mapping. Every source is read as text and parsed as JSON,
falling back to YAML, so the file extension or content type never matters.

* :func:`load_document` -- read and parse a document from any source.
* :func:`validate_openapi_version` -- check the ``openapi`` version string,
  rejecting Swagger 2.0 documents (which must be upconverted first and can
  then be passed alongside the result as the ``swagger`` option).
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from apicontext.exceptions import DocumentError

URL_PREFIXES = ("http://", "https://")
FETCH_TIMEOUT = 30.0


def load_document(source: str) -> dict[str, Any]:
    """Load an API document from a URL, file path, or stdin (``-``).

    Raises:
        DocumentError: If the source cannot be read, is blank, or does not
            hold a JSON/YAML object.
    """
    text = _read_source(source)
    if not text.strip():
        raise DocumentError(f"No content in {'stdin' if source == '-' else source}")
    return _parse(text)


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()

    if source.startswith(URL_PREFIXES):
        try:
            response = httpx.get(source, timeout=FETCH_TIMEOUT, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise DocumentError(f"Failed to fetch {source}: {exc}") from exc
        return response.text

    try:
        return Path(source).read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DocumentError(f"Document not found: {source}") from exc
    except OSError as exc:
        raise DocumentError(f"Failed to read {source}: {exc}") from exc


def _parse(text: str) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise DocumentError(f"Document is neither JSON nor YAML: {exc}") from exc

    if not isinstance(data, dict):
        kind = type(data).__name__ if data is not None else "empty document"
        raise DocumentError(f"Document must be a JSON/YAML object (got {kind})")
    return data


def validate_openapi_version(document: dict[str, Any]) -> str:
    """Return the document's ``openapi`` version string.

    Any ``3.x`` version is accepted.

    Raises:
        DocumentError: For Swagger 2.0 documents, a missing ``openapi`` field,
            or a non-3.x version.
    """
    if "swagger" in document:
        raise DocumentError(
            f"Swagger {document['swagger']} documents are not supported directly. "
            "Convert the document to OpenAPI 3.x first and pass the original "
            "with --original."
        )

    version = document.get("openapi")
    if version is None:
        raise DocumentError(
            "Missing 'openapi' field. Is this an OpenAPI 3.x document?"
        )

    version_str = str(version)
    if not version_str.startswith("3."):
        raise DocumentError(
            f"Unsupported OpenAPI version: {version_str}. Only 3.x is supported."
        )
    return version_str
