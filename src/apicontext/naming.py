"""Identifier helpers shared by the context builder and the extractors.

All functions are pure: they take a value and return a new string.
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlsplit

_CAMEL_SEPARATORS = re.compile(r"[-_ /.](.)")
_PATH_TEMPLATE_BRACES = re.compile(r"[{}]")


def to_camel_case(value: str) -> str:
    """Lower-case *value* and upper-case every character following a separator.

    Separators are ``-``, ``_``, space, ``/`` and ``.``; they are removed.
    The rest of the word is lower-cased first, so ``get_petId`` becomes
    ``getPetid``.

    Example::

        >>> to_camel_case("set_first-name")
        'setFirstName'
    """
    return _CAMEL_SEPARATORS.sub(lambda m: m.group(1).upper(), value.lower())


def classname_from_title(title: str) -> str:
    """Derive the snake-ish class name used for generated files from an API title."""
    return title.lower().replace(" ", "_").replace("-", "_")


def default_nickname(method: str, path: str) -> str:
    """Build an operation nickname for operations without an ``operationId``.

    ``GET /pets/{petId}`` becomes ``getPetsPetid``.
    """
    return to_camel_case(method + _PATH_TEMPLATE_BRACES.sub("", path).rstrip("/"))


def component_name(ref: str) -> str:
    """Strip the ``#/components/schemas/`` prefix from a reference string."""
    return ref.replace("#/components/schemas/", "")


def split_server_url(url: str) -> tuple[str, str]:
    """Split a server URL into ``(host, base_path)``.

    Relative server URLs (``/v1``) have an empty host. An URL without a path
    yields ``/`` as the base path.
    """
    parts = urlsplit(url)
    return parts.netloc, parts.path or "/"


def optional_str(value: object) -> Optional[str]:
    """``str(value)``, keeping ``None``; YAML reads versions like 1.0 as numbers."""
    return None if value is None else str(value)
