"""Summarize ``components.securitySchemes`` into template-friendly records."""

from __future__ import annotations

import logging
from typing import Any, Optional

from apicontext.generator.sequences import mark_has_more
from apicontext.models import AuthMethod

logger = logging.getLogger(__name__)


def summarize_security_schemes(schemes: Optional[dict[str, Any]]) -> list[AuthMethod]:
    """Build one :class:`~apicontext.models.AuthMethod` per recognised scheme.

    ``http`` schemes are flagged ``isBasic``, ``oauth2`` schemes carry the
    URLs of their first declared flow, and ``apiKey`` schemes record the key
    name and where it is sent. Other scheme types (``openIdConnect``,
    ``mutualTLS``) have no template representation and are skipped.

    Args:
        schemes: The ``components.securitySchemes`` mapping, or ``None``.

    Returns:
        Auth methods in declaration order, ``hasMore`` marked.
    """
    if not isinstance(schemes, dict):
        return []

    methods: list[AuthMethod] = []
    for name, scheme in schemes.items():
        if not isinstance(scheme, dict):
            continue

        scheme_type = scheme.get("type")
        if scheme_type == "http":
            methods.append(AuthMethod(name=name, is_basic=True))
        elif scheme_type == "oauth2":
            methods.append(_oauth_method(name, scheme))
        elif scheme_type == "apiKey":
            location = scheme.get("in")
            methods.append(
                AuthMethod(
                    name=name,
                    is_api_key=True,
                    key_param_name=scheme.get("name"),
                    is_key_in_query=location == "query",
                    is_key_in_header=location == "header",
                    is_key_in_cookie=location == "cookie",
                )
            )
        else:
            logger.debug("Skipping security scheme %r of type %r", name, scheme_type)

    return mark_has_more(methods)


def _oauth_method(name: str, scheme: dict[str, Any]) -> AuthMethod:
    flows = scheme.get("flows")
    flow: dict[str, Any] = {}
    if isinstance(flows, dict) and flows:
        first = next(iter(flows.values()))
        if isinstance(first, dict):
            flow = first

    return AuthMethod(
        name=name,
        is_o_auth=True,
        authorization_url=flow.get("authorizationUrl"),
        token_url=flow.get("tokenUrl"),
    )
