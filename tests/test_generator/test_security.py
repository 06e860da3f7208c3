"""Tests for apicontext.generator.security."""

from __future__ import annotations

from typing import Any

from apicontext.generator.security import summarize_security_schemes


class TestSummarizeSecuritySchemes:
    def test_petstore_schemes(self, petstore_30_raw: dict[str, Any]) -> None:
        methods = summarize_security_schemes(
            petstore_30_raw["components"]["securitySchemes"]
        )
        # openIdConnect has no template representation
        assert [m.name for m in methods] == ["api_key", "bearer", "petstore_auth"]
        assert [m.has_more for m in methods] == [True, True, False]

    def test_api_key(self) -> None:
        [method] = summarize_security_schemes(
            {"key": {"type": "apiKey", "name": "token", "in": "query"}}
        )
        assert method.is_api_key
        assert method.key_param_name == "token"
        assert method.is_key_in_query
        assert not method.is_key_in_header and not method.is_key_in_cookie
        assert not method.is_basic and not method.is_o_auth

    def test_api_key_in_cookie(self) -> None:
        [method] = summarize_security_schemes(
            {"key": {"type": "apiKey", "name": "sid", "in": "cookie"}}
        )
        assert method.is_key_in_cookie

    def test_http_is_basic(self) -> None:
        [method] = summarize_security_schemes({"basic": {"type": "http", "scheme": "basic"}})
        assert method.is_basic
        assert method.has_more is False

    def test_oauth_first_flow(self) -> None:
        [method] = summarize_security_schemes({
            "oauth": {
                "type": "oauth2",
                "flows": {
                    "authorizationCode": {
                        "authorizationUrl": "https://example.com/authorize",
                        "tokenUrl": "https://example.com/token",
                        "scopes": {},
                    },
                    "clientCredentials": {
                        "tokenUrl": "https://example.com/other-token",
                        "scopes": {},
                    },
                },
            }
        })
        assert method.is_o_auth
        assert method.authorization_url == "https://example.com/authorize"
        assert method.token_url == "https://example.com/token"

    def test_oauth_without_flows(self) -> None:
        [method] = summarize_security_schemes({"oauth": {"type": "oauth2"}})
        assert method.is_o_auth
        assert method.authorization_url is None
        assert method.token_url is None

    def test_serialized_names(self) -> None:
        [method] = summarize_security_schemes({"oauth": {"type": "oauth2"}})
        data = method.to_dict()
        assert data["isOAuth"] is True
        assert "authorizationUrl" in data
        assert "isKeyInCookie" in data

    def test_empty(self) -> None:
        assert summarize_security_schemes(None) == []
        assert summarize_security_schemes({}) == []
