"""Tests for apicontext.config -- option merging, option files and --set parsing."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from apicontext.config import load_options_file, merge_options, parse_set_options
from apicontext.exceptions import ConfigError, InvalidUsageError
from apicontext.models import ModelPropertyNaming, TransformOptions


# ---------------------------------------------------------------------------
# merge_options
# ---------------------------------------------------------------------------


class TestMergeOptions:
    def test_defaults(self) -> None:
        opts = merge_options()
        assert opts.language == ""
        assert opts.lint is False
        assert opts.sort_params_by_required_flag is True
        assert opts.package_name == "IO.OpenAPI"
        assert opts.model_property_naming == ModelPropertyNaming.ORIGINAL

    def test_template_spelling(self) -> None:
        opts = merge_options({"sortParamsByRequiredFlag": False, "configName": "go"})
        assert opts.sort_params_by_required_flag is False
        assert opts.config_name == "go"

    def test_python_spelling(self) -> None:
        opts = merge_options({"sort_params_by_required_flag": False})
        assert opts.sort_params_by_required_flag is False

    def test_enum_value(self) -> None:
        opts = merge_options({"modelPropertyNaming": "camelCase"})
        assert opts.model_property_naming == ModelPropertyNaming.CAMEL_CASE

    def test_extras_preserved(self) -> None:
        opts = merge_options({"artifactId": "petstore"})
        assert opts.model_dump(by_alias=True)["artifactId"] == "petstore"

    def test_instance_passed_through(self) -> None:
        opts = TransformOptions(language="java")
        assert merge_options(opts) is opts

    def test_frozen(self) -> None:
        opts = merge_options()
        with pytest.raises(Exception):
            opts.language = "java"  # type: ignore[misc]

    def test_wrong_type(self) -> None:
        with pytest.raises(ConfigError, match="Invalid transform options"):
            merge_options({"lint": "definitely"})

    def test_not_a_mapping(self) -> None:
        with pytest.raises(ConfigError, match="must be a mapping"):
            merge_options(["language", "java"])  # type: ignore[arg-type]

    def test_swagger_original(self) -> None:
        original: dict[str, Any] = {"swagger": "2.0"}
        assert merge_options({"swagger": original}).swagger == original


# ---------------------------------------------------------------------------
# load_options_file
# ---------------------------------------------------------------------------


class TestLoadOptionsFile:
    def test_json(self, tmp_path: Path) -> None:
        path = tmp_path / "options.json"
        path.write_text(json.dumps({"language": "java"}), encoding="utf-8")
        assert load_options_file(str(path)) == {"language": "java"}

    def test_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "options.yaml"
        path.write_text("language: typescript\nlint: true\n", encoding="utf-8")
        assert load_options_file(str(path)) == {"language": "typescript", "lint": True}

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "options.yaml"
        path.write_text("", encoding="utf-8")
        assert load_options_file(str(path)) == {}

    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_options_file(str(tmp_path / "nope.yaml"))

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "options.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_options_file(str(path))

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "options.yaml"
        path.write_text("a: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid options file"):
            load_options_file(str(path))


# ---------------------------------------------------------------------------
# parse_set_options
# ---------------------------------------------------------------------------


class TestParseSetOptions:
    def test_typed_values(self) -> None:
        result = parse_set_options(
            ["targetFramework=5", "supportsES6=false", "packageName=Acme.Pets", "x=null"]
        )
        assert result == {
            "targetFramework": 5,
            "supportsES6": False,
            "packageName": "Acme.Pets",
            "x": None,
        }

    def test_empty_value(self) -> None:
        assert parse_set_options(["interfacePrefix="]) == {"interfacePrefix": ""}

    def test_value_with_equals(self) -> None:
        assert parse_set_options(["releaseNote=a=b"]) == {"releaseNote": "a=b"}

    def test_unparseable_value_kept_as_string(self) -> None:
        assert parse_set_options(["note=[oops"]) == {"note": "[oops"}

    @pytest.mark.parametrize("item", ["noequals", "=value", "  =x"])
    def test_invalid(self, item: str) -> None:
        with pytest.raises(InvalidUsageError, match="KEY=VALUE"):
            parse_set_options([item])
