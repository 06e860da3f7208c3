"""End-to-end tests for the apicontext command."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from apicontext import __version__
from apicontext.app import app
from apicontext.exit_codes import (
    EXIT_DOCUMENT_ERROR,
    EXIT_INVALID_USAGE,
    EXIT_SUCCESS,
    EXIT_VALIDATION_FAILED,
)


def _run(cli_runner, args: list[str]):
    return cli_runner.invoke(app, args)


def _read_json(path: Path) -> dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


class TestCli:
    def test_version(self, cli_runner) -> None:
        result = _run(cli_runner, ["--version"])
        assert result.exit_code == EXIT_SUCCESS
        assert f"apicontext {__version__}" in result.output

    def test_json_context_to_file(self, cli_runner, petstore_path: Path, tmp_path: Path) -> None:
        target = tmp_path / "context.json"

        result = _run(cli_runner, [str(petstore_path), "-o", str(target), "--no-color"])

        assert result.exit_code == EXIT_SUCCESS, result.output
        data = _read_json(target)
        assert data["projectName"] == "Petstore API"
        assert data["messages"][0]["level"] == "Valid"
        assert [o["operation"]["nickname"] for o in data["operations"]] == [
            "listPets",
            "createPet",
            "showPetById",
            "deletePetsPetid",
        ]

    def test_yaml_format(self, cli_runner, petstore_path: Path, tmp_path: Path) -> None:
        target = tmp_path / "context.yaml"
        result = _run(
            cli_runner, [str(petstore_path), "--format", "yaml", "-o", str(target)]
        )
        assert result.exit_code == EXIT_SUCCESS, result.output
        assert yaml.safe_load(target.read_text(encoding="utf-8"))["classname"] == "petstore_api"

    def test_language_and_config_name(
        self, cli_runner, petstore_path: Path, tmp_path: Path
    ) -> None:
        target = tmp_path / "context.json"
        result = _run(
            cli_runner,
            [
                str(petstore_path),
                "-l", "java",
                "--config-name", "java_client",
                "--debug",
                "-o", str(target),
            ],
        )
        assert result.exit_code == EXIT_SUCCESS, result.output
        data = _read_json(target)
        params = data["operations"][0]["operation"]["allParams"]
        assert [p["dataType"] for p in params] == ["string", "integer?", "string?"]
        assert data["sourceFolder"] == "./out/java_client"
        assert data["debugOperations"]

    def test_set_and_options_file(
        self, cli_runner, petstore_path: Path, tmp_path: Path
    ) -> None:
        options = tmp_path / "options.yaml"
        options.write_text("packageName: Acme.Pets\nreleaseNote: From file\n", encoding="utf-8")
        target = tmp_path / "context.json"

        result = _run(
            cli_runner,
            [
                str(petstore_path),
                "--config", str(options),
                "--set", "releaseNote=From flag",
                "--set", "targetFramework=6",
                "-o", str(target),
            ],
        )

        assert result.exit_code == EXIT_SUCCESS, result.output
        data = _read_json(target)
        assert data["packageName"] == "Acme.Pets"
        assert data["releaseNote"] == "From flag"
        assert data["targetFramework"] == 6

    def test_original_document(self, cli_runner, petstore_path: Path, tmp_path: Path) -> None:
        original = tmp_path / "swagger.yaml"
        original.write_text(
            "swagger: '2.0'\ninfo:\n  title: Old\n  version: '1'\npaths: {}\n",
            encoding="utf-8",
        )
        target = tmp_path / "context.json"

        result = _run(
            cli_runner, [str(petstore_path), "--original", str(original), "-o", str(target)]
        )

        assert result.exit_code == EXIT_SUCCESS, result.output
        data = _read_json(target)
        assert data["swagger"]["swagger"] == "2.0"
        assert json.loads(data["swagger-json"])["info"]["title"] == "Old"

    def test_invalid_document_reported_not_fatal(
        self, cli_runner, tmp_path: Path
    ) -> None:
        doc = tmp_path / "broken.yaml"
        doc.write_text(
            "openapi: 3.0.3\ninfo:\n  title: Broken\n  version: '1'\n"
            "paths:\n  /x:\n    get:\n      summary: no responses\n",
            encoding="utf-8",
        )
        target = tmp_path / "context.json"

        result = _run(cli_runner, [str(doc), "-o", str(target), "--no-color"])

        assert result.exit_code == EXIT_SUCCESS, result.output
        assert _read_json(target)["messages"][0]["level"] == "Error"

    def test_strict_fails_on_invalid_document(self, cli_runner, tmp_path: Path) -> None:
        doc = tmp_path / "broken.yaml"
        doc.write_text(
            "openapi: 3.0.3\ninfo:\n  title: Broken\n  version: '1'\n"
            "paths:\n  /x:\n    get:\n      summary: no responses\n",
            encoding="utf-8",
        )

        result = _run(
            cli_runner,
            [str(doc), "--strict", "-o", str(tmp_path / "out.json"), "--no-color"],
        )

        assert result.exit_code == EXIT_VALIDATION_FAILED

    def test_missing_document(self, cli_runner, tmp_path: Path) -> None:
        result = _run(cli_runner, [str(tmp_path / "missing.json"), "--no-color"])
        assert result.exit_code == EXIT_DOCUMENT_ERROR

    def test_swagger_2_rejected(self, cli_runner, tmp_path: Path) -> None:
        doc = tmp_path / "swagger.json"
        doc.write_text(json.dumps({"swagger": "2.0", "info": {"title": "x"}}), encoding="utf-8")
        result = _run(cli_runner, [str(doc), "--no-color"])
        assert result.exit_code == EXIT_DOCUMENT_ERROR

    def test_bad_set_option(self, cli_runner, petstore_path: Path) -> None:
        result = _run(cli_runner, [str(petstore_path), "--set", "oops", "--no-color"])
        assert result.exit_code == EXIT_INVALID_USAGE
