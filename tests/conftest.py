"""Shared test fixtures for apicontext.

Provides the petstore document fixture, a ready-made context for it, output
state management, and a CLI runner. These fixtures are discovered by pytest
and available to all test modules without explicit imports.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from apicontext.models import Context
from apicontext.output import reset_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When CliRunner redirects those streams and the test
    finishes, the cached references become stale.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_30_raw() -> dict[str, Any]:
    """Load the raw petstore 3.0 document."""
    with open(FIXTURES_DIR / "petstore_3.0.json") as f:
        return json.load(f)


@pytest.fixture
def petstore_path() -> Path:
    return FIXTURES_DIR / "petstore_3.0.json"


@pytest.fixture
def minimal_doc() -> dict[str, Any]:
    """Smallest document the context builder accepts."""
    return {
        "openapi": "3.0.3",
        "info": {"title": "Minimal API", "version": "0.1.0"},
        "paths": {},
    }


@pytest.fixture
def petstore_context(petstore_30_raw: dict[str, Any]) -> Context:
    """Context for the petstore document with the default options."""
    from apicontext.generator.context_builder import transform

    return transform(copy.deepcopy(petstore_30_raw))


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
