"""Transform option handling: defaults, overrides and option files.

Options reach :func:`~apicontext.generator.context_builder.transform` as a
plain mapping. :func:`merge_options` lays them over the built-in defaults
table (:class:`~apicontext.models.GeneratorDefaults`) -- caller keys always
win -- and returns a frozen :class:`~apicontext.models.TransformOptions`
scoped to that one call.

The command line adds two more sources, merged in this order (later wins):

1. An options file (``--config FILE``), JSON or YAML, read by
   :func:`load_options_file`.
2. Individual ``--set KEY=VALUE`` overrides, parsed by
   :func:`parse_set_options`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from apicontext.exceptions import ConfigError, InvalidUsageError
from apicontext.models import TransformOptions


def merge_options(options: Optional[Mapping[str, Any]] = None) -> TransformOptions:
    """Merge caller *options* over the defaults table.

    Keys may use either the template spelling (``sortParamsByRequiredFlag``)
    or the Python attribute name (``sort_params_by_required_flag``). Unknown
    keys are preserved as extras.

    Args:
        options: Caller overrides, or ``None`` for pure defaults.

    Returns:
        A frozen :class:`~apicontext.models.TransformOptions`.

    Raises:
        ConfigError: If a known option carries a value of the wrong type.
    """
    if options is None:
        options = {}
    if isinstance(options, TransformOptions):
        return options
    if not isinstance(options, Mapping):
        raise ConfigError(
            f"Options must be a mapping (got {type(options).__name__})"
        )
    try:
        return TransformOptions.model_validate(dict(options))
    except ValidationError as exc:
        raise ConfigError(f"Invalid transform options: {exc}") from exc


def load_options_file(path: str) -> dict[str, Any]:
    """Load transform options from a JSON or YAML file.

    Args:
        path: Path to the options file.

    Returns:
        The options mapping.

    Raises:
        ConfigError: If the file is missing, unreadable, or not a mapping.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise ConfigError(f"Options file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read options file {path}: {exc}") from exc

    try:
        # JSON is a subset of YAML, one parser covers both
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid options file {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Options file {path} must contain a mapping (got {type(data).__name__})"
        )
    return data


def parse_set_options(assignments: Iterable[str]) -> dict[str, Any]:
    """Parse ``KEY=VALUE`` strings into an options mapping.

    Values are read as YAML scalars so ``true``, ``4`` and ``null`` arrive
    typed; anything else stays a string.

    Raises:
        InvalidUsageError: If an assignment has no ``=`` or an empty key.
    """
    result: dict[str, Any] = {}
    for item in assignments:
        key, sep, raw = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise InvalidUsageError(
                f"Invalid option '{item}'. Expected KEY=VALUE"
            )
        try:
            value = yaml.safe_load(raw) if raw.strip() else ""
        except yaml.YAMLError:
            value = raw
        result[key] = value
    return result
