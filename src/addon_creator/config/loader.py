"""Configuration file loading and validation helpers."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError
from result import Err, Ok, Result

from addon_creator.common import AppPaths, get_global_config_root

from .models import (
    ConfigError,
    ConfigIOError,
    ConfigNotFoundError,
    ConfigValidationError,
    ConfigYamlError,
    GlobalConfig,
)


def global_config_path(paths: AppPaths) -> Path:
    return get_global_config_root(paths) / paths.global_config_filename


def load_global_config(path: Path) -> Result[GlobalConfig, ConfigError]:
    """Load and validate global config from YAML file."""
    if not path.is_file():
        return Err(
            ConfigNotFoundError(
                expected_path=path,
                message="Global configuration file not found.",
            ),
        )

    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        return Err(ConfigIOError(path=path, message=str(exc)))

    try:
        data = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        line = getattr(mark, "line", None)
        column = getattr(mark, "column", None)
        return Err(
            ConfigYamlError(
                path=path,
                line=(line + 1) if line is not None else None,
                column=(column + 1) if column is not None else None,
                message=str(exc),
            ),
        )

    if data is None:
        data = {}

    if not isinstance(data, dict):
        return Err(
            ConfigValidationError(
                path=path,
                field=None,
                message="Configuration root must be a mapping of keys to values.",
            ),
        )

    try:
        return Ok(GlobalConfig.model_validate(data))
    except ValidationError as exc:
        field = None
        message = str(exc)
        if error_details := exc.errors():
            first = error_details[0]
            field = ".".join(str(part) for part in first.get("loc") or ()) or None
            message = first.get("msg", message)
        return Err(ConfigValidationError(path=path, field=field, message=message))
