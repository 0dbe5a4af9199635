"""
Module: config

Purpose:
    Configuration dataclass for the command line tools. Immutable
    configuration with validation on construction, loadable from JSON.

Key Classes:
    - GradeMatrixConfig: Page size, file encoding and log level

Key Functions:
    - load_config(): Read and validate a JSON configuration file

Dependencies:
    - dataclasses (std)
    - jsonschema: Validation of configuration files

Used By:
    - cli
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional

import jsonschema

from grade_matrix.errors import ConfigError

LOG_LEVEL_ENV = "GRADE_MATRIX_LOG_LEVEL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

CONFIG_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "per_page": {"type": "integer", "minimum": 1},
        "encoding": {"type": "string", "minLength": 1},
        "log_level": {"type": "string", "enum": list(LOG_LEVELS)},
    },
    "additionalProperties": False,
}


@dataclass(frozen=True)
class GradeMatrixConfig:
    """
    Configuration for the grade matrix tools (immutable).

    Attributes:
        per_page: Students per page for alphabetical pagination
        encoding: Text encoding of CSV files read and written
        log_level: Name of the logging level

    Invariants:
        - per_page > 0
        - log_level is one of the standard logging level names

    Example:
        >>> config = GradeMatrixConfig(per_page=20)
        >>> config.level
        20
    """

    per_page: int = 15
    encoding: str = "utf-8"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.per_page <= 0:
            raise ValueError(f"per_page must be positive: {self.per_page}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level!r}")

    @property
    def level(self) -> int:
        """Numeric logging level."""
        return getattr(logging, self.log_level.upper())


def load_config(path: Optional[Path] = None) -> GradeMatrixConfig:
    """
    Load configuration from a JSON file.

    Missing keys use the defaults. The GRADE_MATRIX_LOG_LEVEL environment
    variable overrides the configured log level.

    Args:
        path: JSON file to read; None for defaults only

    Returns:
        Validated configuration

    Raises:
        ConfigError: If the file cannot be read or fails validation
    """
    config = GradeMatrixConfig()

    if path is not None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot read config {path}: {e}") from e

        try:
            jsonschema.validate(data, CONFIG_SCHEMA)
        except jsonschema.ValidationError as e:
            raise ConfigError(f"Invalid config {path}: {e.message}") from e

        config = replace(config, **data)

    env_level = os.getenv(LOG_LEVEL_ENV)
    if env_level:
        try:
            config = replace(config, log_level=env_level.upper())
        except ValueError as e:
            raise ConfigError(f"Invalid {LOG_LEVEL_ENV}: {e}") from e

    return config
