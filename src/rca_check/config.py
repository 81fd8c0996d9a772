"""Configuration loading and management for rca-check.

Configuration sources are merged in priority order:
    1. Defaults (defined in CheckConfig)
    2. Project config (./rca-check.toml)
    3. Explicit config file
    4. Action inputs (INPUT_* environment variables)
    5. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(token="ghs_xxx", directory="src")
    >>> config.annotations_per_request
    50
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

# Hard limits imposed by the Checks API
MAX_ANNOTATIONS_PER_REQUEST = 50
MAX_OUTPUT_TEXT_LENGTH = 65535

PROJECT_CONFIG_NAME = "rca-check.toml"


@dataclass(frozen=True)
class CheckConfig:
    """Settings for one reporting run.

    Attributes:
        token: GitHub token allowed to write check runs
        directory: Directory passed to rust-code-analysis-cli with ``-p``
        name: Display name of the check run
        annotations_per_request: Page size for annotation updates
        api_url: Base URL of the GitHub REST API
        request_timeout: Per-request timeout in seconds
        executable: Name or path of the analysis executable
        max_text_length: Longest report text sent in one update
    """

    token: str = ""
    directory: str = "."
    name: str = "rust-code-analysis"
    annotations_per_request: int = MAX_ANNOTATIONS_PER_REQUEST
    api_url: str = "https://api.github.com"
    request_timeout: float = 30.0
    executable: str = "rust-code-analysis-cli"
    max_text_length: int = MAX_OUTPUT_TEXT_LENGTH

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.name:
            raise ValueError("name must not be empty")
        if not 1 <= self.annotations_per_request <= MAX_ANNOTATIONS_PER_REQUEST:
            raise ValueError(
                f"annotations_per_request must be between 1 and {MAX_ANNOTATIONS_PER_REQUEST}"
            )
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        if not 1 <= self.max_text_length <= MAX_OUTPUT_TEXT_LENGTH:
            raise ValueError(f"max_text_length must be between 1 and {MAX_OUTPUT_TEXT_LENGTH}")


def load_config(
    config_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> CheckConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit TOML file
        environ: Environment to read action inputs from (defaults to os.environ)
        **overrides: Direct overrides (typically from CLI flags); None values are ignored

    Returns:
        Validated CheckConfig instance

    Raises:
        ConfigurationError: If a config file is missing or any value is invalid
    """
    merged: dict[str, Any] = {}

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_action_inputs(os.environ if environ is None else environ))

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return CheckConfig(**merged)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_action_inputs(environ: Mapping[str, str]) -> dict[str, Any]:
    """Load configuration from INPUT_* environment variables.

    The Actions runner exposes each ``with:`` input as ``INPUT_<NAME>``
    (upper-cased). Empty values count as unset, since the runner exports
    every declared input even when the workflow leaves it blank.

    Returns:
        Dict of field_name -> parsed_value for any INPUT_* vars found.
    """
    type_hints = get_type_hints(CheckConfig)

    result: dict[str, Any] = {}

    for f in fields(CheckConfig):
        env_key = f"INPUT_{f.name.upper()}"
        env_value = environ.get(env_key, "").strip()
        if not env_value:
            continue

        try:
            result[f.name] = _parse_env_value(env_value, type_hints[f.name])
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the field's type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    return value


def _load_toml_file(path: Path) -> dict:
    """Load a TOML file, accepting either top-level keys or a [rca-check] table."""
    with open(path, "rb") as f:
        data = tomllib.load(f)
    section = data.get("rca-check")
    if isinstance(section, dict):
        return section
    return data
