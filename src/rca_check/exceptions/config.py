"""Configuration exceptions: settings and workflow context."""

from typing import Any

from .base import RcaCheckError


class ConfigurationError(RcaCheckError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason
