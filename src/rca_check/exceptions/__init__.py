"""Exception hierarchy for rca-check."""

from .base import RcaCheckError
from .checks import CheckRunApiError, CheckRunError
from .config import ConfigurationError, InvalidConfigError
from .tool import ToolError, ToolFailedError, ToolNotFoundError

__all__ = [
    "RcaCheckError",
    "ConfigurationError",
    "InvalidConfigError",
    "ToolError",
    "ToolNotFoundError",
    "ToolFailedError",
    "CheckRunError",
    "CheckRunApiError",
]
