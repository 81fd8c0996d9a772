"""GitHub Checks API access."""

from .client import ChecksClient
from .models import (
    CheckConclusion,
    CheckRunCreate,
    CheckRunOutput,
    CheckRunUpdate,
    CheckStatus,
    truncate_text,
)

__all__ = [
    "ChecksClient",
    "CheckConclusion",
    "CheckRunCreate",
    "CheckRunOutput",
    "CheckRunUpdate",
    "CheckStatus",
    "truncate_text",
]
