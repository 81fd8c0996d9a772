"""Request bodies for the GitHub Checks API."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from ..models import Annotation

TRUNCATION_MARKER = "\n\n_Report truncated._"


class CheckStatus(str, Enum):
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class CheckConclusion(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    NEUTRAL = "neutral"
    CANCELLED = "cancelled"


def truncate_text(text: str, limit: int) -> str:
    """Cut ``text`` to at most ``limit`` characters, marking the cut."""
    if len(text) <= limit:
        return text
    keep = max(0, limit - len(TRUNCATION_MARKER))
    return (text[:keep] + TRUNCATION_MARKER)[:limit]


@dataclass
class CheckRunOutput:
    title: str
    summary: str
    text: str = ""
    annotations: List[Annotation] = field(default_factory=list)

    def to_payload(self, max_text_length: Optional[int] = None) -> dict[str, Any]:
        text = self.text
        if max_text_length is not None:
            text = truncate_text(text, max_text_length)
        payload: dict[str, Any] = {"title": self.title, "summary": self.summary, "text": text}
        if self.annotations:
            payload["annotations"] = [a.to_dict() for a in self.annotations]
        return payload


@dataclass
class CheckRunCreate:
    name: str
    head_sha: str
    status: CheckStatus = CheckStatus.IN_PROGRESS
    started_at: Optional[str] = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "head_sha": self.head_sha,
            "status": self.status.value,
        }
        if self.started_at:
            payload["started_at"] = self.started_at
        return payload


@dataclass
class CheckRunUpdate:
    name: str
    status: CheckStatus
    output: CheckRunOutput
    conclusion: Optional[CheckConclusion] = None
    completed_at: Optional[str] = None

    def __post_init__(self) -> None:
        if self.status is CheckStatus.COMPLETED and self.conclusion is None:
            raise ValueError("a completed check run needs a conclusion")

    def to_payload(self, max_text_length: Optional[int] = None) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "status": self.status.value,
            "output": self.output.to_payload(max_text_length),
        }
        if self.conclusion is not None:
            payload["conclusion"] = self.conclusion.value
        if self.completed_at is not None:
            payload["completed_at"] = self.completed_at
        return payload
