"""Check-run lifecycle: create, update page by page, complete or cancel.

The runner walks a small state machine::

    UNCREATED -> IN_PROGRESS -> COMPLETED | CANCELLED
    UNCREATED -> FALLBACK_DUMPED

Calls are issued strictly in order and never retried. A failure after the
check run exists is answered with one cancelling update, after which the
original error propagates.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, TextIO

from .annotations import paginate
from .config import MAX_ANNOTATIONS_PER_REQUEST
from .github.models import (
    CheckConclusion,
    CheckRunCreate,
    CheckRunOutput,
    CheckRunUpdate,
    CheckStatus,
)
from .logging_config import get_logger
from .session import CheckRunSession, utcnow_iso

logger = get_logger(__name__)

CANCELLED_SUMMARY = "Unhandled error"
CANCELLED_TEXT = (
    "Check was cancelled due to unhandled error. Check the Action logs for details."
)
FORK_HELP = (
    "GitHub Actions are not allowed to create Check annotations when executed "
    "for a forked repository."
)


class ChecksApi(Protocol):
    """The two Checks API calls the runner needs."""

    def create(self, owner: str, repo: str, request: CheckRunCreate) -> int: ...

    def update(self, owner: str, repo: str, check_run_id: int, request: CheckRunUpdate) -> None: ...


class CheckRunState(Enum):
    UNCREATED = "uncreated"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FALLBACK_DUMPED = "fallback_dumped"


@dataclass(frozen=True)
class CheckOptions:
    """Where and under which name the check run is published."""

    name: str
    owner: str
    repo: str
    head_sha: str
    started_at: str  # ISO8601
    is_fork: bool = False


class CheckRunner:
    """Publish one session's report and annotations as a check run."""

    def __init__(
        self,
        client: ChecksApi,
        options: CheckOptions,
        annotations_per_request: int = MAX_ANNOTATIONS_PER_REQUEST,
        stream: Optional[TextIO] = None,
    ):
        if annotations_per_request < 1:
            raise ValueError("annotations_per_request must be at least 1")
        self.client = client
        self.options = options
        self.annotations_per_request = annotations_per_request
        self.stream = stream
        self.state = CheckRunState.UNCREATED

    def execute(self, session: CheckRunSession) -> CheckRunState:
        """Run the whole lifecycle for ``session`` and return the terminal state."""
        try:
            check_run_id = self._create()
        except Exception as error:
            if not self.options.is_fork:
                raise
            logger.error("Unable to create the prospective summary! Reason: %s", error)
            logger.warning("It seems that this Action is executed from the forked repository.")
            logger.warning(FORK_HELP)
            logger.info("Posting the prospective summary here instead.")
            self._dump(session)
            self.state = CheckRunState.FALLBACK_DUMPED
            return self.state

        session.check_run_id = check_run_id
        self.state = CheckRunState.IN_PROGRESS
        logger.info("Created check run %s", check_run_id)

        try:
            self._complete(check_run_id, session)
        except Exception:
            logger.error("Reporting failed, cancelling check run %s", check_run_id)
            self._cancel(check_run_id)
            self.state = CheckRunState.CANCELLED
            raise

        session.annotations.clear()
        self.state = CheckRunState.COMPLETED
        return self.state

    def _create(self) -> int:
        opts = self.options
        request = CheckRunCreate(
            name=opts.name,
            head_sha=opts.head_sha,
            status=CheckStatus.IN_PROGRESS,
            started_at=opts.started_at,
        )
        return self.client.create(opts.owner, opts.repo, request)

    def _complete(self, check_run_id: int, session: CheckRunSession) -> None:
        text = session.report()
        summary = (
            f"{len(session.records)} file(s) analysed, "
            f"{len(session.annotations)} space(s) annotated."
        )
        pages = list(paginate(session.annotations, self.annotations_per_request)) or [[]]

        for index, page in enumerate(pages, start=1):
            last = index == len(pages)
            request = CheckRunUpdate(
                name=self.options.name,
                status=CheckStatus.COMPLETED if last else CheckStatus.IN_PROGRESS,
                conclusion=CheckConclusion.SUCCESS if last else None,
                completed_at=utcnow_iso() if last else None,
                output=CheckRunOutput(
                    title=self.options.name,
                    summary=summary,
                    text=text,
                    annotations=list(page),
                ),
            )
            logger.debug("Sending update %d/%d with %d annotation(s)", index, len(pages), len(page))
            self.client.update(self.options.owner, self.options.repo, check_run_id, request)

    def _cancel(self, check_run_id: int) -> None:
        request = CheckRunUpdate(
            name=self.options.name,
            status=CheckStatus.COMPLETED,
            conclusion=CheckConclusion.CANCELLED,
            completed_at=utcnow_iso(),
            output=CheckRunOutput(
                title=self.options.name,
                summary=CANCELLED_SUMMARY,
                text=CANCELLED_TEXT,
            ),
        )
        self.client.update(self.options.owner, self.options.repo, check_run_id, request)

    def _dump(self, session: CheckRunSession) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        for record in session.records:
            stream.write(json.dumps(record.to_dict(), indent=2) + "\n")
        stream.flush()
