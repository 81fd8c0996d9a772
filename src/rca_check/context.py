"""Workflow run context read from the GitHub Actions environment."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .exceptions import ConfigurationError
from .logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ActionContext:
    """Repository and commit the check run is attached to.

    Attributes:
        owner: Repository owner
        repo: Repository name
        sha: Commit to attach the check run to; for pull requests this is
            the head commit rather than the merge commit
        head_ref: Head branch of a pull request, only set by the runner for
            pull_request events
    """

    owner: str
    repo: str
    sha: str
    head_ref: Optional[str] = None

    @property
    def is_fork(self) -> bool:
        # GITHUB_HEAD_REF is only exported for pull requests, where the token
        # of a forked head cannot write check runs
        return bool(self.head_ref)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ActionContext:
        env = os.environ if environ is None else environ

        repository = env.get("GITHUB_REPOSITORY", "")
        owner, _, repo = repository.partition("/")
        if not owner or not repo:
            raise ConfigurationError(
                "GITHUB_REPOSITORY must be set to <owner>/<repo>",
                details={"GITHUB_REPOSITORY": repository},
            )

        sha = _pull_request_head_sha(env.get("GITHUB_EVENT_PATH")) or env.get("GITHUB_SHA", "")
        if not sha:
            raise ConfigurationError("GITHUB_SHA is not set")

        return cls(owner=owner, repo=repo, sha=sha, head_ref=env.get("GITHUB_HEAD_REF") or None)


def _pull_request_head_sha(event_path: Optional[str]) -> Optional[str]:
    if not event_path:
        return None
    try:
        payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Cannot read event payload %s: %s", event_path, e)
        return None
    head = (payload.get("pull_request") or {}).get("head") or {}
    sha = head.get("sha")
    return sha if isinstance(sha, str) and sha else None
