"""Thin HTTP client for the GitHub Checks API."""

from __future__ import annotations

from typing import Any, Optional

import requests

from .. import __version__
from ..exceptions import CheckRunApiError
from ..logging_config import get_logger
from .models import CheckRunCreate, CheckRunUpdate

logger = get_logger(__name__)

USER_AGENT = f"rca-check/{__version__}"


class ChecksClient:
    """Create and update check runs for one repository owner/name pair at a time."""

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.github.com",
        timeout: float = 30.0,
        max_text_length: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.max_text_length = max_text_length
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "User-Agent": USER_AGENT,
            }
        )

    def create(self, owner: str, repo: str, request: CheckRunCreate) -> int:
        """Create a check run and return its id."""
        url = f"{self.api_url}/repos/{owner}/{repo}/check-runs"
        data = self._send("create", "POST", url, request.to_payload())
        try:
            return int(data["id"])
        except (KeyError, TypeError, ValueError):
            raise CheckRunApiError("create", "Check run response carries no id")

    def update(self, owner: str, repo: str, check_run_id: int, request: CheckRunUpdate) -> None:
        url = f"{self.api_url}/repos/{owner}/{repo}/check-runs/{check_run_id}"
        self._send("update", "PATCH", url, request.to_payload(self.max_text_length))

    def _send(self, operation: str, method: str, url: str, payload: dict[str, Any]) -> Any:
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise CheckRunApiError(operation, f"Request to {url} failed: {e}")

        if not 200 <= response.status_code < 300:
            raise CheckRunApiError(
                operation,
                f"GitHub API responded {response.status_code}: {_error_message(response)}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError:
            return None


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or response.reason or "no details"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return str(body)
