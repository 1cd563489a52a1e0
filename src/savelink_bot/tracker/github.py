"""GitHub issue filing.

Creates exactly one issue per successful call. Not retried: GitHub has no
idempotency key for issue creation, so a retry could open a duplicate.
"""

from typing import List, Optional

import httpx

from ..errors import BotFailure
from ..log import get_logger
from ..rendering.issue_format import render_issue_body
from ..schemas.command import IssueRecord, IssueReference

logger = get_logger("github")


class GitHubIssueFiler:
    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        api_url: str = "https://api.github.com",
        timeout: float = 15.0,
        labels: Optional[List[str]] = None,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.labels = labels or []
        self.headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "SaveLinkBot/1.0",
        }

    @property
    def issues_endpoint(self) -> str:
        return f"{self.api_url}/repos/{self.owner}/{self.repo}/issues"

    def build_payload(self, record: IssueRecord) -> dict:
        payload = {
            "title": record.title,
            "body": render_issue_body(record),
        }
        if self.labels:
            payload["labels"] = list(self.labels)
        return payload

    def file_issue(self, record: IssueRecord) -> IssueReference:
        """
        Creates the issue and returns its html_url.
        Raises a FILING BotFailure on any error.
        """
        try:
            with httpx.Client(timeout=self.timeout, headers=self.headers) as client:
                resp = client.post(self.issues_endpoint, json=self.build_payload(record))
                if not resp.is_success:
                    raise BotFailure.filing(self._error_message(resp))
                data = resp.json()
        except BotFailure:
            raise
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"GitHub request failed: {e}")
            raise BotFailure.filing(str(e) or e.__class__.__name__, cause=e) from e

        reference = data.get("html_url") if isinstance(data, dict) else None
        if not reference:
            raise BotFailure.filing("GitHub response did not include an issue URL")

        logger.info(f"Created issue {reference}")
        return reference

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        try:
            message = resp.json().get("message")
        except (ValueError, AttributeError):
            message = None
        if message:
            return f"HTTP {resp.status_code}: {message}"
        return f"HTTP {resp.status_code}"
