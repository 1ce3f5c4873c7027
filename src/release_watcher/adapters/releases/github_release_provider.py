"""GitHub release provider: latest release per repository."""

import logging
from typing import Optional

import httpx

from release_watcher.adapters.github import GITHUB_API_BASE, error_message, github_headers
from release_watcher.core import ReleaseFetchError, ReleaseProvider, ReleaseRecord

logger = logging.getLogger(__name__)


class GitHubReleaseProvider(ReleaseProvider):
    """Fetch /repos/{repo}/releases/latest. No retries."""

    def __init__(
        self,
        token: str,
        api_base: str = GITHUB_API_BASE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.token = token
        self.api_base = api_base
        self.transport = transport

    async def fetch_latest_release(self, identifier: str) -> Optional[ReleaseRecord]:
        try:
            async with httpx.AsyncClient(
                timeout=30.0, headers=github_headers(self.token), transport=self.transport
            ) as client:
                response = await client.get(f"{self.api_base}/repos/{identifier}/releases/latest")
        except httpx.HTTPError as e:
            raise ReleaseFetchError(identifier, f"request failed: {e}") from e

        # Repository has never published a release
        if response.status_code == 404:
            logger.debug("%s: no release", identifier)
            return None

        if not response.is_success:
            raise ReleaseFetchError(identifier, error_message(response), response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ReleaseFetchError(identifier, "invalid JSON payload", response.status_code) from e

        return self._create_record(identifier, data)

    def _create_record(self, identifier: str, data: dict) -> ReleaseRecord:
        if not isinstance(data, dict) or not data.get("published_at"):
            raise ReleaseFetchError(identifier, "release payload has no published_at")

        return ReleaseRecord(
            identifier=identifier,
            tag=data.get("tag_name") or "",
            title=data.get("name") or None,
            published_at=data["published_at"],
            body=data.get("body") or "",
            url=data.get("html_url") or f"https://github.com/{identifier}/releases",
        )
