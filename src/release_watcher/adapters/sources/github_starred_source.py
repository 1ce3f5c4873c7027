"""GitHub source listing the authenticated user's starred repositories."""

import logging
from typing import Optional

import httpx

from release_watcher.adapters.github import GITHUB_API_BASE, error_message, github_headers
from release_watcher.core import EnumerationError, WatchedItem, WatchedItemSource

logger = logging.getLogger(__name__)


class GitHubStarredSource(WatchedItemSource):
    """Page through /user/starred until an empty page is returned."""

    def __init__(
        self,
        token: str,
        page_size: int = 100,
        api_base: str = GITHUB_API_BASE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.token = token
        self.page_size = page_size
        self.api_base = api_base
        self.transport = transport

    async def list_watched_items(self) -> list[WatchedItem]:
        """Return starred repository names in listing order, without duplicates."""
        seen: set[str] = set()
        items: list[WatchedItem] = []
        page = 1

        async with httpx.AsyncClient(
            timeout=30.0, headers=github_headers(self.token), transport=self.transport
        ) as client:
            while True:
                repos = await self._fetch_page(client, page)
                if not repos:
                    break

                for repo in repos:
                    full_name = repo.get("full_name") if isinstance(repo, dict) else None
                    if not full_name:
                        logger.warning("Skipping starred entry without full_name on page %d", page)
                        continue
                    if full_name not in seen:
                        seen.add(full_name)
                        items.append(full_name)
                page += 1

        logger.info("Fetched %d starred repositories (%d pages)", len(items), page - 1)
        return items

    async def _fetch_page(self, client: httpx.AsyncClient, page: int) -> list:
        try:
            response = await client.get(
                f"{self.api_base}/user/starred",
                params={"per_page": self.page_size, "page": page},
            )
        except httpx.HTTPError as e:
            raise EnumerationError(f"Failed to fetch starred page {page}: {e}") from e

        if response.status_code != 200:
            raise EnumerationError(
                f"Failed to fetch starred page {page}: {error_message(response)}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise EnumerationError(f"Starred page {page} is not valid JSON") from e

        if not isinstance(data, list):
            raise EnumerationError(f"Unexpected starred page {page} payload: {type(data).__name__}")
        return data
