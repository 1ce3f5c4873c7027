"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional

from release_watcher.core.entities import ReleaseRecord, UpdateEntry, WatchedItem


class WatchedItemSource(ABC):
    """Interface for listing the repositories to watch."""

    @abstractmethod
    async def list_watched_items(self) -> list[WatchedItem]:
        """Return every watched repository in listing order.

        Raises:
            EnumerationError: if any page of the listing could not be read.
        """
        pass


class ReleaseProvider(ABC):
    """Interface for fetching release metadata."""

    @abstractmethod
    async def fetch_latest_release(self, identifier: WatchedItem) -> Optional[ReleaseRecord]:
        """Fetch the latest release, or None if the repository has none.

        Raises:
            ReleaseFetchError: on any transient failure.
        """
        pass


class LLMClient(ABC):
    """Interface for LLM operations."""

    @abstractmethod
    async def summarize_release(self, release: ReleaseRecord) -> str:
        """Generate a short bullet-point summary of the release notes."""
        pass


class ReportWriter(ABC):
    """Interface for rendering reports."""

    @abstractmethod
    def render(self, updates: list[UpdateEntry], run_date: date, generated_at: datetime) -> str:
        """Render accepted updates into a document."""
        pass

    @abstractmethod
    def filename(self, run_date: date) -> str:
        """File name of the document for the given run date."""
        pass
