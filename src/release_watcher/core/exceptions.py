"""Error types raised across the watcher."""

from typing import Optional


class ReleaseWatcherError(Exception):
    """Base class for watcher errors."""


class ConfigurationError(ReleaseWatcherError):
    """Required setting is missing or invalid."""


class EnumerationError(ReleaseWatcherError):
    """Watched repositories could not be listed."""


class ReleaseFetchError(ReleaseWatcherError):
    """Transient failure while fetching a repository's latest release."""

    def __init__(self, identifier: str, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(f"{identifier}: {message}")
        self.identifier = identifier
        self.status_code = status_code


class SummarizationError(ReleaseWatcherError):
    """Summarization service call failed."""


class StateStoreError(ReleaseWatcherError):
    """Last-seen state could not be read or written."""
