"""Core domain layer."""

from release_watcher.core.entities import LastSeenEntry, ReleaseRecord, UpdateEntry, WatchedItem
from release_watcher.core.exceptions import (
    ConfigurationError,
    EnumerationError,
    ReleaseFetchError,
    ReleaseWatcherError,
    StateStoreError,
    SummarizationError,
)
from release_watcher.core.interfaces import (
    LLMClient,
    ReleaseProvider,
    ReportWriter,
    WatchedItemSource,
)
from release_watcher.core.novelty import NoveltyFilter
from release_watcher.core.state_store import InMemoryStateStore, SQLiteStateStore, StateStore

__all__ = [
    "WatchedItem",
    "ReleaseRecord",
    "LastSeenEntry",
    "UpdateEntry",
    "ReleaseWatcherError",
    "ConfigurationError",
    "EnumerationError",
    "ReleaseFetchError",
    "SummarizationError",
    "StateStoreError",
    "WatchedItemSource",
    "ReleaseProvider",
    "LLMClient",
    "ReportWriter",
    "StateStore",
    "InMemoryStateStore",
    "SQLiteStateStore",
    "NoveltyFilter",
]
