"""Decide whether a fetched release is newer than the last one reported."""

import logging

from release_watcher.core.state_store import StateStore

logger = logging.getLogger(__name__)


class NoveltyFilter:
    """Compare publish timestamps against the state store.

    Timestamps are fixed-width UTC ISO-8601 strings, so plain string
    comparison matches chronological order. Store calls are synchronous and
    run on the event loop thread, so reads and writes never interleave.
    """

    def __init__(self, store: StateStore) -> None:
        self.store = store

    def is_novel(self, identifier: str, published_at: str) -> bool:
        """True if nothing is stored for identifier or the stored value is older."""
        last_seen = self.store.get(identifier)
        if last_seen is None:
            return True
        if last_seen < published_at:
            return True
        logger.debug("%s: %s already seen (last %s)", identifier, published_at, last_seen)
        return False

    def record_seen(self, identifier: str, published_at: str) -> None:
        """Upsert the last-seen timestamp for identifier."""
        self.store.upsert(identifier, published_at)
