"""Durable last-seen state keyed by repository."""

import logging
import sqlite3
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from release_watcher.core.entities import LastSeenEntry
from release_watcher.core.exceptions import StateStoreError

logger = logging.getLogger(__name__)


class StateStore(ABC):
    """Mapping from repository identifier to last reported publish timestamp."""

    @abstractmethod
    def get(self, identifier: str) -> Optional[str]:
        """Return stored timestamp for identifier, or None."""
        pass

    @abstractmethod
    def upsert(self, identifier: str, published_at: str) -> None:
        """Insert the entry, overwriting any previous value."""
        pass

    @abstractmethod
    def entries(self) -> list[LastSeenEntry]:
        """All entries ordered by identifier."""
        pass

    def close(self) -> None:
        pass


class InMemoryStateStore(StateStore):
    """Dict-backed store, not persisted."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, identifier: str) -> Optional[str]:
        return self._data.get(identifier)

    def upsert(self, identifier: str, published_at: str) -> None:
        self._data[identifier] = published_at

    def entries(self) -> list[LastSeenEntry]:
        return [
            LastSeenEntry(identifier=key, last_published_at=value)
            for key, value in sorted(self._data.items())
        ]


class SQLiteStateStore(StateStore):
    """SQLite-backed store; one connection for the process lifetime."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        try:
            db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(str(db_path), check_same_thread=False)
            self._conn.execute("""
                CREATE TABLE IF NOT EXISTS last_releases (
                    repo              TEXT PRIMARY KEY,
                    last_published_at TEXT
                )
            """)
            self._conn.commit()
        except (OSError, sqlite3.Error) as e:
            raise StateStoreError(f"Cannot open state database {db_path}: {e}") from e
        logger.debug("State database ready at %s", db_path)

    def get(self, identifier: str) -> Optional[str]:
        try:
            row = self._conn.execute(
                "SELECT last_published_at FROM last_releases WHERE repo = ?", (identifier,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StateStoreError(f"Cannot read state for {identifier}: {e}") from e
        return row[0] if row else None

    def upsert(self, identifier: str, published_at: str) -> None:
        try:
            self._conn.execute(
                "INSERT OR REPLACE INTO last_releases (repo, last_published_at) VALUES (?, ?)",
                (identifier, published_at),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            raise StateStoreError(f"Cannot write state for {identifier}: {e}") from e

    def entries(self) -> list[LastSeenEntry]:
        try:
            rows = self._conn.execute(
                "SELECT repo, last_published_at FROM last_releases ORDER BY repo"
            ).fetchall()
        except sqlite3.Error as e:
            raise StateStoreError(f"Cannot list state: {e}") from e
        return [LastSeenEntry(identifier=repo, last_published_at=ts) for repo, ts in rows]

    def close(self) -> None:
        self._conn.close()
