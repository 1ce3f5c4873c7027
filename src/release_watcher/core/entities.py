"""Core domain entities."""

from dataclasses import dataclass
from typing import Optional

# Repository identifier in "owner/name" form
WatchedItem = str


@dataclass(frozen=True)
class ReleaseRecord:
    """Latest release fetched for a watched repository."""

    identifier: str
    tag: str
    title: Optional[str]
    published_at: str
    body: str
    url: str

    def __post_init__(self) -> None:
        if not self.identifier:
            raise ValueError("Identifier cannot be empty")
        if not self.published_at:
            raise ValueError("Publish timestamp cannot be empty")


@dataclass(frozen=True)
class LastSeenEntry:
    """Most recent release already reported for a repository."""

    identifier: str
    last_published_at: str


@dataclass
class UpdateEntry:
    """Accepted release paired with its summary."""

    release: ReleaseRecord
    summary: str
    summary_ok: bool = True

    @property
    def repository_url(self) -> str:
        return f"https://github.com/{self.release.identifier}"
