"""Shared fixtures."""

from typing import Optional

import pytest

from release_watcher.core import ReleaseRecord


def make_release(
    identifier: str = "org/a",
    published_at: str = "2024-01-01T00:00:00Z",
    tag: str = "v1.0.0",
    body: str = "- Fixed a bug",
    title: Optional[str] = "First release",
) -> ReleaseRecord:
    return ReleaseRecord(
        identifier=identifier,
        tag=tag,
        title=title,
        published_at=published_at,
        body=body,
        url=f"https://github.com/{identifier}/releases/tag/{tag}",
    )


@pytest.fixture
def release() -> ReleaseRecord:
    """Create test release."""
    return make_release()
