"""Release metadata adapters."""

from release_watcher.adapters.releases.github_release_provider import GitHubReleaseProvider

__all__ = ["GitHubReleaseProvider"]
