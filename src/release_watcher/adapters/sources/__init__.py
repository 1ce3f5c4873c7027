"""Source adapters for listing watched repositories."""

from release_watcher.adapters.sources.github_starred_source import GitHubStarredSource

__all__ = ["GitHubStarredSource"]
