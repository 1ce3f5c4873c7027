"""Shared GitHub API settings."""

GITHUB_API_BASE = "https://api.github.com"
USER_AGENT = "github-release-watcher"


def github_headers(token: str) -> dict[str, str]:
    """Get headers for GitHub API requests."""
    return {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
        "Authorization": f"Bearer {token}",
        "User-Agent": USER_AGENT,
    }


def error_message(response) -> str:
    """Extract GitHub's error message from a response, falling back to the status line."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("message"):
        return f"{response.status_code} {data['message']}"
    return f"HTTP {response.status_code}"
