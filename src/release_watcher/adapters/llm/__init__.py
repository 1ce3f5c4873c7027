"""LLM adapters."""

from release_watcher.adapters.llm.qwen_client import NO_CHANGELOG_TEXT, QwenClient

__all__ = ["QwenClient", "NO_CHANGELOG_TEXT"]
