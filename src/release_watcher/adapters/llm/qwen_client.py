"""Qwen (DashScope OpenAI-compatible) client for release summarization."""

import asyncio
import logging

import httpx

from release_watcher.config import Settings
from release_watcher.core import LLMClient, ReleaseRecord, SummarizationError

logger = logging.getLogger(__name__)

NO_CHANGELOG_TEXT = "(No detailed changelog)"


class QwenClient(LLMClient):
    """Qwen chat-completions client implementation."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.api_key = settings.dashscope_api_key
        self.model = settings.qwen.model
        self.base_url = settings.qwen.base_url.rstrip("/")
        self.max_tokens = settings.qwen.max_tokens
        self.temperature = settings.qwen.temperature
        self.max_retries = settings.qwen.max_retries
        self.initial_retry_delay = settings.qwen.initial_retry_delay
        self.request_delay = settings.qwen.request_delay
        self.max_input_chars = settings.qwen.max_input_chars
        self._last_request_time = 0.0

    async def summarize_release(self, release: ReleaseRecord) -> str:
        """Summarize release notes as 3-5 bullet points.

        Raises:
            SummarizationError: if the API call fails after all retries.
        """
        if not release.body or not release.body.strip():
            return NO_CHANGELOG_TEXT

        prompt_template = self.settings.prompts.summary.get("user", "")
        system_prompt = self.settings.prompts.summary.get("system", "")

        prompt = prompt_template.format(
            repo=release.identifier,
            tag=release.tag,
            language=self.settings.prompts.language,
            content=release.body[:self.max_input_chars],
        )

        try:
            response = await self._call_api(prompt=prompt, system=system_prompt)
        except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError) as e:
            raise SummarizationError(f"Summary for {release.identifier} failed: {e}") from e
        return response.strip()

    async def _call_api(self, prompt: str, system: str) -> str:
        """POST a chat completion, retrying rate limits, 5xx and network errors."""
        loop = asyncio.get_running_loop()
        wait = self.request_delay - (loop.time() - self._last_request_time)
        if wait > 0:
            await asyncio.sleep(wait)

        messages = [{"role": "user", "content": prompt}]
        if system:
            messages.insert(0, {"role": "system", "content": system})

        for attempt in range(self.max_retries):
            last_attempt = attempt == self.max_retries - 1
            try:
                async with httpx.AsyncClient(timeout=60.0) as client:
                    response = await client.post(
                        f"{self.base_url}/chat/completions",
                        headers={"Authorization": f"Bearer {self.api_key}"},
                        json={
                            "model": self.model,
                            "max_tokens": self.max_tokens,
                            "temperature": self.temperature,
                            "messages": messages,
                        },
                    )
            except httpx.RequestError as e:
                if last_attempt:
                    raise
                reason = f"network error: {e}"
                delay = self._backoff(attempt)
            else:
                self._last_request_time = loop.time()
                if response.status_code == 200:
                    return response.json()["choices"][0]["message"]["content"]
                if response.status_code != 429 and response.status_code < 500:
                    response.raise_for_status()
                if last_attempt:
                    break
                reason = f"HTTP {response.status_code}"
                delay = self._retry_after(response, attempt)

            logger.warning(
                "Qwen request failed (%s), retry %d/%d in %.1fs",
                reason, attempt + 1, self.max_retries - 1, delay,
            )
            await asyncio.sleep(delay)

        raise SummarizationError(f"Qwen API still failing after {self.max_retries} attempts")

    def _backoff(self, attempt: int) -> float:
        return self.initial_retry_delay * (2 ** attempt)

    def _retry_after(self, response: httpx.Response, attempt: int) -> float:
        """Honour Retry-After on 429, otherwise back off exponentially."""
        if response.status_code == 429:
            try:
                return float(response.headers["retry-after"])
            except (KeyError, ValueError):
                pass
        return self._backoff(attempt)
