"""Writing assistant client used to pre-fill post bodies.

The assistant wraps the Gemini ``generateContent`` REST endpoint. Its output
is only ever a suggestion for the editor; nothing in the engine depends on it.
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any

import httpx

from inkwell.core.settings import settings

logger = logging.getLogger(__name__)

HTTP_TOO_MANY_REQUESTS = 429
MIN_GENERATED_LENGTH = 100

_FENCE_START = re.compile(r"^\s*```(?:html)?\s*", re.IGNORECASE)
_FENCE_END = re.compile(r"\s*```\s*$")

_IMPROVE_INSTRUCTIONS = {
    "enhance": "Polish the following content: fix grammar, improve flow, prefer active voice.",
    "expand": "Expand the following content with concrete examples and step-by-step detail.",
    "simplify": "Rewrite the following content for a general audience with shorter sentences.",
    "shorten": "Condense the following content, keeping only the highest-impact sentences.",
}
_HTML_RULES = (
    "Return only raw HTML using h2, h3, p, ul and li elements. "
    "Do not wrap the answer in markdown code fences and do not add an h1 title."
)


class WritingAssistantError(RuntimeError):
    """Base exception raised when content generation fails."""


class AssistantUnavailableError(WritingAssistantError):
    """Raised when the assistant is not configured or cannot take requests."""


class AssistantRateLimitedError(AssistantUnavailableError):
    """Raised when the upstream model rejects the request for rate limiting."""


@dataclass(frozen=True)
class AssistantConfig:
    """Immutable configuration for the writing assistant."""

    api_key: str | None
    model: str
    base_url: str
    timeout_seconds: float


def load_assistant_config() -> AssistantConfig:
    """Build configuration object from global settings."""
    return AssistantConfig(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
        timeout_seconds=settings.assistant_timeout_seconds,
    )


def clean_ai_response(text: str) -> str:
    """Strip markdown code fences the model sometimes wraps HTML in."""
    return _FENCE_END.sub("", _FENCE_START.sub("", text)).strip()


def build_generation_prompt(title: str, category: str | None, tags: list[str]) -> str:
    """Return the prompt used to draft a post from its metadata."""
    return (
        "Write an engaging blog post of about 1000 words.\n"
        f'Title: "{title}"\n'
        f"Category: {category or 'General'}\n"
        f"Tags: {', '.join(tags) or 'None'}\n"
        f"{_HTML_RULES}"
    )


def build_improvement_prompt(content: str, mode: str) -> str:
    """Return the prompt used to rewrite existing content."""
    instruction = _IMPROVE_INSTRUCTIONS.get(mode, _IMPROVE_INSTRUCTIONS["enhance"])
    return f"{instruction}\n{_HTML_RULES}\n\nCONTENT:\n{content}"


class WritingAssistantClient:
    """HTTP client wrapper for the text generation model."""

    def __init__(
        self,
        config: AssistantConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or load_assistant_config()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    @property
    def enabled(self) -> bool:
        return bool(self.config.api_key)

    async def _ensure_client(self) -> httpx.AsyncClient:
        if not self.enabled:
            raise AssistantUnavailableError("The writing assistant is not configured")

        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.config.base_url,
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                    transport=self._transport,
                )
        return self._client

    @staticmethod
    def _extract_text(payload: dict[str, Any]) -> str:
        candidates = payload.get("candidates") or []
        if not candidates:
            raise WritingAssistantError("The model returned no candidates")
        parts = candidates[0].get("content", {}).get("parts", [])
        return "".join(part.get("text", "") for part in parts)

    async def generate(self, prompt: str) -> str:
        """Send ``prompt`` to the model and return the raw text answer.

        Raises:
            AssistantUnavailableError: If no API key is configured.
            AssistantRateLimitedError: If the model is rate limiting us.
            WritingAssistantError: For any other upstream failure.
        """
        client = await self._ensure_client()
        try:
            response = await client.post(
                f"/models/{self.config.model}:generateContent",
                params={"key": self.config.api_key},
                json={"contents": [{"parts": [{"text": prompt}]}]},
            )
        except httpx.HTTPError as exc:
            logger.warning("Writing assistant request failed: %s", exc)
            raise WritingAssistantError("Failed to generate content. Please try again.") from exc

        if response.status_code == HTTP_TOO_MANY_REQUESTS:
            logger.warning("Writing assistant is rate limited")
            raise AssistantRateLimitedError(
                "Our AI servers are currently overloaded. Please try again in a moment."
            )
        if response.is_error:
            logger.warning(
                "Writing assistant returned HTTP %s: %s",
                response.status_code,
                response.text[:200],
            )
            raise WritingAssistantError("Failed to generate content. Please try again.")
        return self._extract_text(response.json())

    async def generate_post_content(
        self,
        title: str,
        category: str | None = None,
        tags: list[str] | None = None,
    ) -> str:
        """Draft a post body as HTML from its title and metadata."""
        if not title.strip():
            raise WritingAssistantError("Title is required to generate content")
        text = await self.generate(build_generation_prompt(title.strip(), category, tags or []))
        content = clean_ai_response(text)
        if len(content) < MIN_GENERATED_LENGTH:
            raise WritingAssistantError("Generated content is too short or empty")
        return content

    async def improve_content(self, content: str, mode: str = "enhance") -> str:
        """Rewrite existing HTML content in the requested ``mode``."""
        if not content.strip():
            raise WritingAssistantError("Content is required for improvement")
        text = await self.generate(build_improvement_prompt(content, mode))
        return clean_ai_response(text)

    async def close(self) -> None:
        """Clean up underlying HTTP client resources."""
        async with self._client_lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None


class _AssistantSingleton:
    """Singleton wrapper for WritingAssistantClient."""

    _instance: WritingAssistantClient | None = None

    @classmethod
    def get_instance(cls) -> WritingAssistantClient:
        """Get or create the singleton client instance."""
        if cls._instance is None:
            cls._instance = WritingAssistantClient()
        return cls._instance


def get_writing_assistant() -> WritingAssistantClient:
    """Return a singleton writing assistant instance."""
    return _AssistantSingleton.get_instance()
