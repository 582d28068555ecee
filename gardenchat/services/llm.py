"""
Generation capability: OpenAI-compatible client singleton, JSON-object
generation and streamed text.

Any OpenAI-compatible endpoint works (set LLM_BASE_URL for DeepSeek and
friends).  Two operations are exposed:
  - ``generate_json``: one JSON object for a prompt (schema validation
    is the caller's job)
  - ``stream_text``: a single-use ``TextStream`` of answer chunks
    followed by a terminal usage value
"""

from __future__ import annotations

import json
import threading
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from openai import AsyncOpenAI
from pydantic import BaseModel

from gardenchat.core.config import settings
from gardenchat.core.exceptions import (
    GardenChatError,
    GenerationError,
    ServiceUnavailableError,
)
from gardenchat.utils.logging import get_logger

logger = get_logger("gardenchat.services.llm")

_QUOTA_MARKERS = ("insufficient balance", "insufficient_quota", "quota exceeded")


# ── Singleton client ────────────────────────────────────────────────
_client_lock = threading.Lock()
_client_instance: AsyncOpenAI | None = None


def get_openai_client() -> AsyncOpenAI:
    """
    Return a module-level AsyncOpenAI client singleton.

    Raises RuntimeError when the API key is missing.
    """
    global _client_instance
    if _client_instance is not None:
        return _client_instance

    with _client_lock:
        if _client_instance is not None:
            return _client_instance

        if not settings.openai_api_key:
            raise RuntimeError("LLM API key not configured (OPENAI_API_KEY).")

        _client_instance = AsyncOpenAI(
            api_key=settings.openai_api_key,
            base_url=settings.llm_base_url,
            timeout=settings.llm_timeout_seconds,
        )
        logger.info("LLM client singleton initialized (base_url=%s).", settings.llm_base_url or "default")
        return _client_instance


# ── Error classification ────────────────────────────────────────────
def is_quota_exhausted(exc: BaseException) -> bool:
    """
    True when the provider refused the call for lack of balance/quota.

    Detected by HTTP 402 or by the provider's wording in the message or body.
    """
    if getattr(exc, "status_code", None) == 402:
        return True
    text = str(exc).lower()
    body = getattr(exc, "body", None)
    if body:
        text += " " + str(body).lower()
    return any(marker in text for marker in _QUOTA_MARKERS)


def classify_generation_error(exc: BaseException) -> GardenChatError:
    if isinstance(exc, GardenChatError):
        return exc
    if is_quota_exhausted(exc):
        return ServiceUnavailableError()
    return GenerationError(details=str(exc))


# ── Streaming ───────────────────────────────────────────────────────
class StreamUsage(BaseModel):
    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None


class TextStream:
    """
    Finite, not-restartable sequence of text chunks.

    Iterate it once with ``async for``; ``usage`` is filled in when the
    provider sends its terminal usage record.  ``aclose()`` closes the
    underlying transport (``on_close``) whether or not iteration ever
    started; chunks already yielded are unaffected.
    """

    def __init__(
        self,
        source: AsyncIterator[str | StreamUsage],
        on_close: Callable[[], Awaitable[None]] | None = None,
    ):
        self._source = source
        self._on_close = on_close
        self._started = False
        self._closed = False
        self._parts: list[str] = []
        self.usage: StreamUsage | None = None

    def __aiter__(self) -> AsyncIterator[str]:
        if self._started:
            raise RuntimeError("TextStream can only be consumed once")
        self._started = True
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[str]:
        try:
            async for item in self._source:
                if isinstance(item, StreamUsage):
                    self.usage = item
                    continue
                if item:
                    self._parts.append(item)
                    yield item
        except GardenChatError:
            raise
        except Exception as exc:
            logger.error("[LLM] Stream failed after %d chunk(s): %s", len(self._parts), exc)
            raise classify_generation_error(exc) from exc
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            aclose = getattr(self._source, "aclose", None)
            if aclose is not None:
                await aclose()
        finally:
            # An unstarted generator closes without running its own finally
            if self._on_close is not None:
                await self._on_close()

    @property
    def text(self) -> str:
        """Everything yielded so far."""
        return "".join(self._parts)

    async def collect(self) -> str:
        async for _ in self:
            pass
        return self.text


# ── Client wrapper ──────────────────────────────────────────────────
class LLMClient:
    """Thin wrapper over the chat-completions API used by the pipeline."""

    def __init__(self, client: AsyncOpenAI | None = None):
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = get_openai_client()
        return self._client

    async def generate_json(
        self,
        *,
        system: str,
        prompt: str,
        model: str | None = None,
        temperature: float | None = None,
    ) -> Any:
        """
        Ask for a single JSON object and return it decoded.

        Provider errors propagate unchanged; an empty or non-JSON reply
        raises ValueError.
        """
        response = await self.client.chat.completions.create(
            model=model or settings.intent_model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
            temperature=settings.intent_temperature if temperature is None else temperature,
        )
        if not response.choices or not response.choices[0].message.content:
            raise ValueError("LLM returned no content")

        raw = response.choices[0].message.content
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"LLM returned invalid JSON: {e}") from e

    async def stream_text(
        self,
        *,
        system: str,
        prompt: str,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> TextStream:
        response = await self.client.chat.completions.create(
            model=model or settings.answer_model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            temperature=settings.answer_temperature if temperature is None else temperature,
            max_tokens=max_tokens or settings.answer_max_tokens,
            stream=True,
            stream_options={"include_usage": True},
        )

        async def _chunks() -> AsyncIterator[str | StreamUsage]:
            async for chunk in response:
                if chunk.choices:
                    delta = chunk.choices[0].delta.content
                    if delta:
                        yield delta
                if chunk.usage:
                    yield StreamUsage(
                        prompt_tokens=chunk.usage.prompt_tokens,
                        completion_tokens=chunk.usage.completion_tokens,
                        total_tokens=chunk.usage.total_tokens,
                    )

        return TextStream(_chunks(), on_close=response.close)
