"""Language Model Client — the one outbound LLM call both agents share.

Every failure mode (missing key, HTTP/network error, malformed or empty
reply) is raised as :class:`GenerationUnavailable` so callers can fall back
without caring why the call failed. There is no retry.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from langchain_core.messages import HumanMessage
from langchain_openai import ChatOpenAI

from negotiator.errors import GenerationUnavailable

logger = logging.getLogger(__name__)


class LanguageModel:
    """Thin wrapper around ``ChatOpenAI`` returning plain trimmed text."""

    def __init__(
        self,
        model: str,
        api_key: str,
        timeout: Optional[float] = None,
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._timeout = timeout
        self._llm: Optional[ChatOpenAI] = None

    @property
    def model(self) -> str:
        return self._model

    # ── Public API ────────────────────────────────────────────────────────

    async def complete(
        self,
        prompt: str,
        max_tokens: int,
        temperature: Optional[float] = None,
    ) -> str:
        """Send ``prompt`` as a single user message and return the reply text."""
        if not self._api_key:
            raise GenerationUnavailable("No language-model API key configured")

        call_kwargs: dict[str, Any] = {"max_tokens": max_tokens}
        if temperature is not None:
            call_kwargs["temperature"] = temperature

        try:
            raw = await self._client().ainvoke([HumanMessage(content=prompt)], **call_kwargs)
        except Exception as exc:
            logger.error("Language-model call failed: %s", exc)
            raise GenerationUnavailable(str(exc)) from exc

        text = self._first_text(getattr(raw, "content", None))
        if not text:
            logger.error("Language-model reply had no text content")
            raise GenerationUnavailable("Empty or malformed language-model reply")
        return text

    # ── Helpers ───────────────────────────────────────────────────────────

    def _client(self) -> ChatOpenAI:
        if self._llm is None:
            self._llm = ChatOpenAI(
                model=self._model,
                api_key=self._api_key,
                timeout=self._timeout,
                max_retries=0,
            )
        return self._llm

    @staticmethod
    def _first_text(content: Any) -> str:
        """Extract the first text segment from a message's content."""
        if isinstance(content, str):
            return content.strip()
        if isinstance(content, list):
            for segment in content:
                if isinstance(segment, str):
                    return segment.strip()
                if isinstance(segment, dict) and isinstance(segment.get("text"), str):
                    return segment["text"].strip()
        return ""
