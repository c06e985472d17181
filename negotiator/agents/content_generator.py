"""Content Generator — writes the markdown negotiation package for a pack.

The language model is asked first. If the call fails, or the reply is
missing one of the required sections, the deterministic template is used
instead, so a document is always produced.
"""

from __future__ import annotations

import logging
from typing import Literal, Optional

from pydantic import BaseModel

from negotiator.agents.language_model import LanguageModel
from negotiator.errors import GenerationUnavailable
from negotiator.models.domain import MarketData, PackInputs
from negotiator.prompts.content_prompt import build_content_prompt, missing_sections
from negotiator.prompts.fallback_content import build_fallback_document

logger = logging.getLogger(__name__)


def raise_gap(current_salary: int, market: MarketData) -> int:
    """Market average minus current salary, floored at zero."""
    return max(0, market.average - current_salary)


class GeneratedDocument(BaseModel):
    """A negotiation package and how it was produced."""

    content: str
    source: Literal["model", "fallback"]


class ContentGenerator:
    """Stateless; persistence is the caller's job."""

    def __init__(
        self,
        llm: LanguageModel,
        max_tokens: int = 2000,
        temperature: Optional[float] = None,
    ) -> None:
        self._llm = llm
        self._max_tokens = max_tokens
        self._temperature = temperature

    # ── Public API ────────────────────────────────────────────────────────

    async def generate(self, inputs: PackInputs, market: MarketData) -> str:
        """Return the markdown package for ``inputs``."""
        document = await self.generate_document(inputs, market)
        return document.content

    async def generate_document(self, inputs: PackInputs, market: MarketData) -> GeneratedDocument:
        gap = raise_gap(inputs.current_salary, market)
        prompt = build_content_prompt(inputs, market, gap)

        try:
            text = await self._llm.complete(
                prompt, max_tokens=self._max_tokens, temperature=self._temperature,
            )
        except GenerationUnavailable as exc:
            logger.warning("Content generation unavailable, using template: %s", exc)
            return self._fallback(inputs, market, gap)

        missing = missing_sections(text)
        if missing:
            logger.warning("Generated package lacks %s, using template", ", ".join(missing))
            return self._fallback(inputs, market, gap)

        return GeneratedDocument(content=text, source="model")

    # ── Helpers ───────────────────────────────────────────────────────────

    @staticmethod
    def _fallback(inputs: PackInputs, market: MarketData, gap: int) -> GeneratedDocument:
        return GeneratedDocument(
            content=build_fallback_document(inputs, market, gap),
            source="fallback",
        )
