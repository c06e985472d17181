"""Fallback Responder — rule-based manager replies.

Used when the language model is unavailable so a role-play never stalls.
The utterance is classified by the first matching keyword rule and one of
that category's canned replies is picked at random. Replies ignore the
conversation history and the pack details.
"""

from __future__ import annotations

import logging
import random
import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class ResponseCategory(str, Enum):
    """Keyword categories, in match precedence order."""

    COMPENSATION = "compensation"
    ACHIEVEMENTS = "achievements"
    MARKET = "market"
    NUMBERS = "numbers"
    BUDGET = "budget"
    GENERAL = "general"


# ── Keyword rules (checked in order against the lower-cased utterance) ──────

CATEGORY_PATTERNS: list[tuple[str, ResponseCategory]] = [
    (r"salary|compensation|raise", ResponseCategory.COMPENSATION),
    (r"achievement|accomplished|delivered", ResponseCategory.ACHIEVEMENTS),
    (r"market|industry|research", ResponseCategory.MARKET),
    (r"\$\d+|thousand|percent", ResponseCategory.NUMBERS),
    (r"budget|constraint|limited", ResponseCategory.BUDGET),
]

CATEGORY_REPLIES: dict[ResponseCategory, tuple[str, ...]] = {
    ResponseCategory.COMPENSATION: (
        "I appreciate you bringing this up. Can you tell me more about what's prompting this discussion?",
        "Let's talk about this. What specific aspects of your compensation are you thinking about?",
        "I'm glad you're comfortable discussing this with me. What would you like to see change?",
    ),
    ResponseCategory.ACHIEVEMENTS: (
        "Those are impressive accomplishments. How do you see these contributing to your compensation discussion?",
        "Thank you for highlighting those achievements. They definitely show your value to the team.",
        "I recognize the great work you've been doing. What kind of adjustment are you thinking about?",
    ),
    ResponseCategory.MARKET: (
        "I understand you've done some research. Can you share what you've found?",
        "Market data is certainly important. What does your research show for your role?",
        "I appreciate you coming prepared with market information. What are you seeing out there?",
    ),
    ResponseCategory.NUMBERS: (
        "That's a significant number. Help me understand how you arrived at that figure.",
        "I want to make sure I understand your request correctly. Can you walk me through your thinking?",
        "Let me see what might be possible. What's the timeline you're thinking about for this adjustment?",
    ),
    ResponseCategory.BUDGET: (
        "I understand there are always budget considerations. What alternatives might work for both of us?",
        "Budget is definitely a factor we need to consider. Are there other forms of compensation we could explore?",
        "Let's think creatively about this. What would be most valuable to you besides base salary?",
    ),
    ResponseCategory.GENERAL: (
        "That's a good point. Can you elaborate on that?",
        "I appreciate you sharing that perspective. What would you like to see happen next?",
        "Help me understand your thinking on this better.",
        "That's valuable feedback. How do you think we should move forward?",
        "I want to make sure we're aligned on this. Can you tell me more about your expectations?",
    ),
}


class FallbackReply(BaseModel):
    """A canned reply together with the category that produced it."""

    category: ResponseCategory
    reply: str = Field(..., min_length=1)


class FallbackResponder:
    """Deterministic classification, random reply selection.

    Pass a seeded ``random.Random`` to make the chosen reply reproducible.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    @staticmethod
    def classify(utterance: str) -> ResponseCategory:
        """Return the first category whose keywords appear in ``utterance``."""
        lower = utterance.lower()
        for pattern, category in CATEGORY_PATTERNS:
            if re.search(pattern, lower):
                return category
        return ResponseCategory.GENERAL

    def respond(self, utterance: str) -> FallbackReply:
        category = self.classify(utterance)
        reply = self._rng.choice(CATEGORY_REPLIES[category])
        logger.info("Fallback reply selected: category=%s", category.value)
        return FallbackReply(category=category, reply=reply)
