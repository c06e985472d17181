"""Dialogue Engine — drives one role-play turn against a simulated manager.

Flow per turn:
1. Check the pack exists and belongs to the caller (no model call otherwise)
   and that client-supplied history has unique ids and increasing timestamps
2. Append the employee's utterance to the transcript
   (a new session first gets the manager's opening line)
3. Ask the language model for the manager's reply
   → on GenerationUnavailable use the keyword Fallback Responder
4. Append the reply and persist the whole transcript (create or overwrite)
   → a failed write is logged; the reply is still returned
5. Record the turn in the event log

Sessions have no terminal state: another turn can always be submitted.
"""

from __future__ import annotations

import logging
from typing import Literal, Optional, Sequence

from pydantic import BaseModel, Field

from negotiator.agents.language_model import LanguageModel
from negotiator.errors import GenerationUnavailable, NotFound, PersistenceError, ValidationError
from negotiator.event_log import EventLog
from negotiator.models.domain import (
    MAX_CONFIDENCE,
    MIN_CONFIDENCE,
    ChatMessage,
    Pack,
    RolePlaySession,
    next_timestamp,
    parse_timestamp,
)
from negotiator.models.pack_store import PackStore
from negotiator.models.session_store import SessionStore
from negotiator.prompts.roleplay_prompt import OPENING_LINE, build_roleplay_prompt
from negotiator.tools.fallback_responder import FallbackResponder, ResponseCategory

logger = logging.getLogger(__name__)


class TurnResult(BaseModel):
    """Outcome of a single role-play turn."""

    reply: str
    source: Literal["model", "fallback"]
    category: Optional[ResponseCategory] = None
    messages: list[ChatMessage] = Field(default_factory=list)
    session: Optional[RolePlaySession] = None
    persisted: bool = True


class DialogueEngine:
    """Produces manager replies and keeps each pack's transcript."""

    def __init__(
        self,
        llm: LanguageModel,
        packs: PackStore,
        sessions: SessionStore,
        responder: FallbackResponder,
        events: EventLog,
        max_tokens: int = 200,
        temperature: Optional[float] = None,
        default_confidence: int = 5,
        version_check: bool = False,
    ) -> None:
        self._llm = llm
        self._packs = packs
        self._sessions = sessions
        self._responder = responder
        self._events = events
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._default_confidence = default_confidence
        self._version_check = version_check

    # ── Public API ────────────────────────────────────────────────────────

    async def submit_turn(
        self,
        owner_id: str,
        pack_id: str,
        utterance: str,
        prior_messages: Optional[Sequence[ChatMessage]] = None,
    ) -> TurnResult:
        """Run one turn and return the manager's reply.

        ``prior_messages`` is the transcript before this utterance; when
        omitted the stored transcript is used. An empty history starts with
        the manager's opening line.
        """
        pack = self._owned_pack(owner_id, pack_id)
        if not utterance or not utterance.strip():
            raise ValidationError("Message must not be empty")

        if prior_messages is not None:
            _check_history(prior_messages)

        stored = self._sessions.get_by_pack(pack.id)
        if prior_messages is not None:
            history = list(prior_messages)
        else:
            history = list(stored.messages) if stored else []
        if not history:
            history = [ChatMessage(role="assistant", content=OPENING_LINE)]

        user_message = ChatMessage(
            role="user", content=utterance, timestamp=next_timestamp(history[-1].timestamp),
        )

        source: Literal["model", "fallback"] = "model"
        category: Optional[ResponseCategory] = None
        try:
            reply = await self._llm.complete(
                build_roleplay_prompt(pack, history, utterance),
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            )
        except GenerationUnavailable as exc:
            logger.warning("Role-play model unavailable, using fallback: %s", exc)
            fallback = self._responder.respond(utterance)
            reply, category, source = fallback.reply, fallback.category, "fallback"

        assistant_message = ChatMessage(
            role="assistant", content=reply, timestamp=next_timestamp(user_message.timestamp),
        )
        transcript = history + [user_message, assistant_message]

        session: Optional[RolePlaySession] = None
        persisted = True
        expected_version = None
        if self._version_check:
            expected_version = stored.version if stored else 0
        try:
            session = self._sessions.upsert_transcript(
                pack.id,
                transcript,
                default_confidence=self._default_confidence,
                expected_version=expected_version,
            )
        except PersistenceError as exc:
            # The reply was already produced; the stored transcript may now lag behind it.
            logger.error("Failed to persist role-play turn for pack=%s: %s", pack.id, exc)
            persisted = False

        self._events.record(
            "roleplay_turn",
            pack_id=pack.id,
            user_id=owner_id,
            source=source,
            category=category.value if category else None,
            persisted=persisted,
            message_count=len(transcript),
            message_preview=utterance[:120],
            reply_preview=reply[:200],
        )

        return TurnResult(
            reply=reply,
            source=source,
            category=category,
            messages=transcript,
            session=session,
            persisted=persisted,
        )

    def get_session(self, owner_id: str, pack_id: str) -> Optional[RolePlaySession]:
        """Return the pack's session, or None before the first turn."""
        pack = self._owned_pack(owner_id, pack_id)
        return self._sessions.get_by_pack(pack.id)

    def set_confidence(
        self,
        session_id: str,
        score: int,
        owner_id: Optional[str] = None,
    ) -> RolePlaySession:
        """Store the user's self-reported confidence (1-10).

        When ``owner_id`` is given the session's pack must belong to it.
        """
        if isinstance(score, bool) or not isinstance(score, int) or not (
            MIN_CONFIDENCE <= score <= MAX_CONFIDENCE
        ):
            raise ValidationError(
                f"Confidence must be an integer between {MIN_CONFIDENCE} and {MAX_CONFIDENCE}"
            )

        session = self._sessions.get(session_id)
        if session is None:
            raise NotFound(f"Session '{session_id}' not found")
        if owner_id is not None:
            self._owned_pack(owner_id, session.pack_id)

        return self._sessions.set_confidence(session_id, score)

    # ── Helpers ───────────────────────────────────────────────────────────

    def _owned_pack(self, owner_id: str, pack_id: str) -> Pack:
        pack = self._packs.get(pack_id)
        if pack is None or pack.user_id != owner_id:
            raise NotFound(f"Pack '{pack_id}' not found")
        return pack


def _check_history(messages: Sequence[ChatMessage]) -> None:
    """Reject client history with repeated ids or out-of-order timestamps."""
    seen: set[str] = set()
    previous = None
    for message in messages:
        if message.id in seen:
            raise ValidationError(f"Duplicate message id '{message.id}' in history")
        seen.add(message.id)
        stamp = parse_timestamp(message.timestamp)
        if previous is not None and stamp <= previous:
            raise ValidationError(
                f"Message timestamps must be strictly increasing (at id '{message.id}')"
            )
        previous = stamp
