"""JSON-file role-play session store (at most one session per pack)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from negotiator.errors import NotFound, SessionConflict
from negotiator.models.domain import ChatMessage, RolePlaySession, utc_now
from negotiator.models.json_store import JsonFileStore

logger = logging.getLogger(__name__)

SESSIONS_FILE = "sessions.json"


class SessionStore(JsonFileStore[RolePlaySession]):
    """Role-play sessions keyed by id, looked up by pack."""

    record_type = RolePlaySession

    @classmethod
    def in_dir(cls, data_dir: str | Path) -> "SessionStore":
        return cls(Path(data_dir) / SESSIONS_FILE)

    # ── Reads ─────────────────────────────────────────────────────────────

    def get(self, session_id: str) -> Optional[RolePlaySession]:
        return self._items.get(session_id)

    def get_by_pack(self, pack_id: str) -> Optional[RolePlaySession]:
        for session in self._items.values():
            if session.pack_id == pack_id:
                return session
        return None

    # ── Writes ────────────────────────────────────────────────────────────

    def upsert_transcript(
        self,
        pack_id: str,
        messages: Sequence[ChatMessage],
        default_confidence: int = 5,
        expected_version: Optional[int] = None,
    ) -> RolePlaySession:
        """Create the pack's session or replace its whole message log.

        ``expected_version`` enables a compare-and-swap: the write is
        rejected with :class:`SessionConflict` when the stored version moved
        on (0 means "no session yet"). ``None`` is last-write-wins.
        """
        existing = self.get_by_pack(pack_id)
        current_version = existing.version if existing else 0
        if expected_version is not None and expected_version != current_version:
            raise SessionConflict(
                existing.id if existing else pack_id, expected_version, current_version,
            )

        if existing is None:
            session = RolePlaySession(
                pack_id=pack_id,
                messages=list(messages),
                confidence_score=default_confidence,
                version=1,
            )
            logger.info("Role-play session created: id=%s pack=%s", session.id, pack_id)
        else:
            session = existing.model_copy(update={
                "messages": list(messages),
                "updated_at": utc_now(),
                "version": existing.version + 1,
            })

        items = dict(self._items)
        items[session.id] = session
        self._commit(items)
        return session

    def set_confidence(self, session_id: str, score: int) -> RolePlaySession:
        """Update the self-reported confidence score; the transcript is untouched."""
        existing = self._items.get(session_id)
        if existing is None:
            raise NotFound(f"Session '{session_id}' not found")
        session = existing.model_copy(update={
            "confidence_score": score,
            "updated_at": utc_now(),
            "version": existing.version + 1,
        })
        items = dict(self._items)
        items[session.id] = session
        self._commit(items)
        logger.info("Confidence updated: session=%s score=%d", session_id, score)
        return session

    def delete_for_pack(self, pack_id: str) -> int:
        """Remove every session belonging to ``pack_id``; returns how many."""
        doomed = [sid for sid, s in self._items.items() if s.pack_id == pack_id]
        if not doomed:
            return 0
        items = {sid: s for sid, s in self._items.items() if sid not in doomed}
        self._commit(items)
        logger.info("Deleted %d session(s) for pack=%s", len(doomed), pack_id)
        return len(doomed)
