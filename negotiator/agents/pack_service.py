"""Pack lifecycle: create (estimate + generate + persist), read, list, delete."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from negotiator.agents.content_generator import ContentGenerator
from negotiator.errors import NotFound, ValidationError
from negotiator.event_log import EventLog
from negotiator.models.domain import (
    MAX_ACHIEVEMENTS,
    MIN_ACHIEVEMENTS,
    MarketData,
    Pack,
    PackInputs,
)
from negotiator.models.pack_store import PackStore
from negotiator.models.session_store import SessionStore
from negotiator.tools.market_estimator import MarketEstimatorTool

logger = logging.getLogger(__name__)


def validate_pack_inputs(
    job_title: str,
    city_or_remote: str,
    current_salary: int,
    target_salary: Optional[int],
    achievements: Sequence[str],
) -> PackInputs:
    """Check the submitted job facts, raising ValidationError on the first problem."""
    job_title = (job_title or "").strip()
    city_or_remote = (city_or_remote or "").strip()
    if not job_title:
        raise ValidationError("Job title is required")
    if not city_or_remote:
        raise ValidationError("Location is required")
    if current_salary is None or current_salary <= 0:
        raise ValidationError("Current salary must be greater than zero")
    if target_salary is not None and target_salary <= 0:
        raise ValidationError("Target salary must be greater than zero")

    cleaned = [a.strip() for a in achievements or [] if a and a.strip()]
    if not MIN_ACHIEVEMENTS <= len(cleaned) <= MAX_ACHIEVEMENTS:
        raise ValidationError(
            f"Provide between {MIN_ACHIEVEMENTS} and {MAX_ACHIEVEMENTS} achievements "
            f"(got {len(cleaned)})"
        )

    return PackInputs(
        job_title=job_title,
        city_or_remote=city_or_remote,
        current_salary=current_salary,
        target_salary=target_salary,
        achievements=cleaned,
    )


class PackService:
    """Owner-scoped operations over the pack and session stores."""

    def __init__(
        self,
        packs: PackStore,
        sessions: SessionStore,
        generator: ContentGenerator,
        events: EventLog,
        estimator: Optional[MarketEstimatorTool] = None,
    ) -> None:
        self._packs = packs
        self._sessions = sessions
        self._generator = generator
        self._events = events
        self._estimator = estimator or MarketEstimatorTool()

    # ── Public API ────────────────────────────────────────────────────────

    async def create_pack(
        self,
        owner_id: str,
        job_title: str,
        city_or_remote: str,
        current_salary: int,
        target_salary: Optional[int],
        achievements: Sequence[str],
    ) -> Pack:
        """Validate, price, generate and persist a new pack.

        Raises
        ------
        ValidationError   bad input; nothing is stored
        PersistenceError  the store write failed
        """
        inputs = validate_pack_inputs(
            job_title, city_or_remote, current_salary, target_salary, achievements,
        )

        estimate = await self._estimator._arun(
            job_title=inputs.job_title, location=inputs.city_or_remote,
        )
        market = MarketData(**estimate)
        document = await self._generator.generate_document(inputs, market)

        pack = Pack(
            **inputs.model_dump(),
            user_id=owner_id,
            market_data=market,
            negotiation_content=document.content,
        )
        self._packs.add(pack)

        self._events.record(
            "pack_created",
            pack_id=pack.id,
            user_id=owner_id,
            job_title=pack.job_title,
            location=pack.city_or_remote,
            market_average=market.average,
            content_source=document.source,
        )
        return pack

    def get_pack(self, owner_id: str, pack_id: str) -> Pack:
        """Return the pack if it exists and belongs to ``owner_id``."""
        pack = self._packs.get(pack_id)
        if pack is None or pack.user_id != owner_id:
            raise NotFound(f"Pack '{pack_id}' not found")
        return pack

    def list_packs(self, owner_id: str) -> list[Pack]:
        return self._packs.list_for_owner(owner_id)

    def delete_pack(self, owner_id: str, pack_id: str) -> None:
        """Delete the pack, removing its role-play session first."""
        pack = self.get_pack(owner_id, pack_id)
        self._sessions.delete_for_pack(pack.id)
        self._packs.delete(pack.id)
        self._events.record("pack_deleted", pack_id=pack.id, user_id=owner_id)
