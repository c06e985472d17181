"""Domain models: packs, market data, role-play sessions and chat messages."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_ACHIEVEMENTS = 3
MAX_ACHIEVEMENTS = 5
MIN_CONFIDENCE = 1
MAX_CONFIDENCE = 10


def utc_now() -> str:
    """Current UTC instant as an ISO string with fixed microsecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO instant, accepting the trailing ``Z`` browsers send."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def next_timestamp(previous: Optional[str]) -> str:
    """Return a timestamp strictly later than ``previous``."""
    now = datetime.now(timezone.utc)
    if previous:
        floor = parse_timestamp(previous) + timedelta(microseconds=1)
        if now < floor:
            now = floor
    return now.isoformat(timespec="microseconds")


def _new_id() -> str:
    return uuid.uuid4().hex


class MarketData(BaseModel):
    """Compensation estimate snapshot embedded in a pack.

    ``p25`` and ``p75`` are fixed offsets from the average (-15% / +20%),
    not percentiles of a distribution.
    """

    average: int = Field(..., gt=0)
    p25: int = Field(..., gt=0)
    p75: int = Field(..., gt=0)
    source: str = ""


class ChatMessage(BaseModel):
    """One utterance in a role-play transcript."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    role: Literal["user", "assistant"]
    content: str
    timestamp: str = Field(default_factory=utc_now)

    @field_validator("timestamp")
    @classmethod
    def _check_timestamp(cls, value: str) -> str:
        try:
            parse_timestamp(value)
        except ValueError:
            raise ValueError(f"timestamp must be an ISO-8601 instant, got '{value}'") from None
        return value


class PackInputs(BaseModel):
    """The job facts a user submits when creating a pack."""

    job_title: str
    city_or_remote: str
    current_salary: int
    target_salary: Optional[int] = None
    achievements: list[str]


class Pack(PackInputs):
    """A saved negotiation scenario owned by a single user."""

    id: str = Field(default_factory=_new_id)
    user_id: str
    market_data: MarketData
    negotiation_content: str
    created_at: str = Field(default_factory=utc_now)


class RolePlaySession(BaseModel):
    """The rehearsal conversation attached to one pack."""

    id: str = Field(default_factory=_new_id)
    pack_id: str
    messages: list[ChatMessage] = Field(default_factory=list)
    confidence_score: int = Field(default=5, ge=MIN_CONFIDENCE, le=MAX_CONFIDENCE)
    version: int = 0
    created_at: str = Field(default_factory=utc_now)
    updated_at: str = Field(default_factory=utc_now)
