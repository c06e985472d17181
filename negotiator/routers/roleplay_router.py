"""Role-play router — /api/v1/roleplay endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from negotiator.context import AppContext
from negotiator.errors import NotFound
from negotiator.models.domain import RolePlaySession
from negotiator.models.request_models import ConfidenceRequest, RolePlayRequest
from negotiator.models.response_models import RolePlayResponse
from negotiator.routers.deps import get_context, get_owner_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/roleplay", tags=["roleplay"])


@router.post("/{pack_id}", response_model=RolePlayResponse)
async def submit_turn(
    pack_id: str,
    req: RolePlayRequest,
    owner_id: str = Depends(get_owner_id),
    ctx: AppContext = Depends(get_context),
) -> RolePlayResponse:
    """Send the employee's message and get the manager's reply."""
    result = await ctx.dialogue.submit_turn(owner_id, pack_id, req.message, req.messages)
    return RolePlayResponse(
        reply=result.reply,
        source=result.source,
        session_id=result.session.id if result.session else None,
        persisted=result.persisted,
    )


@router.get("/{pack_id}", response_model=RolePlaySession)
async def get_session(
    pack_id: str,
    owner_id: str = Depends(get_owner_id),
    ctx: AppContext = Depends(get_context),
) -> RolePlaySession:
    session = ctx.dialogue.get_session(owner_id, pack_id)
    if session is None:
        raise NotFound(f"No role-play session for pack '{pack_id}'")
    return session


@router.put("/{pack_id}/confidence", response_model=RolePlaySession)
async def set_confidence(
    pack_id: str,
    req: ConfidenceRequest,
    owner_id: str = Depends(get_owner_id),
    ctx: AppContext = Depends(get_context),
) -> RolePlaySession:
    """Record how confident the user feels (1-10)."""
    session = ctx.dialogue.get_session(owner_id, pack_id)
    if session is None:
        raise NotFound(f"No role-play session for pack '{pack_id}'")
    return ctx.dialogue.set_confidence(session.id, req.score, owner_id=owner_id)
