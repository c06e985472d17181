"""Pack router — /api/v1 endpoints for creating and managing packs."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from negotiator.context import AppContext
from negotiator.models.domain import Pack
from negotiator.models.request_models import CreatePackRequest
from negotiator.models.response_models import DeleteResponse, HealthResponse, LogEntry
from negotiator.routers.deps import get_context, get_owner_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["packs"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Simple liveness check."""
    return HealthResponse()


@router.post("/packs", response_model=Pack)
async def create_pack(
    req: CreatePackRequest,
    owner_id: str = Depends(get_owner_id),
    ctx: AppContext = Depends(get_context),
) -> Pack:
    """Estimate the market, generate the package and store it."""
    logger.info("Creating pack for user=%s title=%r", owner_id, req.job_title)
    return await ctx.pack_service.create_pack(
        owner_id,
        job_title=req.job_title,
        city_or_remote=req.city_or_remote,
        current_salary=req.current_salary,
        target_salary=req.target_salary,
        achievements=req.achievements,
    )


@router.get("/packs", response_model=list[Pack])
async def list_packs(
    owner_id: str = Depends(get_owner_id),
    ctx: AppContext = Depends(get_context),
) -> list[Pack]:
    """The caller's packs, newest first."""
    return ctx.pack_service.list_packs(owner_id)


@router.get("/packs/{pack_id}", response_model=Pack)
async def get_pack(
    pack_id: str,
    owner_id: str = Depends(get_owner_id),
    ctx: AppContext = Depends(get_context),
) -> Pack:
    return ctx.pack_service.get_pack(owner_id, pack_id)


@router.delete("/packs/{pack_id}", response_model=DeleteResponse)
async def delete_pack(
    pack_id: str,
    owner_id: str = Depends(get_owner_id),
    ctx: AppContext = Depends(get_context),
) -> DeleteResponse:
    """Delete a pack together with its role-play session."""
    ctx.pack_service.delete_pack(owner_id, pack_id)
    return DeleteResponse()


@router.get("/logs", response_model=list[LogEntry])
async def get_logs(
    limit: int = 20,
    owner_id: str = Depends(get_owner_id),
    ctx: AppContext = Depends(get_context),
) -> list[LogEntry]:
    """Return the caller's most recent event-log entries (newest first)."""
    return [LogEntry(**entry) for entry in ctx.events.recent(limit, user_id=owner_id)]
