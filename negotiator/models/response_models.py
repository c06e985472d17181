"""Response models for the negotiation API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class RolePlayResponse(BaseModel):
    """Reply returned by POST /api/v1/roleplay/{pack_id}."""

    reply: str = Field(..., description="The manager's next line")
    source: str = Field(..., description="Who produced it", examples=["model", "fallback"])
    session_id: Optional[str] = Field(default=None, description="Session the turn was stored in")
    persisted: bool = Field(default=True, description="Whether the transcript was saved")


class DeleteResponse(BaseModel):
    message: str = "Pack deleted successfully"


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    """Health-check response."""

    status: str = "ok"
    version: str = "1.0.0"


class LogEntry(BaseModel):
    """Single entry for the /api/v1/logs endpoint."""

    timestamp: str = ""
    event: str = ""
    pack_id: Optional[str] = None
    source: Optional[str] = None
    content_source: Optional[str] = None
    category: Optional[str] = None
    persisted: Optional[bool] = None
    message_preview: str = ""
    reply_preview: str = ""
