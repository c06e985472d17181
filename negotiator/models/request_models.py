"""Request models for the negotiation API."""

from typing import Optional

from pydantic import BaseModel, Field

from negotiator.models.domain import ChatMessage


class CreatePackRequest(BaseModel):
    """Job facts submitted to build a new pack."""

    job_title: str = Field(..., description="Job title", examples=["Senior Software Engineer"])
    city_or_remote: str = Field(..., description="City or 'remote'", examples=["Seattle"])
    current_salary: int = Field(..., description="Current annual salary", examples=[120000])
    target_salary: Optional[int] = Field(default=None, description="Desired salary, if known")
    achievements: list[str] = Field(
        ...,
        description="Three to five recent achievements",
        examples=[[
            "Led the payments migration",
            "Cut p95 latency by 40%",
            "Mentored two new hires",
        ]],
    )


class RolePlayRequest(BaseModel):
    """One employee utterance in a role-play."""

    message: str = Field(..., description="What the employee says next")
    messages: Optional[list[ChatMessage]] = Field(
        default=None,
        description="Transcript before this message; the stored one is used when omitted",
    )


class ConfidenceRequest(BaseModel):
    """Self-reported confidence after rehearsing."""

    score: int = Field(..., description="Confidence from 1 (low) to 10 (high)", examples=[7])
