"""Shared pytest fixtures for the negotiation coach test suite."""

from __future__ import annotations

import os
import random
import tempfile
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import Header
from fastapi.testclient import TestClient

# Ensure test environment variables are set BEFORE importing app modules
_TMP_ROOT = tempfile.mkdtemp(prefix="negotiator-tests-")
os.environ.setdefault("OPENAI_API_KEY", "test-key-not-real")
os.environ.setdefault("OPENAI_MODEL", "gpt-4o")
os.environ.setdefault("AUTH_BASE_URL", "")
os.environ.setdefault("DATA_DIR", os.path.join(_TMP_ROOT, "data"))
os.environ.setdefault("LOG_DIR", os.path.join(_TMP_ROOT, "logs"))
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from negotiator.agents.language_model import LanguageModel  # noqa: E402
from negotiator.config import Settings  # noqa: E402
from negotiator.context import AppContext, build_context  # noqa: E402
from negotiator.errors import AuthenticationError, GenerationUnavailable  # noqa: E402
from negotiator.models.domain import Pack  # noqa: E402
from negotiator.tools.market_estimator import estimate  # noqa: E402

SAMPLE_ACHIEVEMENTS = [
    "Led the migration of the billing platform to event sourcing",
    "Reduced p95 checkout latency by 40%",
    "Mentored three engineers through their first on-call rotation",
]

SAMPLE_PACK_REQUEST = {
    "job_title": "Senior Software Engineer",
    "city_or_remote": "Seattle",
    "current_salary": 120000,
    "target_salary": 160000,
    "achievements": SAMPLE_ACHIEVEMENTS,
}

MODEL_PACKAGE = """# Salary Negotiation Package

## Market Analysis
- Market average: $196,000

## Negotiation Script

### Opening Statement
Thanks for meeting with me.

### Value Proposition
I led the billing migration.

### Salary Request
I'm asking for $160,000.

## Fallback Responses

### If they say "budget constraints"
Could we plan a timeline?

### If they say "need to think about it"
Happy to follow up next week.

### If they counter with lower amount
Could we meet in the middle?

## Follow-up Email Template

Subject: Following up on our salary discussion
"""


def make_llm(reply: str = "Tell me more about that.", fail: bool = False) -> MagicMock:
    """A LanguageModel stand-in whose ``complete`` returns ``reply`` or fails."""
    llm = MagicMock(spec=LanguageModel)
    if fail:
        llm.complete = AsyncMock(side_effect=GenerationUnavailable("provider down"))
    else:
        llm.complete = AsyncMock(return_value=reply)
    return llm


def make_pack(user_id: str = "user-a", **overrides) -> Pack:
    """Build a pack without going through content generation."""
    fields = {
        "job_title": "Senior Software Engineer",
        "city_or_remote": "Seattle",
        "current_salary": 120000,
        "target_salary": 160000,
        "achievements": list(SAMPLE_ACHIEVEMENTS),
        "negotiation_content": MODEL_PACKAGE,
    }
    fields.update(overrides)
    market = estimate(fields["job_title"], fields["city_or_remote"])
    return Pack(user_id=user_id, market_data=market, **fields)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        openai_api_key="test-key-not-real",
        data_dir=str(tmp_path / "data"),
        log_dir=str(tmp_path / "logs"),
    )


@pytest.fixture
def llm() -> MagicMock:
    return make_llm()


@pytest.fixture
def context(settings: Settings, llm: MagicMock) -> AppContext:
    return build_context(settings, llm=llm, rng=random.Random(1234))


async def _owner_from_header(authorization: Optional[str] = Header(default=None)) -> str:
    """Test auth: the bearer token *is* the user id."""
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("No authorization token provided")
    return authorization.split(" ", 1)[1]


@pytest.fixture
def client(context: AppContext) -> TestClient:
    """FastAPI test client with token-is-user-id authentication."""
    from negotiator.main import create_app
    from negotiator.routers.deps import get_owner_id

    app = create_app(context=context)
    app.dependency_overrides[get_owner_id] = _owner_from_header
    return TestClient(app)


def auth(user_id: str = "user-a") -> dict[str, str]:
    return {"Authorization": f"Bearer {user_id}"}
