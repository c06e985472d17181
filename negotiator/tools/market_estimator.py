"""Market Estimator Tool.

Maps a (job title, location) pair to a compensation range. Stands in for a
live market-data provider: the lookup tables below are static, but the
(title, location) -> MarketData contract is what a real source would keep.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Type

from langchain_core.tools import BaseTool
from pydantic import BaseModel, Field

from negotiator.models.domain import MarketData

logger = logging.getLogger(__name__)

BASE_SALARY = 100_000
P25_FACTOR = 0.85
P75_FACTOR = 1.20
DEFAULT_MULTIPLIER = 1.0
MARKET_SOURCE = "Market Research API (Mock Data)"

ROLE_MULTIPLIERS: dict[str, float] = {
    "software engineer": 1.0,
    "senior software engineer": 1.4,
    "staff engineer": 1.8,
    "principal engineer": 2.2,
    "engineering manager": 1.6,
    "senior engineering manager": 2.0,
    "director of engineering": 2.5,
    "product manager": 1.2,
    "senior product manager": 1.6,
    "data scientist": 1.1,
    "senior data scientist": 1.5,
    "designer": 0.9,
    "senior designer": 1.3,
    "marketing manager": 1.0,
    "sales manager": 1.1,
}

LOCATION_MULTIPLIERS: dict[str, float] = {
    "san francisco": 1.8,
    "new york": 1.6,
    "seattle": 1.4,
    "boston": 1.3,
    "los angeles": 1.2,
    "austin": 1.1,
    "denver": 1.0,
    "chicago": 1.0,
    "atlanta": 0.9,
    "remote": 1.2,
}


def _round_half_up(value: float) -> int:
    # round() is banker's rounding; salaries round .5 upwards
    return int(math.floor(value + 0.5))


def estimate(job_title: str, location: str) -> MarketData:
    """Return the market range for a role in a location.

    Lookups are case-insensitive exact matches; anything unrecognised uses
    a multiplier of 1.0.
    """
    role_multiplier = ROLE_MULTIPLIERS.get(job_title.lower(), DEFAULT_MULTIPLIER)
    location_multiplier = LOCATION_MULTIPLIERS.get(location.lower(), DEFAULT_MULTIPLIER)

    average = _round_half_up(BASE_SALARY * role_multiplier * location_multiplier)
    return MarketData(
        average=average,
        p25=_round_half_up(average * P25_FACTOR),
        p75=_round_half_up(average * P75_FACTOR),
        source=MARKET_SOURCE,
    )


class MarketEstimatorInput(BaseModel):
    """Input schema for the Market Estimator tool."""

    job_title: str = Field(..., description="Job title, e.g. 'Senior Software Engineer'")
    location: str = Field(..., description="City name or 'remote'")


class MarketEstimatorTool(BaseTool):
    """Exposes :func:`estimate` to LangChain agents."""

    name: str = "market_estimator"
    description: str = (
        "Estimates the market salary range for a job title in a location. "
        "Returns {average, p25, p75, source}."
    )
    args_schema: Type[BaseModel] = MarketEstimatorInput

    def _run(self, job_title: str, location: str) -> dict[str, Any]:
        return self._estimate(job_title, location)

    async def _arun(self, job_title: str, location: str) -> dict[str, Any]:
        """Async wrapper — lookup is CPU-only so just delegates."""
        return self._estimate(job_title, location)

    @staticmethod
    def _estimate(job_title: str, location: str) -> dict[str, Any]:
        data = estimate(job_title, location)
        logger.debug("Market estimate for %r in %r: avg=%d", job_title, location, data.average)
        return data.model_dump()
