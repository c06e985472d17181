"""Content Generator — model path, template fallback and raise-gap arithmetic."""

from __future__ import annotations

import pytest

from negotiator.agents.content_generator import ContentGenerator, raise_gap
from negotiator.models.domain import MarketData, PackInputs
from negotiator.prompts.content_prompt import REQUIRED_SECTIONS
from negotiator.prompts.fallback_content import counter_midpoint, requested_salary
from tests.conftest import MODEL_PACKAGE, SAMPLE_ACHIEVEMENTS, make_llm

MARKET = MarketData(average=196000, p25=166600, p75=235200, source="test")


def _inputs(**overrides) -> PackInputs:
    fields = {
        "job_title": "Senior Software Engineer",
        "city_or_remote": "Seattle",
        "current_salary": 120000,
        "target_salary": None,
        "achievements": list(SAMPLE_ACHIEVEMENTS),
    }
    fields.update(overrides)
    return PackInputs(**fields)


def test_raise_gap_floors_at_zero():
    market = MarketData(average=100000, p25=85000, p75=120000)
    assert raise_gap(200000, market) == 0
    assert raise_gap(90000, market) == 10000


@pytest.mark.asyncio
async def test_model_output_is_returned_when_complete():
    llm = make_llm(MODEL_PACKAGE)
    generator = ContentGenerator(llm, max_tokens=2000)

    document = await generator.generate_document(_inputs(), MARKET)

    assert document.source == "model"
    assert document.content == MODEL_PACKAGE
    prompt = llm.complete.await_args.args[0]
    assert "Senior Software Engineer" in prompt
    assert "raise_gap = 76000" in prompt
    assert "1. Led the migration" in prompt
    assert llm.complete.await_args.kwargs["max_tokens"] == 2000


@pytest.mark.asyncio
async def test_unavailable_model_falls_back_to_template():
    llm = make_llm(fail=True)
    generator = ContentGenerator(llm)

    content = await generator.generate(_inputs(), MARKET)

    assert content.startswith("# Salary Negotiation Package")
    for header in REQUIRED_SECTIONS:
        assert header in content
    assert "- Raise gap: $76,000" in content
    llm.complete.assert_awaited_once()


@pytest.mark.asyncio
async def test_reply_missing_sections_falls_back():
    llm = make_llm("Sure! Ask for more money.")
    generator = ContentGenerator(llm)

    document = await generator.generate_document(_inputs(), MARKET)

    assert document.source == "fallback"
    for header in REQUIRED_SECTIONS:
        assert header in document.content


@pytest.mark.asyncio
async def test_template_lists_achievements_and_three_rebuttals():
    content = await ContentGenerator(make_llm(fail=True)).generate(_inputs(), MARKET)

    for achievement in SAMPLE_ACHIEVEMENTS:
        assert f"- {achievement}" in content
    assert content.count("### If they") == 3
    assert "Subject: Following up on our salary discussion" in content


@pytest.mark.asyncio
async def test_template_is_deterministic():
    generator = ContentGenerator(make_llm(fail=True))
    first = await generator.generate(_inputs(), MARKET)
    second = await generator.generate(_inputs(), MARKET)
    assert first == second


@pytest.mark.asyncio
async def test_template_when_already_above_market():
    market = MarketData(average=100000, p25=85000, p75=120000)
    content = await ContentGenerator(make_llm(fail=True)).generate(
        _inputs(current_salary=200000), market,
    )
    assert "- Raise gap: $0" in content
    # no target: min(p75, current + 0) = 120000
    assert "salary adjustment to $120,000" in content


def test_requested_salary_prefers_target():
    assert requested_salary(_inputs(target_salary=150000), MARKET, 76000) == 150000


def test_requested_salary_caps_gap_at_p75():
    assert requested_salary(_inputs(), MARKET, 76000) == 196000
    assert requested_salary(_inputs(current_salary=250000), MARKET, 0) == 235200


def test_counter_midpoint_rounds_half_up():
    assert counter_midpoint(150001, 120000) == 135001
    assert counter_midpoint(160000, 120000) == 140000
