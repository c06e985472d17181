"""Deterministic negotiation package used when the language model is down."""

from negotiator.models.domain import MarketData, PackInputs
from negotiator.prompts.content_prompt import money


def requested_salary(inputs: PackInputs, market: MarketData, raise_gap: int) -> int:
    """The explicit target, else the market gap capped at p75."""
    if inputs.target_salary:
        return inputs.target_salary
    return min(market.p75, inputs.current_salary + raise_gap)


def counter_midpoint(requested: int, current: int) -> int:
    return int((requested + current) / 2 + 0.5)


def build_fallback_document(inputs: PackInputs, market: MarketData, raise_gap: int) -> str:
    """Fill the package structure using only arithmetic on the inputs."""

    requested = requested_salary(inputs, market, raise_gap)
    midpoint = counter_midpoint(requested, inputs.current_salary)
    achievements = "\n".join(f"- {achievement}" for achievement in inputs.achievements)
    market_range = f"{money(market.p25)} to {money(market.p75)}"

    return f"""# Salary Negotiation Package

## Market Analysis
- Current salary: {money(inputs.current_salary)}
- Market average: {money(market.average)}
- Market range: {money(market.p25)} - {money(market.p75)}
- Raise gap: {money(raise_gap)}

## Negotiation Script

### Opening Statement
I've really enjoyed contributing to the team as a {inputs.job_title} and wanted to discuss my compensation based on my recent achievements and current market conditions. I'd like to explore adjusting my salary to better reflect my contributions and market value.

### Value Proposition
Over the past year, I've delivered significant value through several key achievements:

{achievements}

Based on my research, the market rate for {inputs.job_title} positions in {inputs.city_or_remote} ranges from {market_range}, with an average of {money(market.average)}.

### Salary Request
Given my contributions and the current market rate, I'd like to request a salary adjustment to {money(requested)}. This would align my compensation with market standards while reflecting the value I bring to the team.

## Fallback Responses

### If they say "budget constraints"
I understand budget considerations are important. Would it be possible to discuss a timeline for when this adjustment might be feasible? In the meantime, I'd be open to exploring other forms of compensation like additional equity, professional development budget, or expanded responsibilities.

### If they say "need to think about it"
I appreciate you taking the time to consider this. Would it be helpful if I provided additional documentation of my achievements or market research? I'm happy to follow up in a week to continue our discussion.

### If they counter with lower amount
I appreciate the counteroffer. While I understand there may be constraints, the market data I've shared shows that {money(requested)} is within the standard range for my role and experience. Could we explore meeting somewhere in the middle, perhaps at {money(midpoint)}?

## Follow-up Email Template

Subject: Following up on our salary discussion

Hi [Manager's Name],

Thank you for taking the time to discuss my compensation yesterday. I wanted to follow up on our conversation about adjusting my salary to reflect my contributions and current market conditions.

As we discussed, my achievements over the past year have significantly contributed to our team's success. The market research indicates that {inputs.job_title} roles in {inputs.city_or_remote} typically range from {market_range}.

I'm excited to continue growing with the team and would appreciate the opportunity to discuss this further. Please let me know if you need any additional information to move forward with this request.

Best regards,
[Your Name]"""
