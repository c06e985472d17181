"""Prompt template for the negotiation-pack Content Generator."""

from negotiator.models.domain import MarketData, PackInputs

# Headers every generated document must contain, in document order.
REQUIRED_SECTIONS: tuple[str, ...] = (
    "## Market Analysis",
    "### Opening Statement",
    "### Value Proposition",
    "### Salary Request",
    "## Fallback Responses",
    "## Follow-up Email Template",
)


def money(amount: int) -> str:
    """Format a whole currency amount as ``$120,000``."""
    return f"${amount:,}"


def build_content_prompt(inputs: PackInputs, market: MarketData, raise_gap: int) -> str:
    """Build the single user message asking for a full negotiation package."""

    target = money(inputs.target_salary) if inputs.target_salary else "Not specified"
    achievements = "\n".join(
        f"{index}. {achievement}" for index, achievement in enumerate(inputs.achievements, start=1)
    )

    return f"""You are a salary negotiation expert. Generate a comprehensive negotiation package in markdown format.

Calculate:
- raise_gap = {raise_gap} (max(0, market_average - current_salary))

Structure your response as markdown with these sections:

# Salary Negotiation Package

## Market Analysis
- Current salary: {money(inputs.current_salary)}
- Market average: {money(market.average)}
- Market range: {money(market.p25)} - {money(market.p75)}
- Raise gap: {money(raise_gap)}

## Negotiation Script

### Opening Statement
(2-3 sentences introducing the conversation)

### Value Proposition
(Present achievements and market data)

### Salary Request
(Specific ask based on market data)

## Fallback Responses

### If they say "budget constraints"
(Alternative response)

### If they say "need to think about it"
(Follow-up approach)

### If they counter with lower amount
(Negotiation strategy)

## Follow-up Email Template

Draft a professional 120-word email to send after the meeting.

Make it personalized for a {inputs.job_title} in {inputs.city_or_remote}.
Keep every section header exactly as written above.

Job Details:
- Job Title: {inputs.job_title}
- Location: {inputs.city_or_remote}
- Current Salary: {money(inputs.current_salary)}
- Target Salary: {target}
- Market Average: {money(market.average)}
- Market Range: {money(market.p25)} - {money(market.p75)}

Key Achievements:
{achievements}

Generate a comprehensive, personalized salary negotiation package in markdown format."""


def missing_sections(document: str) -> list[str]:
    """Return the required headers absent from ``document``."""
    return [header for header in REQUIRED_SECTIONS if header not in document]
