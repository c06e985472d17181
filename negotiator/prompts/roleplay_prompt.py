"""Prompt template for the role-play manager."""

from typing import Sequence

from negotiator.models.domain import ChatMessage, Pack
from negotiator.prompts.content_prompt import money

SPEAKER_LABELS = {"user": "Employee", "assistant": "Manager"}

# First manager line of every new session.
OPENING_LINE = (
    "Hi! I'm your manager for this role-play session. I understand you wanted to "
    "discuss your compensation. I have a few minutes now - what would you like to talk about?"
)


def render_transcript(messages: Sequence[ChatMessage]) -> str:
    """Render the conversation as alternating ``Employee:``/``Manager:`` lines."""
    return "\n".join(f"{SPEAKER_LABELS[m.role]}: {m.content}" for m in messages)


def build_roleplay_prompt(pack: Pack, history: Sequence[ChatMessage], utterance: str) -> str:
    """Build the manager prompt for the next turn."""

    target = money(pack.target_salary) if pack.target_salary else "N/A"
    achievements = ", ".join(pack.achievements) or "None provided"

    return f"""You are a supportive but realistic manager having a salary negotiation conversation with an employee.

Employee Details:
- Job Title: {pack.job_title}
- Location: {pack.city_or_remote}
- Current Salary: {money(pack.current_salary)}
- Target Salary: {target}
- Market Average: {money(pack.market_data.average)}
- Key Achievements: {achievements}

Conversation so far:
{render_transcript(history)}

Employee: {utterance}

As the manager, stay in character and respond in a way that:
1. Acknowledges their points professionally
2. Asks thoughtful follow-up questions
3. Shows you're considering their request seriously
4. Maintains a collaborative tone
5. Occasionally raises realistic concerns or asks for clarification
6. Keeps responses concise (2-3 sentences max)

Manager:"""
