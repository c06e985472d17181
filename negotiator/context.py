"""Process-wide context: every shared client and store, built once at startup."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from negotiator.agents.content_generator import ContentGenerator
from negotiator.agents.dialogue_engine import DialogueEngine
from negotiator.agents.language_model import LanguageModel
from negotiator.agents.pack_service import PackService
from negotiator.auth import AuthClient, AuthEvents
from negotiator.config import Settings
from negotiator.event_log import EventLog
from negotiator.models.pack_store import PackStore
from negotiator.models.session_store import SessionStore
from negotiator.tools.fallback_responder import FallbackResponder


@dataclass
class AppContext:
    settings: Settings
    packs: PackStore
    sessions: SessionStore
    llm: LanguageModel
    events: EventLog
    pack_service: PackService
    dialogue: DialogueEngine
    auth: AuthClient
    auth_events: AuthEvents


def build_context(
    settings: Settings,
    llm: Optional[LanguageModel] = None,
    rng: Optional[random.Random] = None,
) -> AppContext:
    """Wire the components together from ``settings``.

    ``llm`` and ``rng`` can be supplied to substitute the model client or
    make fallback replies reproducible.
    """
    packs = PackStore.in_dir(settings.data_dir)
    sessions = SessionStore.in_dir(settings.data_dir)
    events = EventLog(settings.log_dir)
    llm = llm or LanguageModel(
        model=settings.openai_model,
        api_key=settings.openai_api_key,
        timeout=settings.llm_timeout_seconds,
    )
    if rng is None:
        rng = random.Random(settings.fallback_seed)

    generator = ContentGenerator(
        llm,
        max_tokens=settings.content_max_tokens,
        temperature=settings.content_temperature,
    )
    dialogue = DialogueEngine(
        llm,
        packs,
        sessions,
        FallbackResponder(rng),
        events,
        max_tokens=settings.roleplay_max_tokens,
        temperature=settings.roleplay_temperature,
        default_confidence=settings.default_confidence,
        version_check=settings.session_version_check,
    )

    return AppContext(
        settings=settings,
        packs=packs,
        sessions=sessions,
        llm=llm,
        events=events,
        pack_service=PackService(packs, sessions, generator, events),
        dialogue=dialogue,
        auth=AuthClient(settings.auth_base_url, settings.auth_api_key),
        auth_events=AuthEvents(),
    )
