"""Language Model Client — text extraction and failure mapping."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from langchain_core.messages import HumanMessage

from negotiator.agents.language_model import LanguageModel
from negotiator.errors import GenerationUnavailable


def _mock_chat(content=None, error=None) -> AsyncMock:
    chat = AsyncMock()
    if error is not None:
        chat.ainvoke.side_effect = error
    else:
        chat.ainvoke.return_value = MagicMock(content=content)
    return chat


@pytest.mark.asyncio
async def test_complete_sends_single_user_message_and_trims():
    chat = _mock_chat("  I hear you. What's driving this?  \n")
    with patch("negotiator.agents.language_model.ChatOpenAI", return_value=chat) as chat_cls:
        llm = LanguageModel(model="gpt-4o", api_key="sk-test")
        text = await llm.complete("the prompt", max_tokens=200, temperature=0.5)

    assert text == "I hear you. What's driving this?"
    messages = chat.ainvoke.await_args.args[0]
    assert len(messages) == 1
    assert isinstance(messages[0], HumanMessage)
    assert messages[0].content == "the prompt"
    assert chat.ainvoke.await_args.kwargs == {"max_tokens": 200, "temperature": 0.5}
    assert chat_cls.call_args.kwargs["max_retries"] == 0


@pytest.mark.asyncio
async def test_first_text_segment_is_used():
    chat = _mock_chat([{"type": "text", "text": " first "}, {"type": "text", "text": "second"}])
    with patch("negotiator.agents.language_model.ChatOpenAI", return_value=chat):
        text = await LanguageModel("gpt-4o", "sk-test").complete("p", max_tokens=10)
    assert text == "first"


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["", "   ", None, [], [{"type": "image"}]])
async def test_empty_or_malformed_reply_is_unavailable(content):
    with patch("negotiator.agents.language_model.ChatOpenAI", return_value=_mock_chat(content)):
        with pytest.raises(GenerationUnavailable):
            await LanguageModel("gpt-4o", "sk-test").complete("p", max_tokens=10)


@pytest.mark.asyncio
async def test_provider_error_is_unavailable():
    chat = _mock_chat(error=ConnectionError("connection reset"))
    with patch("negotiator.agents.language_model.ChatOpenAI", return_value=chat):
        with pytest.raises(GenerationUnavailable):
            await LanguageModel("gpt-4o", "sk-test").complete("p", max_tokens=10)
    chat.ainvoke.assert_awaited_once()


@pytest.mark.asyncio
async def test_missing_api_key_skips_the_call():
    with patch("negotiator.agents.language_model.ChatOpenAI") as chat_cls:
        with pytest.raises(GenerationUnavailable):
            await LanguageModel("gpt-4o", "").complete("p", max_tokens=10)
    chat_cls.assert_not_called()
