"""Pack and session stores — JSON-file persistence."""

from __future__ import annotations

import json
from unittest.mock import patch

import pydantic
import pytest

from negotiator.errors import NotFound, PersistenceError, SessionConflict
from negotiator.models.domain import ChatMessage
from negotiator.models.pack_store import PackStore
from negotiator.models.session_store import SessionStore
from tests.conftest import make_pack


def test_packs_survive_reload(tmp_path):
    store = PackStore.in_dir(tmp_path)
    pack = store.add(make_pack())

    reloaded = PackStore.in_dir(tmp_path)
    assert reloaded.get(pack.id) == pack
    assert json.loads((tmp_path / "packs.json").read_text())[0]["id"] == pack.id


def test_list_for_owner_newest_first(tmp_path):
    store = PackStore.in_dir(tmp_path)
    older = store.add(make_pack(created_at="2024-01-01T00:00:00.000000+00:00"))
    newer = store.add(make_pack(created_at="2024-06-01T00:00:00.000000+00:00"))
    store.add(make_pack(user_id="user-b"))

    assert [p.id for p in store.list_for_owner("user-a")] == [newer.id, older.id]


def test_failed_write_leaves_store_unchanged(tmp_path):
    store = PackStore.in_dir(tmp_path)
    with patch("pathlib.Path.write_text", side_effect=OSError("read-only")):
        with pytest.raises(PersistenceError):
            store.add(make_pack())
    assert store.list_for_owner("user-a") == []


def test_corrupt_file_is_ignored(tmp_path):
    (tmp_path / "sessions.json").write_text("{not json", encoding="utf-8")
    store = SessionStore.in_dir(tmp_path)
    assert store.get_by_pack("anything") is None


def test_upsert_replaces_whole_transcript(tmp_path):
    store = SessionStore.in_dir(tmp_path)
    first = [ChatMessage(role="user", content="hi")]
    created = store.upsert_transcript("pack-1", first, default_confidence=6)
    assert created.confidence_score == 6
    assert created.version == 1

    second = first + [ChatMessage(role="assistant", content="hello")]
    updated = store.upsert_transcript("pack-1", second)

    assert updated.id == created.id
    assert updated.version == 2
    assert updated.confidence_score == 6
    assert [m.content for m in updated.messages] == ["hi", "hello"]
    assert updated.updated_at >= created.updated_at
    assert SessionStore.in_dir(tmp_path).get(created.id).messages == updated.messages


def test_upsert_last_write_wins_without_version(tmp_path):
    store = SessionStore.in_dir(tmp_path)
    store.upsert_transcript("pack-1", [ChatMessage(role="user", content="a")])
    store.upsert_transcript("pack-1", [ChatMessage(role="user", content="b")])
    assert [m.content for m in store.get_by_pack("pack-1").messages] == ["b"]


def test_upsert_compare_and_swap(tmp_path):
    store = SessionStore.in_dir(tmp_path)
    with pytest.raises(SessionConflict):
        store.upsert_transcript("pack-1", [], expected_version=3)
    store.upsert_transcript("pack-1", [], expected_version=0)
    with pytest.raises(SessionConflict) as excinfo:
        store.upsert_transcript("pack-1", [], expected_version=0)
    assert excinfo.value.actual == 1


def test_set_confidence_unknown_session(tmp_path):
    with pytest.raises(NotFound):
        SessionStore.in_dir(tmp_path).set_confidence("nope", 4)


def test_delete_for_pack(tmp_path):
    store = SessionStore.in_dir(tmp_path)
    store.upsert_transcript("pack-1", [])
    store.upsert_transcript("pack-2", [])

    assert store.delete_for_pack("pack-1") == 1
    assert store.delete_for_pack("pack-1") == 0
    assert store.get_by_pack("pack-1") is None
    assert store.get_by_pack("pack-2") is not None


def test_chat_message_is_immutable():
    message = ChatMessage(role="user", content="hi")
    with pytest.raises(Exception):
        message.role = "assistant"


@pytest.mark.parametrize("stamp", ["yesterday", "", "2024-13-01T00:00:00Z"])
def test_chat_message_rejects_malformed_timestamp(stamp):
    with pytest.raises(pydantic.ValidationError, match="ISO-8601"):
        ChatMessage(role="user", content="hi", timestamp=stamp)


def test_chat_message_accepts_browser_timestamp():
    message = ChatMessage(role="user", content="hi", timestamp="2024-05-01T09:00:00.000Z")
    assert message.timestamp == "2024-05-01T09:00:00.000Z"
