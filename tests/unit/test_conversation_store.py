from __future__ import annotations

import pytest

from gradspace.application.exceptions import FetchError
from gradspace.application.state.conversations import ConversationStore
from tests.conftest import FakeApi, conversation_payload, make_conversation


@pytest.mark.asyncio
async def test_fetch_conversations_replaces_list(api: FakeApi):
    conv = make_conversation()
    api.on("GET", "/messages/conversations", {"conversations": [conversation_payload(conv)]})
    store = ConversationStore()

    await store.fetch_conversations(api)

    assert store.state.conversations == (conv,)
    assert store.state.is_loading is False
    assert store.state.error is None


@pytest.mark.asyncio
async def test_fetch_failure_keeps_list_and_sets_error(api: FakeApi):
    store = ConversationStore()
    store.set_conversations([make_conversation()])
    api.on("GET", "/messages/conversations", FetchError(""))

    await store.fetch_conversations(api)

    assert len(store.state.conversations) == 1
    assert store.state.error == "Failed to fetch conversations"
    assert store.state.is_loading is False


@pytest.mark.asyncio
async def test_error_cleared_on_next_fetch(api: FakeApi):
    store = ConversationStore()
    api.on("GET", "/messages/conversations", FetchError("down"))
    await store.fetch_conversations(api)
    assert store.state.error == "down"

    api.on("GET", "/messages/conversations", {"conversations": []})
    await store.fetch_conversations(api)
    assert store.state.error is None


def test_set_conversations_accepts_updater():
    store = ConversationStore()
    a = make_conversation(conversation_id="a")
    b = make_conversation(conversation_id="b")
    store.set_conversations([a])

    store.set_conversations(lambda prev: (b, *prev))

    assert [c.id for c in store.state.conversations] == ["b", "a"]


def test_find_helpers():
    store = ConversationStore()
    store.set_conversations([make_conversation(conversation_id="a", peer_id="u7")])

    assert store.find_by_id("a") is not None
    assert store.find_by_id("nope") is None
    assert store.find_with_user("u7").id == "a"
    assert store.find_with_user("u8") is None
