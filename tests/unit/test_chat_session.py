from __future__ import annotations

import asyncio

import pytest

from gradspace.application.chat_session import ChatSession
from gradspace.application.exceptions import FetchError, ValidationError
from gradspace.domain.entities.user import Recipient
from gradspace.domain.events.messages_seen import MessagesSeen
from gradspace.domain.events.new_message_received import NewMessageReceived
from gradspace.domain.events.online_users_changed import OnlineUsersChanged
from gradspace.domain.events.unknown_event import UnknownEvent
from gradspace.domain.value_objects.ids import ConversationId, UserId
from tests.conftest import (
    LOCAL_USER,
    PEER_USER,
    FakeApi,
    FakeChannel,
    FixedClock,
    make_conversation,
    make_message,
    message_payload,
)


@pytest.fixture
def session(user_principal, api: FakeApi, channel: FakeChannel, clock: FixedClock) -> ChatSession:
    return ChatSession(user_principal, api, channel, clock=clock)


# -- new message events --------------------------------------------------------


def test_new_message_patches_only_matching_preview(session: ChatSession):
    a = make_conversation(conversation_id="a", last_message="hi", last_message_seen=False)
    b = make_conversation(conversation_id="b", last_message="other")
    session.conversations.set_conversations([a, b])

    session.handle_event(
        NewMessageReceived(
            conversation_id=ConversationId("a"),
            message=make_message(message_id="m9", sender_id="u2", text="yo"),
        ),
    )

    result = session.conversations.state.conversations
    assert [c.id for c in result] == ["a", "b"]
    assert result[0].last_message == "yo"
    assert result[0].last_message_sender_id == "u2"
    assert result[0].last_message_seen is False
    assert result[0].participant2_full_name == a.participant2_full_name
    assert result[0].created_at == a.created_at
    assert result[1] is b


def test_new_message_for_closed_conversation_does_not_touch_open_list(session: ChatSession):
    open_conv = make_conversation(conversation_id="a")
    other = make_conversation(conversation_id="b")
    session.conversations.set_conversations([open_conv, other])
    session.conversations.set_selected_conversation(open_conv)
    session.messages.reset(open_conv.id)

    session.handle_event(
        NewMessageReceived(conversation_id=ConversationId("b"), message=make_message(text="elsewhere")),
    )

    assert session.messages.state.messages == ()
    assert session.conversations.state.conversations[1].last_message == "elsewhere"


@pytest.mark.asyncio
async def test_new_message_for_open_conversation_appends_and_acknowledges(
    session: ChatSession, channel: FakeChannel,
):
    conv = make_conversation(conversation_id="a")
    session.conversations.set_conversations([conv])
    session.conversations.set_selected_conversation(conv)
    session.messages.reset(conv.id)
    message = make_message(message_id="m1", sender_id=PEER_USER)

    session.handle_event(NewMessageReceived(conversation_id=ConversationId("a"), message=message))
    session.handle_event(NewMessageReceived(conversation_id=ConversationId("a"), message=message))
    await session.drain()

    assert session.messages.state.messages == (message,)
    assert channel.sent
    assert channel.sent[0].conversation_id == "a"
    assert channel.sent[0].user_id == LOCAL_USER


@pytest.mark.asyncio
async def test_own_echo_is_not_acknowledged(session: ChatSession, channel: FakeChannel):
    conv = make_conversation(conversation_id="a")
    session.conversations.set_conversations([conv])
    session.conversations.set_selected_conversation(conv)
    session.messages.reset(conv.id)

    session.handle_event(
        NewMessageReceived(conversation_id=ConversationId("a"), message=make_message(sender_id=LOCAL_USER)),
    )
    await session.drain()

    assert channel.sent == []


# -- seen / presence / unknown -------------------------------------------------


def test_messages_seen_flips_unseen_only(session: ChatSession):
    conv = make_conversation(conversation_id="a", last_message_seen=False)
    session.conversations.set_conversations([conv])
    session.conversations.set_selected_conversation(conv)
    already = make_message(message_id="m1", seen=True)
    pending = make_message(message_id="m2", seen=False)
    session.messages.patch(conversation_id=conv.id, messages=(already, pending))

    session.handle_event(MessagesSeen(conversation_id=ConversationId("a")))
    first = session.messages.state.messages
    session.handle_event(MessagesSeen(conversation_id=ConversationId("a")))

    assert all(m.seen for m in first)
    assert first[0] is already
    assert session.messages.state.messages == first
    assert session.conversations.state.conversations[0].last_message_seen is True


def test_messages_seen_for_closed_conversation_updates_summary_only(session: ChatSession):
    a = make_conversation(conversation_id="a")
    b = make_conversation(conversation_id="b")
    session.conversations.set_conversations([a, b])
    session.conversations.set_selected_conversation(a)
    session.messages.patch(conversation_id=a.id, messages=(make_message(seen=False),))

    session.handle_event(MessagesSeen(conversation_id=ConversationId("b")))

    assert session.messages.state.messages[0].seen is False
    assert session.conversations.state.conversations[1].last_message_seen is True


def test_online_users_replaces_presence(session: ChatSession):
    session.handle_event(OnlineUsersChanged(user_ids=frozenset({UserId("u2"), UserId("u3")})))
    session.handle_event(OnlineUsersChanged(user_ids=frozenset({UserId("u3")})))

    assert session.presence.is_online("u3")
    assert not session.presence.is_online("u2")


def test_unknown_event_is_ignored(session: ChatSession):
    conv = make_conversation()
    session.conversations.set_conversations([conv])

    session.handle_event(UnknownEvent(type="TYPING", data={"type": "TYPING"}))

    assert session.conversations.state.conversations == (conv,)


# -- opening a conversation ----------------------------------------------------


@pytest.mark.asyncio
async def test_open_conversation_loads_messages_and_acknowledges(
    session: ChatSession, api: FakeApi, channel: FakeChannel,
):
    conv = make_conversation(conversation_id="a", peer_id="u2")
    message = make_message(sender_id="u2")
    api.on("GET", "/messages/u2", {"messages": [message_payload(message)]})

    await session.open_conversation(conv)

    assert session.conversations.state.selected == conv
    assert session.messages.state.conversation_id == "a"
    assert session.messages.state.messages == (message,)
    assert session.messages.state.is_loading is False
    assert [e.conversation_id for e in channel.sent] == ["a"]


@pytest.mark.asyncio
async def test_open_mock_conversation_skips_fetch(session: ChatSession, api: FakeApi, channel: FakeChannel):
    await session.open_conversation(make_conversation(conversation_id="123", mock=True))

    assert api.calls == []
    assert session.messages.state.messages == ()
    assert channel.sent == []


@pytest.mark.asyncio
async def test_open_conversation_failure_sets_error(session: ChatSession, api: FakeApi):
    api.on("GET", "/messages/u2", FetchError("boom"))

    await session.open_conversation(make_conversation(conversation_id="a"))

    assert session.messages.state.error == "Failed to fetch messages"
    assert session.messages.state.is_loading is False


@pytest.mark.asyncio
async def test_stale_load_is_discarded(session: ChatSession, api: FakeApi):
    first = make_conversation(conversation_id="a", peer_id="u2")
    second = make_conversation(conversation_id="b", peer_id="u3")
    release = asyncio.Event()

    async def _slow_get(path, *, params=None):
        if path == "/messages/u2":
            await release.wait()
            return {"messages": [message_payload(make_message(message_id="old"))]}
        return {"messages": []}

    api.get = _slow_get  # type: ignore[method-assign]

    pending = asyncio.create_task(session.open_conversation(first))
    await asyncio.sleep(0)
    await session.open_conversation(second)
    release.set()
    await pending

    assert session.messages.state.conversation_id == "b"
    assert session.messages.state.messages == ()


# -- sending -------------------------------------------------------------------


@pytest.mark.asyncio
async def test_send_appends_once_and_patches_preview(session: ChatSession, api: FakeApi):
    a = make_conversation(conversation_id="a", peer_id="u2", last_message_seen=True)
    b = make_conversation(conversation_id="b", peer_id="u3")
    session.conversations.set_conversations([a, b])
    session.conversations.set_selected_conversation(a)
    session.messages.reset(a.id)
    sent = make_message(message_id="m5", sender_id=LOCAL_USER, text="hey")
    api.on("POST", "/messages", message_payload(sent, "a"))

    await session.send_message("hey")

    assert api.calls_to("POST", "/messages") == [{"json": {"content": "hey", "recipientId": "u2"}}]
    assert session.messages.state.messages == (sent,)
    patched = session.conversations.state.conversations[0]
    assert patched.last_message == "hey"
    assert patched.last_message_sender_id == LOCAL_USER
    assert patched.last_message_seen is False
    assert session.conversations.state.conversations[1] is b


@pytest.mark.asyncio
async def test_send_without_open_conversation_appends_nothing(session: ChatSession, api: FakeApi):
    api.on("POST", "/messages", message_payload(make_message(sender_id=LOCAL_USER)))

    await session.send_message("hello", recipient_id="u2")

    assert session.messages.state.messages == ()


@pytest.mark.asyncio
async def test_blank_text_performs_no_request(session: ChatSession, api: FakeApi):
    conv = make_conversation()
    session.conversations.set_selected_conversation(conv)

    with pytest.raises(ValidationError):
        await session.send_message("   ")

    assert api.calls == []


@pytest.mark.asyncio
async def test_send_failure_sets_error_and_reraises(session: ChatSession, api: FakeApi):
    conv = make_conversation(conversation_id="a")
    session.conversations.set_conversations([conv])
    session.conversations.set_selected_conversation(conv)
    session.messages.reset(conv.id)
    api.on("POST", "/messages", FetchError("down", status_code=500))

    with pytest.raises(FetchError):
        await session.send_message("hello")

    assert session.messages.state.error == "Failed to send message"
    assert session.messages.state.is_sending is False
    assert session.messages.state.messages == ()
    assert session.conversations.state.conversations == (conv,)


@pytest.mark.asyncio
async def test_first_send_materializes_mock(session: ChatSession, api: FakeApi):
    recipient = Recipient(recipient_id=UserId("u5"), full_name="Carol C", profile_img="c.png")
    mock = await session.start_new_chat(recipient)
    sent = make_message(message_id="m1", sender_id=LOCAL_USER, text="first")
    api.on("POST", "/messages", message_payload(sent, "srv-1"))

    await session.send_message("first")

    selected = session.conversations.state.selected
    assert selected is not None
    assert selected.id == "srv-1"
    assert selected.mock is False
    assert selected.last_message == "first"
    assert [c.id for c in session.conversations.state.conversations] == ["srv-1"]
    assert session.conversations.find_by_id(mock.id) is None
    assert session.messages.state.conversation_id == "srv-1"


# -- new chats -----------------------------------------------------------------


@pytest.mark.asyncio
async def test_start_new_chat_selects_existing(session: ChatSession):
    existing = make_conversation(conversation_id="a", peer_id="u2")
    session.conversations.set_conversations([existing])

    result = await session.start_new_chat(Recipient(recipient_id=UserId("u2"), full_name="Bob B", profile_img=""))

    assert result is existing
    assert session.conversations.state.selected is existing
    assert session.conversations.state.conversations == (existing,)


@pytest.mark.asyncio
async def test_start_new_chat_prepends_mock(session: ChatSession, clock: FixedClock):
    existing = make_conversation(conversation_id="a", peer_id="u2")
    session.conversations.set_conversations([existing])
    recipient = Recipient(recipient_id=UserId("u5"), full_name="Carol C", profile_img="c.png")

    mock = await session.start_new_chat(recipient)

    convs = session.conversations.state.conversations
    assert convs == (mock, existing)
    assert mock.mock is True
    assert mock.id == str(int(clock.now().timestamp() * 1000))
    assert mock.participant1_id == LOCAL_USER
    assert mock.participant1_full_name == "alice"
    assert mock.participant1_profile_img == "a.png"
    assert mock.participant2_id == "u5"
    assert mock.participant2_full_name == "Carol C"
    assert mock.participant2_profile_img == "c.png"
    assert mock.last_message == ""
    assert mock.last_message_seen is False
    assert session.conversations.state.selected == mock


@pytest.mark.asyncio
async def test_cannot_message_yourself(session: ChatSession):
    with pytest.raises(ValidationError, match="yourself"):
        await session.start_new_chat(Recipient(recipient_id=LOCAL_USER, full_name="Me", profile_img=""))


@pytest.mark.asyncio
async def test_mock_conversation_is_never_acknowledged(session: ChatSession, channel: FakeChannel):
    mock = make_conversation(conversation_id="123", mock=True)
    session.conversations.set_selected_conversation(mock)
    session.messages.patch(conversation_id=mock.id, messages=(make_message(sender_id=PEER_USER),))

    assert await session.acknowledge_seen() is False
    assert channel.sent == []


@pytest.mark.asyncio
async def test_channel_listener_drives_session(session: ChatSession, channel: FakeChannel):
    channel.add_listener(session.handle_event)
    session.conversations.set_conversations([make_conversation(conversation_id="a")])

    channel.emit(MessagesSeen(conversation_id=ConversationId("a")))

    assert session.conversations.state.conversations[0].last_message_seen is True


# -- selection changes ---------------------------------------------------------


@pytest.mark.asyncio
async def test_new_chat_clears_previous_list_before_send(session: ChatSession, api: FakeApi):
    conv = make_conversation(conversation_id="a", peer_id="u2")
    session.conversations.set_conversations([conv])
    api.on("GET", "/messages/u2", {"messages": [message_payload(make_message(message_id="m1", text="from a"))]})
    await session.open_conversation(conv)
    api.on("POST", "/messages", message_payload(make_message(message_id="m2", sender_id=LOCAL_USER, text="to carol")))

    mock = await session.start_new_chat(Recipient(recipient_id=UserId("u5"), full_name="Carol C", profile_img=""))
    await session.send_message("to carol")

    assert session.conversations.state.selected.id == mock.id
    assert session.messages.state.conversation_id == mock.id
    assert [m.text for m in session.messages.state.messages] == ["to carol"]


@pytest.mark.asyncio
async def test_selecting_existing_chat_reloads_its_list(session: ChatSession, api: FakeApi):
    a = make_conversation(conversation_id="a", peer_id="u2")
    b = make_conversation(conversation_id="b", peer_id="u3")
    session.conversations.set_conversations([a, b])
    api.on("GET", "/messages/u2", {"messages": [message_payload(make_message(message_id="m1", text="from a"))]})
    api.on("GET", "/messages/u3", {"messages": [message_payload(make_message(message_id="m2", sender_id="u3", text="from b"))]})
    await session.open_conversation(a)

    await session.start_new_chat(Recipient(recipient_id=UserId("u3"), full_name="Dan", profile_img=""))

    assert session.messages.state.conversation_id == "b"
    assert [m.text for m in session.messages.state.messages] == ["from b"]


@pytest.mark.asyncio
async def test_event_for_selection_without_its_list_is_not_appended(session: ChatSession):
    a = make_conversation(conversation_id="a")
    b = make_conversation(conversation_id="b", peer_id="u3")
    session.conversations.set_conversations([a, b])
    session.messages.patch(conversation_id=a.id, messages=(make_message(message_id="m1"),))
    session.conversations.set_selected_conversation(b)

    session.handle_event(
        NewMessageReceived(conversation_id=ConversationId("b"), message=make_message(message_id="m9", sender_id="u3")),
    )

    assert [m.id for m in session.messages.state.messages] == ["m1"]


@pytest.mark.asyncio
async def test_send_to_other_recipient_leaves_open_list(session: ChatSession, api: FakeApi):
    a = make_conversation(conversation_id="a", peer_id="u2", last_message="hi")
    b = make_conversation(conversation_id="b", peer_id="u3", last_message="old")
    session.conversations.set_conversations([a, b])
    session.conversations.set_selected_conversation(a)
    session.messages.reset(a.id)
    api.on("POST", "/messages", message_payload(make_message(message_id="n1", sender_id=LOCAL_USER, text="for u3"), "b"))

    await session.send_message("for u3", recipient_id="u3")

    assert session.messages.state.messages == ()
    convs = session.conversations.state.conversations
    assert convs[0] is a
    assert convs[1].last_message == "for u3"


@pytest.mark.asyncio
async def test_send_to_unlisted_recipient_leaves_state(session: ChatSession, api: FakeApi):
    a = make_conversation(conversation_id="a", peer_id="u2")
    session.conversations.set_conversations([a])
    session.conversations.set_selected_conversation(a)
    session.messages.reset(a.id)
    api.on("POST", "/messages", message_payload(make_message(message_id="n1", sender_id=LOCAL_USER, text="hey"), "z"))

    await session.send_message("hey", recipient_id="u9")

    assert api.calls_to("POST", "/messages") == [{"json": {"content": "hey", "recipientId": "u9"}}]
    assert session.messages.state.messages == ()
    assert session.conversations.state.conversations == (a,)



def test_inbound_message_is_appended_unseen(session: ChatSession):
    conv = make_conversation(conversation_id="a", last_message_seen=True)
    session.conversations.set_conversations([conv])
    session.conversations.set_selected_conversation(conv)
    session.messages.reset(conv.id)

    session.handle_event(
        NewMessageReceived(conversation_id=ConversationId("a"), message=make_message(sender_id=LOCAL_USER, seen=True)),
    )

    assert session.messages.state.messages[0].seen is False
    assert session.conversations.state.conversations[0].last_message_seen is False
