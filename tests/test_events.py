"""Tests for the inbound event dispatcher."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from fanout.events import EventDispatcher
from fanout.prompts.menu import (
    AI_CHAT_GREETING,
    UNKNOWN_ACTION_NOTICE,
    Action,
    build_feature_list_text,
    build_help_text,
)


@pytest.fixture
def pipeline():
    mock = MagicMock()
    mock.reply = AsyncMock(side_effect=lambda text: f"reply to {text}")
    return mock


@pytest.fixture
def dispatcher(pipeline):
    return EventDispatcher(pipeline)


def _text_event(text, token="token-1"):
    return {"type": "message", "replyToken": token, "message": {"type": "text", "text": text}}


def _postback_event(data, token="token-1"):
    return {"type": "postback", "replyToken": token, "postback": {"data": data}}


@pytest.mark.asyncio
async def test_text_message_goes_through_pipeline(dispatcher, pipeline):
    result = await dispatcher.handle(_text_event("write a poem"))

    assert result == "reply to write a poem"
    pipeline.reply.assert_awaited_once_with("write a poem")


@pytest.mark.asyncio
@pytest.mark.parametrize("token", ["0" * 32, "f" * 32])
async def test_verification_tokens_are_ignored(dispatcher, pipeline, token):
    assert await dispatcher.handle(_text_event("hi", token=token)) is None
    pipeline.reply.assert_not_awaited()


@pytest.mark.asyncio
async def test_non_text_messages_are_ignored(dispatcher, pipeline):
    sticker = {"type": "message", "replyToken": "t", "message": {"type": "sticker"}}
    follow = {"type": "follow", "replyToken": "t"}

    assert await dispatcher.handle(sticker) is None
    assert await dispatcher.handle(follow) is None
    pipeline.reply.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "action, expected",
    [
        (Action.FEATURES, build_feature_list_text()),
        (Action.HELP, build_help_text()),
        (Action.AI_CHAT, AI_CHAT_GREETING),
    ],
)
async def test_postback_actions(dispatcher, pipeline, action, expected):
    assert await dispatcher.handle(_postback_event(action.value)) == expected
    pipeline.reply.assert_not_awaited()


@pytest.mark.asyncio
async def test_unknown_postback(dispatcher, caplog):
    result = await dispatcher.handle(_postback_event("action=launch_rockets"))

    assert result == UNKNOWN_ACTION_NOTICE
    assert "action=launch_rockets" in caplog.text


@pytest.mark.asyncio
async def test_handle_all_keeps_event_order(dispatcher):
    events = [_text_event("one"), _postback_event(Action.AI_CHAT.value), _text_event("two", token="0" * 32)]

    results = await dispatcher.handle_all(events)

    assert results == ["reply to one", AI_CHAT_GREETING, None]


@pytest.mark.asyncio
async def test_malformed_events_do_not_break_the_batch(dispatcher, caplog):
    events = [
        _text_event("one"),
        {"type": "message", "replyToken": "t", "message": "not a mapping"},
        "not an event",
        {"type": "postback", "replyToken": ["t"], "postback": None},
        _text_event("two"),
    ]

    results = await dispatcher.handle_all(events)

    assert results == ["reply to one", None, None, UNKNOWN_ACTION_NOTICE, "reply to two"]
    assert "malformed" in caplog.text
