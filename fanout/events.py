"""Inbound event dispatcher — routes chat platform events to a reply text.

Text messages go through the pipeline; menu postbacks get static replies.
Transport concerns (signature checks, sending the reply) stay with the caller.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, Mapping, Optional

from fanout.pipeline import Pipeline
from fanout.prompts.menu import (
    AI_CHAT_GREETING,
    POSTBACK_ERROR_NOTICE,
    UNKNOWN_ACTION_NOTICE,
    Action,
    build_feature_list_text,
    build_help_text,
)

logger = logging.getLogger(__name__)

# Reply tokens the platform uses for webhook verification requests
DUMMY_REPLY_TOKENS = frozenset({"0" * 32, "f" * 32})


def _postback_reply(data: str) -> str:
    if data == Action.FEATURES.value:
        return build_feature_list_text()
    if data == Action.HELP.value:
        return build_help_text()
    if data == Action.AI_CHAT.value:
        return AI_CHAT_GREETING
    logger.warning("Unknown postback action: %r", data)
    return UNKNOWN_ACTION_NOTICE


class EventDispatcher:
    def __init__(self, pipeline: Pipeline) -> None:
        self.pipeline = pipeline

    async def handle(self, event: Mapping[str, Any]) -> Optional[str]:
        """Return the reply text for one event, or None if it needs no reply.

        Malformed payloads (non-mapping event, message or postback) are ignored.
        """
        if not isinstance(event, Mapping):
            logger.warning("Ignoring malformed event: %r", event)
            return None

        reply_token = event.get("replyToken")
        if isinstance(reply_token, str) and reply_token in DUMMY_REPLY_TOKENS:
            return None

        event_type = event.get("type")
        if event_type == "postback":
            return self.handle_postback(event)

        message = event.get("message") or {}
        if not isinstance(message, Mapping):
            logger.warning("Ignoring %s event with malformed message: %r", event_type, message)
            return None
        if event_type != "message" or message.get("type") != "text":
            logger.debug("Ignoring %s event", event_type)
            return None

        return await self.pipeline.reply(message.get("text", ""))

    def handle_postback(self, event: Mapping[str, Any]) -> str:
        postback = event.get("postback") or {}
        data = postback.get("data", "") if isinstance(postback, Mapping) else ""
        try:
            return _postback_reply(data)
        except Exception:
            logger.exception("Error handling postback %r", data)
            return POSTBACK_ERROR_NOTICE

    async def handle_all(self, events: Iterable[Mapping[str, Any]]) -> list[Optional[str]]:
        """Handle a webhook batch concurrently, one result per event in order."""
        return list(await asyncio.gather(*[self.handle(event) for event in events]))
