"""
Kick chat reader.

Kick chat is a Pusher WebSocket. Chat lines arrive as
{"event": "App\\Events\\ChatMessageEvent", "data": "<json string>"}; relays
that forward the inner object directly are accepted too. Sending needs an
authenticated API, so this connector only listens.
"""

import asyncio
import json
import logging
from typing import Any, Optional, Tuple

import aiohttp

from letterdrop_bot.chat.base import ChatConnector
from letterdrop_bot.game.constants import PLATFORM_KICK

logger = logging.getLogger(__name__)

CHAT_MESSAGE_EVENT = "App\\Events\\ChatMessageEvent"
RECONNECT_DELAY = 5.0


def parse_kick_message(raw: str) -> Optional[Tuple[str, str]]:
    """Return (username, content) for a chat line, None for anything else."""
    try:
        data: Any = json.loads(raw)
    except ValueError:
        return None

    if not isinstance(data, dict):
        return None

    if "event" in data:
        if data.get("event") != CHAT_MESSAGE_EVENT:
            return None
        data = data.get("data")
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except ValueError:
                return None
        if not isinstance(data, dict):
            return None

    sender = data.get("sender")
    if not isinstance(sender, dict):
        return None

    username = sender.get("username")
    content = data.get("content")
    if not username or not isinstance(content, str):
        return None

    return username, content


def subscribe_frame(chatroom_id: str) -> dict:
    return {
        "event": "pusher:subscribe",
        "data": {"auth": "", "channel": f"chatrooms.{chatroom_id}.v2"},
    }


class KickConnector(ChatConnector):
    platform = PLATFORM_KICK

    def __init__(
        self,
        url: str,
        chatroom_id: Optional[str] = None,
        reconnect_delay: float = RECONNECT_DELAY,
    ):
        super().__init__()
        self.url = url
        self.chatroom_id = chatroom_id
        self.reconnect_delay = reconnect_delay

    async def _listen(self, session: aiohttp.ClientSession) -> None:
        async with session.ws_connect(self.url, heartbeat=30) as ws:
            logger.info("Kick chat connected")
            if self.chatroom_id:
                await ws.send_json(subscribe_frame(self.chatroom_id))

            async for msg in ws:
                if msg.type == aiohttp.WSMsgType.TEXT:
                    parsed = parse_kick_message(msg.data)
                    if parsed is not None:
                        self.deliver(*parsed)
                elif msg.type in (aiohttp.WSMsgType.CLOSED, aiohttp.WSMsgType.ERROR):
                    break

    async def run(self) -> None:
        async with aiohttp.ClientSession() as session:
            while True:
                try:
                    await self._listen(session)
                except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                    logger.warning("Kick chat connection failed: %r", e)

                logger.info("Kick chat disconnected, retrying in %.0fs", self.reconnect_delay)
                await asyncio.sleep(self.reconnect_delay)

    async def send(self, text: str) -> None:
        logger.debug("Kick connector is read-only, not sending: %s", text)
