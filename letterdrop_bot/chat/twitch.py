import logging

import twitchio

from letterdrop_bot.chat.base import ChatConnector
from letterdrop_bot.game.constants import PLATFORM_TWITCH
from letterdrop_bot.utils.text import clamp

logger = logging.getLogger(__name__)

TWITCH_MESSAGE_LIMIT = 500


class _TwitchClient(twitchio.Client):
    def __init__(self, connector: "TwitchConnector", token: str, channel: str):
        super().__init__(token=token, initial_channels=[channel])
        self._connector = connector

    async def event_ready(self):
        logger.info("Twitch connected as %s", self.nick)

    async def event_message(self, message):
        # Our own messages come back as echoes
        if message.echo or message.author is None:
            return
        self._connector.deliver(message.author.name, message.content)


class TwitchConnector(ChatConnector):
    platform = PLATFORM_TWITCH

    def __init__(self, token: str, channel: str):
        super().__init__()
        if token.startswith("oauth:"):
            token = token[len("oauth:"):]
        self.channel = channel.lstrip("#").lower()
        self._client = _TwitchClient(self, token, self.channel)

    async def run(self) -> None:
        await self._client.start()

    async def send(self, text: str) -> None:
        channel = self._client.get_channel(self.channel)
        if channel is None:
            logger.warning("Twitch channel %s not joined yet, dropping message", self.channel)
            return
        await channel.send(clamp(text, TWITCH_MESSAGE_LIMIT))

    async def close(self) -> None:
        await self._client.close()
