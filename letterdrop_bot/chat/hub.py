import asyncio
import logging
from typing import Dict, List, Optional, Set

from letterdrop_bot.chat.base import ChatConnector, Dispatch
from letterdrop_bot.common.state import ChatEvent

logger = logging.getLogger(__name__)


class ChatHub:
    """
    Fan-in for inbound chat, fan-out for replies.

    Every inbound event becomes its own task on the loop, so a slow command
    (word pick, hint lookup) never holds up the next message.
    """

    def __init__(self):
        self.connectors: Dict[str, ChatConnector] = {}
        self._dispatch: Optional[Dispatch] = None
        self._pending: Set[asyncio.Task] = set()
        self._runners: List[asyncio.Task] = []

    def register(self, connector: ChatConnector) -> None:
        connector.on_message(self.deliver)
        self.connectors[connector.platform] = connector

    def on_message(self, dispatch: Dispatch) -> None:
        self._dispatch = dispatch

    def deliver(self, event: ChatEvent) -> None:
        if self._dispatch is None:
            return
        task = asyncio.create_task(self._handle(event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _handle(self, event: ChatEvent) -> None:
        try:
            await self._dispatch(event)
        except Exception:
            logger.exception("Failed handling %s message from %s", event.platform, event.user)

    async def say(self, text: str, platform: Optional[str] = None) -> None:
        if platform is not None:
            targets = [self.connectors[platform]] if platform in self.connectors else []
        else:
            targets = list(self.connectors.values())

        for connector in targets:
            try:
                await connector.send(text)
            except Exception:
                logger.exception("Failed sending to %s", connector.platform)

    async def _run_connector(self, connector: ChatConnector) -> None:
        try:
            await connector.run()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("%s connector stopped", connector.platform)

    def start(self) -> None:
        for connector in self.connectors.values():
            logger.info("Starting %s connector", connector.platform)
            self._runners.append(asyncio.create_task(self._run_connector(connector)))

    async def close(self) -> None:
        for task in self._runners:
            task.cancel()
        await asyncio.gather(*self._runners, *self._pending, return_exceptions=True)
        for connector in self.connectors.values():
            await connector.close()
