from typing import Awaitable, Callable, Optional

from letterdrop_bot.common.state import ChatEvent


MessageHandler = Callable[[ChatEvent], None]
Dispatch = Callable[[ChatEvent], Awaitable[None]]


class ChatConnector:
    """
    One chat platform.

    Subclasses implement run() (connect and keep delivering) and send().
    Inbound messages are normalized to ChatEvent and handed to deliver().
    """

    platform: str = ""

    def __init__(self):
        self._handler: Optional[MessageHandler] = None

    def on_message(self, handler: MessageHandler) -> None:
        self._handler = handler

    def deliver(self, user: str, text: str) -> None:
        if self._handler is None or not user or not text:
            return
        self._handler(ChatEvent(platform=self.platform, user=user, text=text))

    async def run(self) -> None:
        raise NotImplementedError

    async def send(self, text: str) -> None:
        raise NotImplementedError

    async def close(self) -> None:
        pass
