"""Shared fakes and fixtures for letterdrop tests."""

import asyncio
from typing import List, Optional

import pytest

from letterdrop_bot.chat.base import ChatConnector
from letterdrop_bot.game.arbiter import GuessArbitrator
from letterdrop_bot.game.controller import RoundController, RoundTiming
from letterdrop_bot.game.hints import HintCache
from letterdrop_bot.game.router import CommandRouter

OWNER = "streamerdude"

# Long enough that no timer fires during a synchronous test.
SLOW_TIMING = RoundTiming(
    round_duration=600,
    after_reveal_delay=30,
    min_reveal_interval=300,
    first_reveal_delay=300,
    countdown_tick=60,
)


class RecordingBroadcaster:
    def __init__(self):
        self.events = []

    def broadcast(self, event_type, payload=None):
        self.events.append((event_type, payload or {}))

    def of_type(self, event_type):
        return [payload for kind, payload in self.events if kind == event_type]


class ScriptedSelector:
    """Hands out words in order, repeating the last one."""

    def __init__(self, words=("hangman",), gate: Optional[asyncio.Event] = None):
        self.words = list(words)
        self.calls = 0
        self.gate = gate
        self.released: List[str] = []

    async def select_word(self) -> str:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        index = min(self.calls - 1, len(self.words) - 1)
        return self.words[index]

    def release(self, word: str) -> None:
        self.released.append(word)


class CountingLookup:
    def __init__(self, answer: Optional[str] = "a device for hanging things"):
        self.answer = answer
        self.calls: List[str] = []

    async def fetch_definition(self, word: str) -> Optional[str]:
        self.calls.append(word)
        await asyncio.sleep(0)
        return self.answer


class RecordingAnnouncer:
    def __init__(self):
        self.messages = []

    async def say(self, text, platform=None):
        self.messages.append((platform, text))

    def texts(self):
        return [text for _, text in self.messages]


class FakeConnector(ChatConnector):
    def __init__(self, platform):
        super().__init__()
        self.platform = platform
        self.sent = []

    async def run(self):
        await asyncio.Event().wait()

    async def send(self, text):
        self.sent.append(text)


@pytest.fixture
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture
def lookup():
    return CountingLookup()


@pytest.fixture
def announcer():
    return RecordingAnnouncer()


@pytest.fixture
def selector():
    return ScriptedSelector()


@pytest.fixture
def hints(lookup):
    return HintCache(lookup)


@pytest.fixture
async def controller(selector, hints, broadcaster):
    ctl = RoundController(selector, hints, broadcaster, timing=SLOW_TIMING)
    yield ctl
    await ctl.teardown()


@pytest.fixture
def arbitrator(controller, announcer):
    return GuessArbitrator(controller, announcer)


@pytest.fixture
def router(controller, arbitrator, hints, announcer):
    return CommandRouter(controller, arbitrator, hints, announcer, owner=OWNER)
