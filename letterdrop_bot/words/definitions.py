"""
Definition lookup for !hint.

Dictionary first (dictionaryapi.dev); if it has nothing and an OpenAI key is
configured, ask the LLM for a clue. Returned text never contains the word.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import aiohttp

from letterdrop_bot.game.constants import HINT_MAX_LENGTH
from letterdrop_bot.llm.clues import ClueWriter
from letterdrop_bot.utils.text import clamp, scrub_word

logger = logging.getLogger(__name__)

DICTIONARY_URL = "https://api.dictionaryapi.dev/api/v2/entries/en/{word}"

_TIMEOUT = aiohttp.ClientTimeout(total=5)


def first_definition(data: Any) -> Optional[str]:
    """Pick the first non-empty definition out of a dictionaryapi.dev payload."""
    if not isinstance(data, list):
        return None

    for entry in data:
        if not isinstance(entry, dict):
            continue
        for meaning in entry.get("meanings") or []:
            if not isinstance(meaning, dict):
                continue
            part = meaning.get("partOfSpeech") or ""
            for definition in meaning.get("definitions") or []:
                if not isinstance(definition, dict):
                    continue
                text = definition.get("definition")
                if isinstance(text, str) and text.strip():
                    text = text.strip()
                    return f"({part}) {text}" if part else text
    return None


def tidy_hint(text: str, word: str) -> str:
    return clamp(scrub_word(text, word), HINT_MAX_LENGTH)


class DefinitionLookup:
    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        clue_writer: Optional[ClueWriter] = None,
    ):
        self._session = session
        self._owns_session = session is None
        self.clue_writer = clue_writer

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=_TIMEOUT)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def _dictionary(self, word: str) -> Optional[str]:
        session = await self._get_session()
        try:
            async with session.get(DICTIONARY_URL.format(word=word.lower())) as resp:
                if resp.status == 404:
                    return None
                resp.raise_for_status()
                data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.debug("Dictionary lookup for %r failed: %r", word, e)
            return None

        return first_definition(data)

    async def fetch_definition(self, word: str) -> Optional[str]:
        text = await self._dictionary(word)

        if text is None and self.clue_writer is not None:
            text = await self.clue_writer.write_clue(word)

        if text is None:
            logger.info("No hint available for current word")
            return None

        return tidy_hint(text, word)
