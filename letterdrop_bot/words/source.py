"""
Remote word source.

Behavior:
- Walk a list of public random-word endpoints, first usable answer wins.
- Judge "common enough" through Datamuse frequency tags (f:<per-million>).
- Every network problem is treated as "no result"; nothing here raises.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Sequence

import aiohttp

from letterdrop_bot.game.constants import COMMON_WORD_THRESHOLD
from letterdrop_bot.utils.text import normalize_word

logger = logging.getLogger(__name__)

RANDOM_WORD_SOURCES = (
    "https://random-word-api.herokuapp.com/word?number=1",
    "https://random-word-api.vercel.app/api?words=1",
)

DATAMUSE_URL = "https://api.datamuse.com/words"

_TIMEOUT = aiohttp.ClientTimeout(total=5)
_FETCH_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, ValueError)


def parse_frequency(entry: Any) -> Optional[float]:
    """Pull the f:<number> tag out of one Datamuse result row."""
    if not isinstance(entry, dict):
        return None

    for tag in entry.get("tags") or []:
        if isinstance(tag, str) and tag.startswith("f:"):
            try:
                return float(tag[2:])
            except ValueError:
                return None
    return None


class WordSource:
    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        sources: Sequence[str] = RANDOM_WORD_SOURCES,
        threshold: float = COMMON_WORD_THRESHOLD,
    ):
        self._session = session
        self._owns_session = session is None
        self.sources = tuple(sources)
        self.threshold = threshold

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=_TIMEOUT)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def _get_json(self, url: str, params: Optional[dict] = None) -> Any:
        session = await self._get_session()
        async with session.get(url, params=params) as resp:
            resp.raise_for_status()
            return await resp.json(content_type=None)

    async def fetch_candidate(self) -> Optional[str]:
        """One normalized random word, or None if every endpoint failed."""
        for url in self.sources:
            try:
                data = await self._get_json(url)
            except _FETCH_ERRORS as e:
                logger.debug("Word source %s failed: %r", url, e)
                continue

            raw = data[0] if isinstance(data, list) and data else None
            word = normalize_word(raw if isinstance(raw, str) else None)
            if word:
                return word

        return None

    async def is_common_word(self, word: str) -> bool:
        try:
            data = await self._get_json(
                DATAMUSE_URL,
                params={"sp": word, "md": "f", "max": "1"},
            )
        except _FETCH_ERRORS as e:
            logger.debug("Frequency lookup for %r failed: %r", word, e)
            return False

        if not isinstance(data, list) or not data:
            return False

        freq = parse_frequency(data[0])
        if freq is None:
            return False

        return freq >= self.threshold
