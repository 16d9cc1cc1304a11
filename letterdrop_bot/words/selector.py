"""
Word selector (anti-repeat, never fails).

Behavior:
- Ask the word source for a candidate, a bounded number of times
- Candidate must be 5-9 letters, clean, common, and not recently used
- Source / oracle failures just burn an attempt
- Out of attempts -> guaranteed fallback word
- Whatever is returned goes into recent-word memory
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from letterdrop_bot.game.constants import (
    FALLBACK_WORD,
    MAX_WORD_LEN,
    MIN_WORD_LEN,
    WORD_FETCH_ATTEMPTS,
)
from letterdrop_bot.utils.text import normalize_word
from letterdrop_bot.words.profanity import is_clean as default_is_clean
from letterdrop_bot.words.recent import RecentWordSet
from letterdrop_bot.words.source import WordSource

logger = logging.getLogger(__name__)


class WordSelector:
    def __init__(
        self,
        source: WordSource,
        recent: Optional[RecentWordSet] = None,
        is_clean: Callable[[str], bool] = default_is_clean,
        attempts: int = WORD_FETCH_ATTEMPTS,
        fallback: str = FALLBACK_WORD,
    ):
        self.source = source
        self.recent = recent if recent is not None else RecentWordSet()
        self.is_clean = is_clean
        self.attempts = attempts
        self.fallback = fallback
        # Serialize picks so two overlapping rounds can't draw the same word
        self._lock = asyncio.Lock()

    def _acceptable_shape(self, word: str) -> bool:
        return (
            MIN_WORD_LEN <= len(word) <= MAX_WORD_LEN
            and word.isalpha()
            and word not in self.recent
            and self.is_clean(word)
        )

    async def _try_once(self) -> Optional[str]:
        word = normalize_word(await self.source.fetch_candidate())
        if not word or not self._acceptable_shape(word):
            return None

        if not await self.source.is_common_word(word):
            logger.debug("Rejected uncommon word %r", word)
            return None

        return word

    async def select_word(self) -> str:
        async with self._lock:
            for attempt in range(1, self.attempts + 1):
                word = await self._try_once()
                if word:
                    logger.info("Selected word after %d attempt(s)", attempt)
                    break
            else:
                logger.warning(
                    "No usable word after %d attempts, using fallback",
                    self.attempts,
                )
                word = self.fallback

            self.recent.add(word)

        return word

    def release(self, word: str) -> None:
        """Forget a picked word that never made it into a round."""
        self.recent.discard(word)
