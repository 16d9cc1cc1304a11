# letterdrop_bot/game/hints.py

import logging
from typing import Optional, Protocol

from letterdrop_bot.common.state import HintResult, HintState, HintStatus, Round

logger = logging.getLogger(__name__)


class DefinitionProvider(Protocol):
    async def fetch_definition(self, word: str) -> Optional[str]:
        ...


class HintCache:
    """
    One hint per round.

    The first request marks the hint used *before* awaiting the lookup, so a
    second !hint arriving mid-lookup is already refused. A "not found" result
    is cached as None and still counts as the round's hint.
    """

    def __init__(self, lookup: DefinitionProvider):
        self.lookup = lookup
        self.state = HintState()
        self._round: Optional[Round] = None

    def reset(self, round_: Optional[Round] = None) -> None:
        self.state = HintState()
        self._round = round_

    async def get_hint(self, round_: Round) -> HintResult:
        if self._round is None:
            self._round = round_
        elif self._round is not round_:
            raise ValueError("hint requested for a round that is no longer current")

        state = self.state
        if state.used:
            return HintResult(HintStatus.ALREADY_USED, state.cached_text)

        state.used = True
        logger.info("Looking up hint for round %d", round_.epoch)
        text = await self.lookup.fetch_definition(round_.secret_word)

        # A new round may have started while we were waiting; `state` is then
        # an orphan and the new round's hint stays untouched.
        state.cached_text = text
        state.lookup_done = True

        if text is None:
            return HintResult(HintStatus.NOT_FOUND)
        return HintResult(HintStatus.FOUND, text)
