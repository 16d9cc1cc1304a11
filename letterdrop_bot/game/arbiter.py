# letterdrop_bot/game/arbiter.py

import logging
from typing import Optional, Protocol

from letterdrop_bot.common.state import GuessResult, RejectReason
from letterdrop_bot.game import reveal
from letterdrop_bot.game.constants import EVENT_WIN
from letterdrop_bot.game.controller import RoundController

logger = logging.getLogger(__name__)


class Announcer(Protocol):
    async def say(self, text: str, platform: Optional[str] = None) -> None:
        ...


def win_message(user: str, platform: str, battle_mode: bool) -> str:
    if battle_mode:
        return f"⚔️ {platform.upper()} wins the round! {user} guessed the word."
    return f"🎉 {user} guessed the word correctly!"


class GuessArbitrator:
    """
    First correct guess wins the round.

    There is no lock: the check, the end-guard claim and the scoring all run
    in one synchronous stretch on the event loop, so two correct guesses (or a
    guess and the timeout) can never both get through.
    """

    def __init__(self, controller: RoundController, announcer: Announcer):
        self.controller = controller
        self.announcer = announcer

    def judge(self, platform: str, user: str, text: str) -> GuessResult:
        controller = self.controller
        round_ = controller.round

        if not controller.game_active or not controller.round_active:
            return GuessResult.rejected(RejectReason.NO_ACTIVE_ROUND)

        if not text or not text.strip():
            return GuessResult.rejected(RejectReason.MALFORMED_COMMAND)

        if not reveal.check(round_, text):
            return GuessResult.rejected(RejectReason.INCORRECT)

        if not controller.end_round(winner=user):
            # Someone (or the clock) got there first.
            return GuessResult.rejected(RejectReason.NO_ACTIVE_ROUND)

        controller.leaderboard.award(user)
        if controller.battle_mode:
            controller.battle.award(platform)

        controller.publish_scores()
        controller.broadcaster.broadcast(EVENT_WIN, {})

        logger.info("%s (%s) won round %d", user, platform, round_.epoch)
        return GuessResult.ok()

    async def submit_guess(self, platform: str, user: str, text: str) -> GuessResult:
        battle_mode = self.controller.battle_mode
        result = self.judge(platform, user, text)

        if result.accepted:
            await self.announcer.say(win_message(user, platform, battle_mode))

        return result
