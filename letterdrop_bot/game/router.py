# letterdrop_bot/game/router.py

import logging
from typing import Awaitable, Callable, Dict, Optional

from letterdrop_bot.common.state import ChatEvent, HintStatus
from letterdrop_bot.game.arbiter import Announcer, GuessArbitrator
from letterdrop_bot.game.constants import (
    CMD_BATTLE,
    CMD_BATTLE_SCORE,
    CMD_END_BATTLE,
    CMD_END_WORD,
    CMD_GUESS,
    CMD_HINT,
    CMD_LEADERBOARD,
    CMD_MY_SCORE,
    CMD_WORD,
    PLATFORM_KICK,
    PLATFORM_TWITCH,
)
from letterdrop_bot.game.controller import RoundController
from letterdrop_bot.game.hints import HintCache
from letterdrop_bot.quips import get_quip
from letterdrop_bot.utils.text import parse_command

logger = logging.getLogger(__name__)

Handler = Callable[[ChatEvent, str], Awaitable[None]]


def leaderboard_text(controller: RoundController) -> str:
    top = controller.leaderboard.top()
    if not top:
        return "🏆 Leaderboard is empty."

    return "🏆 Game Leaderboard: " + " ".join(
        f"{i}) {name}({score})" for i, (name, score) in enumerate(top, start=1)
    )


def battle_text(controller: RoundController) -> str:
    scores = controller.battle.as_dict()
    return (
        f"⚔️ Battle score: Twitch {scores.get(PLATFORM_TWITCH, 0)}"
        f" - {scores.get(PLATFORM_KICK, 0)} Kick"
    )


class CommandRouter:
    """Turns normalized chat events into game operations."""

    def __init__(
        self,
        controller: RoundController,
        arbitrator: GuessArbitrator,
        hints: HintCache,
        announcer: Announcer,
        owner: str,
    ):
        self.controller = controller
        self.arbitrator = arbitrator
        self.hints = hints
        self.announcer = announcer
        self.owner = (owner or "").strip().lower()

        self._owner_commands: Dict[str, Handler] = {
            CMD_WORD: self._start_word,
            CMD_END_WORD: self._end_word,
            CMD_BATTLE: self._start_battle,
            CMD_END_BATTLE: self._end_battle,
        }
        self._commands: Dict[str, Handler] = {
            CMD_BATTLE_SCORE: self._battle_score,
            CMD_HINT: self._hint,
            CMD_MY_SCORE: self._my_score,
            CMD_LEADERBOARD: self._leaderboard,
            CMD_GUESS: self._guess,
        }

    def is_owner(self, user: str) -> bool:
        return bool(self.owner) and user.strip().lower() == self.owner

    async def handle(self, event: ChatEvent) -> None:
        command, argument = parse_command(event.text)
        if not command:
            return

        handler: Optional[Handler] = self._owner_commands.get(command)
        if handler is not None:
            if not self.is_owner(event.user):
                return
        else:
            handler = self._commands.get(command)
            if handler is None:
                return

        await handler(event, argument)

    async def _reply(self, event: ChatEvent, text: str) -> None:
        await self.announcer.say(text, platform=event.platform)

    # -----------------------------
    # OWNER COMMANDS
    # -----------------------------
    async def _start_word(self, event: ChatEvent, argument: str) -> None:
        logger.info("Word game started by %s", event.user)
        await self.announcer.say("🎮 Word game started! Type !guess <word>")
        await self.controller.start_game()

    async def _end_word(self, event: ChatEvent, argument: str) -> None:
        self.controller.stop_game()
        await self.announcer.say("🛑 Word game ended.")

    async def _start_battle(self, event: ChatEvent, argument: str) -> None:
        self.controller.start_battle()
        await self.announcer.say(
            "⚔️ Twitch vs Kick battle started! First correct !guess wins the round for your platform."
        )
        await self.controller.start_game()

    async def _end_battle(self, event: ChatEvent, argument: str) -> None:
        if not self.controller.battle_mode:
            return
        self.controller.end_battle()
        await self.announcer.say(f"{get_quip('battle_over')} {battle_text(self.controller)}")

    # -----------------------------
    # EVERYONE
    # -----------------------------
    async def _battle_score(self, event: ChatEvent, argument: str) -> None:
        await self._reply(event, battle_text(self.controller))

    async def _my_score(self, event: ChatEvent, argument: str) -> None:
        score = self.controller.leaderboard.score_of(event.user)
        await self._reply(event, f"🏅 {event.user}, your score is {score}.")

    async def _leaderboard(self, event: ChatEvent, argument: str) -> None:
        await self._reply(event, leaderboard_text(self.controller))

    async def _hint(self, event: ChatEvent, argument: str) -> None:
        if not self.controller.round_active:
            return

        round_ = self.controller.round
        result = await self.hints.get_hint(round_)

        if result.status is HintStatus.ALREADY_USED:
            await self._reply(event, f"💡 {get_quip('hint_already_used')}")
            return

        # Round was won, timed out or replaced while the lookup was running.
        if self.controller.round is not round_ or not self.controller.round_active:
            return

        if result.status is HintStatus.NOT_FOUND:
            await self.announcer.say(f"💡 {get_quip('hint_not_found')}")
        else:
            await self.announcer.say(f"💡 Hint: {result.text}")

    async def _guess(self, event: ChatEvent, argument: str) -> None:
        await self.arbitrator.submit_guess(event.platform, event.user, argument)
