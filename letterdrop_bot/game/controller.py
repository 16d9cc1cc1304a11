# letterdrop_bot/game/controller.py

"""
Round lifecycle.

IDLE --start_round--> ACTIVE --(reveal tick empties mask | timeout | winner)--> ENDED
ENDED --countdown hits 0 while game active--> ACTIVE (next word)
any --stop_game--> IDLE

All transitions run on the one event loop. Timers are asyncio tasks tagged
with the round epoch; every callback re-checks epoch and phase so a tick that
slips past cancellation does nothing.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

from letterdrop_bot import config
from letterdrop_bot.common.state import Phase, Round
from letterdrop_bot.game import reveal
from letterdrop_bot.game.constants import (
    COUNTDOWN_TICK,
    ENDED_TEXT,
    EVENT_BATTLE,
    EVENT_COUNTDOWN,
    EVENT_LEADERBOARD,
    EVENT_WINNER,
    EVENT_WORD,
    WAITING_TEXT,
)
from letterdrop_bot.game.hints import HintCache
from letterdrop_bot.game.scores import BattleScore, Leaderboard

logger = logging.getLogger(__name__)


class Broadcaster(Protocol):
    def broadcast(self, event_type: str, payload: Optional[Dict[str, Any]] = None) -> None:
        ...


class WordPicker(Protocol):
    async def select_word(self) -> str:
        ...

    def release(self, word: str) -> None:
        ...


@dataclass(frozen=True)
class RoundTiming:
    round_duration: float = config.ROUND_DURATION
    after_reveal_delay: float = config.AFTER_REVEAL_DELAY
    min_reveal_interval: float = config.MIN_REVEAL_INTERVAL
    first_reveal_delay: float = config.FIRST_REVEAL_DELAY
    countdown_tick: float = COUNTDOWN_TICK

    def reveal_interval(self, hidden_count: int) -> float:
        """Spread reveals over the round, but never faster than the minimum."""
        if hidden_count <= 0:
            return self.round_duration
        return max(self.round_duration / hidden_count, self.min_reveal_interval)


class RoundController:
    def __init__(
        self,
        selector: WordPicker,
        hints: HintCache,
        broadcaster: Broadcaster,
        timing: Optional[RoundTiming] = None,
        leaderboard: Optional[Leaderboard] = None,
        battle: Optional[BattleScore] = None,
    ):
        self.selector = selector
        self.hints = hints
        self.broadcaster = broadcaster
        self.timing = timing or RoundTiming()
        self.leaderboard = leaderboard or Leaderboard()
        self.battle = battle or BattleScore()

        self.game_active = False
        self.battle_mode = False
        self.round: Optional[Round] = None
        self.epoch = 0

        self.word_text = WAITING_TEXT
        self.winner_name = ""
        self.countdown = 0

        self._tasks: List[asyncio.Task] = []

    # -----------------------------
    # READ-ONLY VIEW
    # -----------------------------
    @property
    def phase(self) -> Phase:
        if self.round is None:
            return Phase.IDLE
        return self.round.phase

    @property
    def round_active(self) -> bool:
        return self.round is not None and self.round.phase is Phase.ACTIVE

    def leaderboard_payload(self) -> Dict[str, Any]:
        return {
            "entries": [
                {"name": name, "score": score}
                for name, score in self.leaderboard.top()
            ]
        }

    def battle_payload(self) -> Dict[str, Any]:
        return {"scores": self.battle.as_dict()}

    def word_payload(self) -> Dict[str, Any]:
        if self.round is None:
            return {"value": self.word_text, "letters": [], "revealed": []}
        return {
            "value": self.word_text,
            "letters": list(self.round.mask),
            "revealed": reveal.mask_flags(self.round),
        }

    def snapshot(self) -> List[Tuple[str, Dict[str, Any]]]:
        """Current display state, replayed to every new overlay subscriber."""
        return [
            (EVENT_WORD, self.word_payload()),
            (EVENT_WINNER, {"name": self.winner_name}),
            (EVENT_COUNTDOWN, {"seconds": self.countdown}),
            (EVENT_LEADERBOARD, self.leaderboard_payload()),
            (EVENT_BATTLE, self.battle_payload()),
        ]

    # -----------------------------
    # DISPLAY HELPERS
    # -----------------------------
    def _send_word(self) -> None:
        if self.round is not None:
            self.word_text = reveal.render(self.round)
        self.broadcaster.broadcast(EVENT_WORD, self.word_payload())

    def _send_winner(self, name: str) -> None:
        self.winner_name = name
        self.broadcaster.broadcast(EVENT_WINNER, {"name": name})

    def _send_countdown(self, seconds: int) -> None:
        self.countdown = seconds
        self.broadcaster.broadcast(EVENT_COUNTDOWN, {"seconds": seconds})

    def publish_scores(self) -> None:
        self.broadcaster.broadcast(EVENT_LEADERBOARD, self.leaderboard_payload())
        if self.battle_mode:
            self.broadcaster.broadcast(EVENT_BATTLE, self.battle_payload())

    # -----------------------------
    # TASK HANDLES
    # -----------------------------
    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._tasks.append(task)
        task.add_done_callback(self._forget)
        return task

    def _forget(self, task: asyncio.Task) -> None:
        if task in self._tasks:
            self._tasks.remove(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Round task crashed", exc_info=task.exception())

    def cancel_timers(self) -> None:
        """Cancel every armed task except the one running this call."""
        current = asyncio.current_task()
        for task in list(self._tasks):
            if task is not current:
                task.cancel()
        self._tasks = [t for t in self._tasks if t is current]

    @property
    def pending_tasks(self) -> int:
        return sum(1 for t in self._tasks if not t.done())

    def _after(self, delay: float, callback: Callable[[int], None], epoch: int) -> asyncio.Task:
        async def fire():
            await asyncio.sleep(delay)
            callback(epoch)

        return self._spawn(fire())

    def _every(self, interval: float, callback: Callable[[int], None], epoch: int) -> asyncio.Task:
        async def loop():
            while self._is_live(epoch):
                await asyncio.sleep(interval)
                callback(epoch)

        return self._spawn(loop())

    def _is_live(self, epoch: int) -> bool:
        return epoch == self.epoch and self.round_active

    # -----------------------------
    # GAME LIFECYCLE
    # -----------------------------
    async def start_game(self) -> None:
        self.game_active = True
        await self.start_round()

    async def start_round(self) -> Optional[Round]:
        """
        Pick a word and run a new round. Returns None if the game was stopped
        or another round started while the word was being picked.
        """
        self.cancel_timers()
        self.epoch += 1
        epoch = self.epoch
        # Outgoing round is dropped now so nobody can win it mid-pick.
        self.round = None

        word = await self.selector.select_word()

        if epoch != self.epoch or not self.game_active:
            logger.info("Discarding picked word, round %d was superseded", epoch)
            self.selector.release(word)
            return None

        self.cancel_timers()
        round_ = reveal.new_round(word, epoch=epoch)
        self.round = round_
        self.hints.reset(round_)

        self._send_word()
        self._send_winner("")
        self._send_countdown(0)

        hidden = len(reveal.hidden_positions(round_))
        interval = self.timing.reveal_interval(hidden)

        self._after(self.timing.first_reveal_delay, self.on_first_reveal, epoch)
        self._every(interval, self.on_reveal_tick, epoch)
        self._after(self.timing.round_duration, self.on_round_timeout, epoch)

        logger.info(
            "Round %d started: %d letters, reveal every %.1fs",
            epoch,
            len(word),
            interval,
        )
        return round_

    def _reveal_one(self, epoch: int) -> None:
        if not self._is_live(epoch):
            return

        reveal.reveal_random(self.round)
        self._send_word()

        if reveal.is_fully_revealed(self.round):
            self.end_round(None)

    def on_first_reveal(self, epoch: int) -> None:
        self._reveal_one(epoch)

    def on_reveal_tick(self, epoch: int) -> None:
        self._reveal_one(epoch)

    def on_round_timeout(self, epoch: int) -> None:
        if not self._is_live(epoch):
            return
        logger.info("Round %d timed out", epoch)
        self.end_round(None)

    def end_round(self, winner: Optional[str] = None) -> bool:
        """
        Idempotent: only the first caller for a round gets the side effects.
        Returns True for that caller, False for everybody after.
        """
        round_ = self.round
        if round_ is None or round_.phase is not Phase.ACTIVE:
            return False

        round_.phase = Phase.ENDED
        round_.ended_by = winner
        self.cancel_timers()

        reveal.reveal_all(round_)
        self._send_word()
        if winner:
            self._send_winner(winner)

        logger.info("Round %d ended, winner=%s", round_.epoch, winner or "-")

        remaining = int(self.timing.after_reveal_delay)
        self._send_countdown(remaining)
        self._spawn(self._run_countdown(round_.epoch, remaining))
        return True

    async def _run_countdown(self, epoch: int, remaining: int) -> None:
        while remaining > 0:
            await asyncio.sleep(self.timing.countdown_tick)
            if epoch != self.epoch:
                return
            remaining -= 1
            self._send_countdown(remaining)

        if self.game_active and epoch == self.epoch:
            await self.start_round()

    def stop_game(self) -> None:
        self.game_active = False
        self.cancel_timers()
        self.epoch += 1

        if self.round is not None and self.round.phase is Phase.ACTIVE:
            self.round.phase = Phase.ENDED
        self.round = None
        self.hints.reset()

        self.word_text = ENDED_TEXT
        self._send_word()
        self._send_winner("")
        self._send_countdown(0)
        logger.info("Word game stopped")

    # -----------------------------
    # BATTLE MODE
    # -----------------------------
    def start_battle(self) -> None:
        self.battle_mode = True
        self.battle.reset()
        self.leaderboard.reset()
        self.broadcaster.broadcast(EVENT_LEADERBOARD, self.leaderboard_payload())
        self.broadcaster.broadcast(EVENT_BATTLE, self.battle_payload())
        logger.info("Battle mode started")

    def end_battle(self) -> None:
        self.battle_mode = False
        logger.info("Battle mode ended: %s", self.battle.as_dict())

    # -----------------------------
    # LIFECYCLE
    # -----------------------------
    def reset(self) -> None:
        self.stop_game()
        self.battle_mode = False
        self.leaderboard.reset()
        self.battle.reset()
        self.word_text = WAITING_TEXT

    async def teardown(self) -> None:
        self.game_active = False
        self.epoch += 1
        tasks = [t for t in self._tasks if t is not asyncio.current_task()]
        self.cancel_timers()
        await asyncio.gather(*tasks, return_exceptions=True)
