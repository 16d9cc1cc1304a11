"""Tests for chat command routing and owner gating."""

from letterdrop_bot.common.state import ChatEvent, Phase

from conftest import OWNER


def msg(text, user="viewer", platform="twitch"):
    return ChatEvent(platform=platform, user=user, text=text)


async def test_owner_starts_game(router, controller, selector, announcer):
    await router.handle(msg("!word", user=OWNER))

    assert controller.game_active
    assert controller.round_active
    assert selector.calls == 1
    assert announcer.texts() == ["🎮 Word game started! Type !guess <word>"]


async def test_owner_match_ignores_case(router, controller):
    await router.handle(msg("!word", user=OWNER.upper()))
    assert controller.game_active


async def test_non_owner_commands_are_ignored(router, controller, selector, announcer):
    for command in ("!word", "!kvt", "!endword", "!endkvt"):
        await router.handle(msg(command))

    assert not controller.game_active
    assert not controller.battle_mode
    assert selector.calls == 0
    assert announcer.messages == []


async def test_endword_stops_game(router, controller, broadcaster, announcer):
    await router.handle(msg("!word", user=OWNER))
    await router.handle(msg("!endword", user=OWNER))

    assert not controller.game_active
    assert controller.round is None
    assert controller.pending_tasks == 0
    assert announcer.texts()[-1] == "🛑 Word game ended."
    assert broadcaster.of_type("word")[-1]["value"] == "WORD GAME ENDED"


async def test_guess_command_goes_to_arbitrator(router, controller, announcer):
    await router.handle(msg("!word", user=OWNER))
    await router.handle(msg("!guess HANGMAN", user="alice", platform="kick"))

    assert controller.round.phase is Phase.ENDED
    assert controller.round.ended_by == "alice"
    assert controller.leaderboard.score_of("alice") == 1


async def test_guess_without_argument_is_silent(router, controller, announcer):
    await router.handle(msg("!word", user=OWNER))
    sent = len(announcer.messages)

    await router.handle(msg("!guess"))
    await router.handle(msg("!guess wrong"))

    assert controller.round_active
    assert len(announcer.messages) == sent


async def test_guess_requires_exact_command(router, controller):
    await router.handle(msg("!word", user=OWNER))
    await router.handle(msg("hangman"))
    await router.handle(msg("!guesshangman"))
    assert controller.round_active


async def test_hint_twice_only_looks_up_once(router, controller, lookup, announcer):
    await router.handle(msg("!word", user=OWNER))
    announcer.messages.clear()

    await router.handle(msg("!hint", user="alice"))
    await router.handle(msg("!hint", user="bob", platform="kick"))

    assert lookup.calls == ["HANGMAN"]
    assert announcer.messages[0] == (None, "💡 Hint: a device for hanging things")
    platform, text = announcer.messages[1]
    assert platform == "kick"
    assert text.startswith("💡 ")


async def test_hint_not_found_still_counts(router, controller, lookup, announcer):
    lookup.answer = None
    await router.handle(msg("!word", user=OWNER))

    await router.handle(msg("!hint"))
    await router.handle(msg("!hint"))

    assert len(lookup.calls) == 1
    assert controller.hints.state.used


async def test_hint_needs_active_round(router, lookup, announcer):
    await router.handle(msg("!hint"))

    assert lookup.calls == []
    assert announcer.messages == []


async def test_myscore_and_leaderboard(router, controller, announcer):
    await router.handle(msg("!gamelb"))
    assert announcer.messages[-1] == ("twitch", "🏆 Leaderboard is empty.")

    controller.leaderboard.award("alice", 2)
    controller.leaderboard.award("bob")

    await router.handle(msg("!myscore", user="alice", platform="kick"))
    assert announcer.messages[-1] == ("kick", "🏅 alice, your score is 2.")

    await router.handle(msg("!gamelb"))
    assert announcer.messages[-1] == ("twitch", "🏆 Game Leaderboard: 1) alice(2) 2) bob(1)")


async def test_battle_commands(router, controller, announcer):
    controller.leaderboard.award("alice", 4)

    await router.handle(msg("!kvt", user=OWNER))
    assert controller.battle_mode
    assert controller.round_active
    assert len(controller.leaderboard) == 0

    await router.handle(msg("!guess hangman", user="bob", platform="kick"))
    await router.handle(msg("!kvtscore"))
    assert announcer.messages[-1] == ("twitch", "⚔️ Battle score: Twitch 0 - 1 Kick")

    await router.handle(msg("!endkvt", user=OWNER))
    assert not controller.battle_mode
    assert announcer.texts()[-1].endswith("⚔️ Battle score: Twitch 0 - 1 Kick")


async def test_plain_chat_is_ignored(router, announcer, selector):
    await router.handle(msg("hello chat"))
    await router.handle(msg("!unknown"))
    await router.handle(msg(""))

    assert announcer.messages == []
    assert selector.calls == 0


class WinningLookup:
    """Someone guesses the word while the hint lookup is still in flight."""

    def __init__(self, router):
        self.router = router
        self.calls = []

    async def fetch_definition(self, word):
        self.calls.append(word)
        await self.router.handle(msg(f"!guess {word}", user="bob"))
        return "a device for hanging things"


async def test_hint_dropped_when_round_won_during_lookup(router, controller, hints, announcer):
    hints.lookup = WinningLookup(router)
    await router.handle(msg("!word", user=OWNER))

    await router.handle(msg("!hint", user="alice"))

    assert hints.lookup.calls == ["HANGMAN"]
    assert controller.round.phase is Phase.ENDED
    assert controller.round.ended_by == "bob"
    assert not any(text.startswith("💡") for text in announcer.texts())
