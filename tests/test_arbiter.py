"""Tests for guess arbitration: single winner, scoring, battle credit."""

from letterdrop_bot.common.state import Phase, RejectReason


async def test_correct_guess_wins_round(controller, arbitrator, announcer, broadcaster):
    await controller.start_game()

    result = await arbitrator.submit_guess("twitch", "alice", "hangman")

    assert result.accepted
    assert controller.leaderboard.score_of("alice") == 1
    assert controller.round.phase is Phase.ENDED
    assert controller.round.ended_by == "alice"
    assert announcer.texts() == ["🎉 alice guessed the word correctly!"]
    assert broadcaster.of_type("win") == [{}]
    assert broadcaster.of_type("leaderboard")[-1] == {
        "entries": [{"name": "alice", "score": 1}]
    }
    # solo mode does not push battle scores
    assert broadcaster.of_type("battle") == []


async def test_guess_is_case_insensitive(controller, arbitrator):
    await controller.start_game()
    result = await arbitrator.submit_guess("kick", "bob", "HaNgMaN")
    assert result.accepted


async def test_only_first_correct_guess_scores(controller, arbitrator, announcer):
    await controller.start_game()

    first = await arbitrator.submit_guess("twitch", "alice", "hangman")
    second = await arbitrator.submit_guess("kick", "bob", "hangman")

    assert first.accepted
    assert not second.accepted
    assert second.reason is RejectReason.NO_ACTIVE_ROUND
    assert controller.leaderboard.score_of("bob") == 0
    assert len(announcer.messages) == 1


async def test_guess_after_timeout_is_rejected(controller, arbitrator):
    await controller.start_game()
    controller.on_round_timeout(controller.epoch)

    result = await arbitrator.submit_guess("twitch", "alice", "hangman")

    assert result.reason is RejectReason.NO_ACTIVE_ROUND
    assert controller.round.ended_by is None


async def test_no_round_rejected(controller, arbitrator):
    result = await arbitrator.submit_guess("twitch", "alice", "hangman")
    assert result.reason is RejectReason.NO_ACTIVE_ROUND


async def test_stopped_game_rejected(controller, arbitrator):
    await controller.start_game()
    controller.stop_game()

    result = await arbitrator.submit_guess("twitch", "alice", "hangman")
    assert result.reason is RejectReason.NO_ACTIVE_ROUND


async def test_empty_guess_is_malformed(controller, arbitrator):
    await controller.start_game()
    for text in ("", "   "):
        result = await arbitrator.submit_guess("twitch", "alice", text)
        assert result.reason is RejectReason.MALFORMED_COMMAND
    assert controller.round_active


async def test_wrong_guess_is_incorrect(controller, arbitrator, announcer):
    await controller.start_game()

    result = await arbitrator.submit_guess("twitch", "alice", "hangmen")

    assert result.reason is RejectReason.INCORRECT
    assert controller.round_active
    assert controller.leaderboard.score_of("alice") == 0
    assert announcer.messages == []


async def test_battle_mode_credits_platform(controller, arbitrator, announcer, broadcaster):
    controller.start_battle()
    await controller.start_game()

    result = await arbitrator.submit_guess("kick", "bob", "hangman")

    assert result.accepted
    assert controller.battle.wins("kick") == 1
    assert controller.battle.wins("twitch") == 0
    assert controller.leaderboard.score_of("bob") == 1
    assert controller.round.phase is Phase.ENDED
    assert announcer.texts() == ["⚔️ KICK wins the round! bob guessed the word."]
    assert broadcaster.of_type("battle")[-1] == {"scores": {"twitch": 0, "kick": 1}}
