"""Tests for recent-word memory, the word selector and the word source helpers."""

from letterdrop_bot.words.recent import RecentWordSet
from letterdrop_bot.words.selector import WordSelector
from letterdrop_bot.words.source import parse_frequency


class FakeSource:
    def __init__(self, candidates, common=None):
        self.candidates = list(candidates)
        self.common = set(common) if common is not None else None
        self.fetches = 0
        self.frequency_checks = []

    async def fetch_candidate(self):
        self.fetches += 1
        if not self.candidates:
            return None
        return self.candidates.pop(0)

    async def is_common_word(self, word):
        self.frequency_checks.append(word)
        return self.common is None or word in self.common


# ---------------------------------------------------------------------------
# RecentWordSet
# ---------------------------------------------------------------------------

class TestRecentWordSet:
    def test_never_exceeds_limit(self):
        recent = RecentWordSet()
        for i in range(120):
            recent.add(f"word{i}")
            assert len(recent) <= 50

    def test_51st_insert_evicts_oldest(self):
        recent = RecentWordSet()
        for i in range(50):
            recent.add(f"word{i}")
        assert "word0" in recent

        recent.add("word50")

        assert len(recent) == 50
        assert "word0" not in recent
        assert "word1" in recent
        assert "word50" in recent

    def test_duplicate_does_not_grow(self):
        recent = RecentWordSet(limit=3)
        recent.add("apple")
        recent.add("APPLE")
        assert len(recent) == 1
        assert "Apple" in recent

    def test_discard_forgets_word(self):
        recent = RecentWordSet()
        recent.add("garden")
        recent.add("bridge")

        recent.discard("GARDEN")
        recent.discard("absent")

        assert "garden" not in recent
        assert list(recent) == ["bridge"]


# ---------------------------------------------------------------------------
# WordSelector
# ---------------------------------------------------------------------------

class TestWordSelector:
    async def test_returns_first_valid_candidate(self):
        source = FakeSource(["cat", "elephantine", "Planet!"])
        selector = WordSelector(source, is_clean=lambda w: True)

        word = await selector.select_word()

        assert word == "planet"
        assert "planet" in selector.recent

    async def test_skips_dirty_uncommon_and_recent_words(self):
        source = FakeSource(
            ["badword", "obscure", "garden", "bridge"],
            common={"badword", "garden", "bridge"},
        )
        selector = WordSelector(source, is_clean=lambda w: w != "badword")
        selector.recent.add("garden")

        assert await selector.select_word() == "bridge"
        # dirty and recent words never reach the frequency oracle
        assert source.frequency_checks == ["obscure", "bridge"]

    async def test_falls_back_after_attempts_exhausted(self):
        source = FakeSource([])
        selector = WordSelector(source, is_clean=lambda w: True, attempts=6)

        word = await selector.select_word()

        assert word == "streamer"
        assert source.fetches == 6
        assert "streamer" in selector.recent

    async def test_uncommon_words_consume_attempts(self):
        source = FakeSource(["garden"] * 10, common=set())
        selector = WordSelector(source, is_clean=lambda w: True, attempts=3)

        assert await selector.select_word() == "streamer"
        assert len(source.frequency_checks) == 3

    async def test_selected_words_are_not_repeated(self):
        source = FakeSource(["garden", "garden", "bridge"])
        selector = WordSelector(source, is_clean=lambda w: True)

        first = await selector.select_word()
        second = await selector.select_word()

        assert (first, second) == ("garden", "bridge")

    async def test_released_word_can_be_picked_again(self):
        source = FakeSource(["garden", "garden"])
        selector = WordSelector(source, is_clean=lambda w: True)

        first = await selector.select_word()
        selector.release(first)

        assert "garden" not in selector.recent
        assert await selector.select_word() == "garden"
        assert source.fetches == 2


def test_parse_frequency():
    assert parse_frequency({"word": "garden", "tags": ["f:23.45"]}) == 23.45
    assert parse_frequency({"word": "garden", "tags": ["syn"]}) is None
    assert parse_frequency({"word": "garden"}) is None
    assert parse_frequency({"tags": ["f:abc"]}) is None
    assert parse_frequency(None) is None
