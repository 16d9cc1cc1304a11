from collections import OrderedDict

from letterdrop_bot.game.constants import RECENT_WORDS_LIMIT


class RecentWordSet:
    """Bounded FIFO memory of recently used words."""

    def __init__(self, limit: int = RECENT_WORDS_LIMIT):
        self.limit = limit
        self._words: "OrderedDict[str, None]" = OrderedDict()

    def __contains__(self, word: str) -> bool:
        return word.lower() in self._words

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self):
        return iter(self._words)

    def add(self, word: str) -> None:
        key = word.lower()
        if key in self._words:
            return

        self._words[key] = None
        while len(self._words) > self.limit:
            self._words.popitem(last=False)

    def discard(self, word: str) -> None:
        self._words.pop(word.lower(), None)
