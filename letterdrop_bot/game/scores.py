from typing import Dict, List, Tuple

from letterdrop_bot.game.constants import LEADERBOARD_SIZE, PLATFORMS


class Leaderboard:
    """In-memory user -> score. Only an explicit reset ever lowers a score."""

    def __init__(self):
        self._scores: Dict[str, int] = {}

    def award(self, user: str, points: int = 1) -> int:
        if points <= 0:
            return self._scores.get(user, 0)
        self._scores[user] = self._scores.get(user, 0) + points
        return self._scores[user]

    def score_of(self, user: str) -> int:
        return self._scores.get(user, 0)

    def top(self, limit: int = LEADERBOARD_SIZE) -> List[Tuple[str, int]]:
        # sorted() is stable, so ties keep first-scored order
        ranked = sorted(self._scores.items(), key=lambda kv: kv[1], reverse=True)
        return ranked[:limit]

    def reset(self) -> None:
        self._scores.clear()

    def __len__(self) -> int:
        return len(self._scores)


class BattleScore:
    """Round wins per chat platform while battle mode is on."""

    def __init__(self):
        self._wins: Dict[str, int] = {p: 0 for p in PLATFORMS}

    def award(self, platform: str) -> int:
        self._wins[platform] = self._wins.get(platform, 0) + 1
        return self._wins[platform]

    def wins(self, platform: str) -> int:
        return self._wins.get(platform, 0)

    def as_dict(self) -> Dict[str, int]:
        return dict(self._wins)

    def reset(self) -> None:
        self._wins = {p: 0 for p in PLATFORMS}
