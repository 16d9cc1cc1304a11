# letterdrop_bot/game/reveal.py

import random
from typing import List, Optional

from letterdrop_bot.common.state import Phase, Round
from letterdrop_bot.game.constants import HIDDEN
from letterdrop_bot.utils.text import normalize_guess


def new_round(word: str, epoch: int = 0) -> Round:
    """
    Build a fresh round for `word`.
    First and last letters start revealed, everything in between is hidden.
    Example: HANGMAN -> H _ _ _ _ _ N
    """
    secret = word.upper()
    mask = [HIDDEN] * len(secret)
    if secret:
        mask[0] = secret[0]
        mask[-1] = secret[-1]

    return Round(
        secret_word=secret,
        mask=mask,
        phase=Phase.ACTIVE,
        epoch=epoch,
    )


def hidden_positions(round_: Round) -> List[int]:
    return [i for i, ch in enumerate(round_.mask) if ch == HIDDEN]


def reveal_random(round_: Round, rng: Optional[random.Random] = None) -> Optional[int]:
    """Reveal one hidden letter; returns its index, or None if nothing was hidden."""
    hidden = hidden_positions(round_)
    if not hidden:
        return None

    index = (rng or random).choice(hidden)
    round_.mask[index] = round_.secret_word[index]
    return index


def reveal_all(round_: Round) -> None:
    round_.mask = list(round_.secret_word)


def render(round_: Round) -> str:
    return " ".join(round_.mask)


def mask_flags(round_: Round) -> List[bool]:
    return [ch != HIDDEN for ch in round_.mask]


def is_fully_revealed(round_: Round) -> bool:
    return HIDDEN not in round_.mask


def check(round_: Round, guess: str) -> bool:
    return normalize_guess(guess) == round_.secret_word
