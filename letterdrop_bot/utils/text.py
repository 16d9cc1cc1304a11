import re
from typing import Optional, Tuple

_NON_LETTERS = re.compile(r"[^a-z]")


def normalize_word(raw: Optional[str]) -> str:
    """Lowercase and drop everything that is not a-z. Used on fetched candidates."""
    if not raw:
        return ""
    return _NON_LETTERS.sub("", raw.lower())


def normalize_guess(text: str) -> str:
    """Guesses compare case-insensitively against the uppercase secret."""
    return text.strip().upper()


def parse_command(text: str) -> Tuple[str, str]:
    """
    Split a chat line into (command, first argument).
    "!guess hangman extra" -> ("!guess", "hangman")
    Non-command text yields ("", "").
    """
    parts = text.strip().split()
    if not parts or not parts[0].startswith("!"):
        return "", ""

    command = parts[0].lower()
    argument = parts[1] if len(parts) > 1 else ""
    return command, argument


def scrub_word(text: str, word: str, mask_char: str = "_") -> str:
    """Replace every case-insensitive occurrence of `word` in `text` with a mask."""
    if not word:
        return text
    pattern = re.compile(re.escape(word), re.IGNORECASE)
    return pattern.sub(mask_char * len(word), text)


def clamp(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 1].rstrip() + "…"
