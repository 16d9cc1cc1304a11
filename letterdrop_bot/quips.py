import random

# --- Component word banks for chat flavour lines ---

OPENERS = [
    "Nope",
    "Hold up",
    "Easy there",
    "Nice try",
    "Slow down",
    "Yo",
]

TARGETS = [
    "chat",
    "word nerd",
    "speed typer",
    "letter goblin",
    "champ",
]

ADDONS = {
    "hint_already_used": [
        "the hint for this word is already spent.",
        "one hint per word, that's the deal.",
        "scroll up, the hint is right there.",
        "no second hints, the letters will keep coming.",
    ],

    "hint_not_found": [
        "even the dictionary has no idea what this one means.",
        "no definition for this one, you're on your own.",
        "the dictionary came back empty. Watch the letters.",
    ],

    "battle_over": [
        "the battle is over.",
        "put the keyboards down, it's done.",
        "that's a wrap on this battle.",
    ],
}


def get_quip(category: str) -> str:
    """Random opener + target + a category-specific line."""
    opener = random.choice(OPENERS)
    target = random.choice(TARGETS)
    addon = random.choice(ADDONS.get(category, ["I have no idea what just happened."]))

    return f"{opener}, {target}, {addon}"
