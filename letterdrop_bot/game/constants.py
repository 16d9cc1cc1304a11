# letterdrop_bot/game/constants.py

PLATFORM_TWITCH = "twitch"
PLATFORM_KICK = "kick"
PLATFORMS = (PLATFORM_TWITCH, PLATFORM_KICK)

# -----------------------------
# CHAT COMMANDS
# -----------------------------
CMD_WORD = "!word"
CMD_END_WORD = "!endword"
CMD_BATTLE = "!kvt"
CMD_END_BATTLE = "!endkvt"
CMD_BATTLE_SCORE = "!kvtscore"
CMD_HINT = "!hint"
CMD_MY_SCORE = "!myscore"
CMD_LEADERBOARD = "!gamelb"
CMD_GUESS = "!guess"

# -----------------------------
# OVERLAY EVENTS
# -----------------------------
EVENT_WORD = "word"
EVENT_WINNER = "winner"
EVENT_COUNTDOWN = "countdown"
EVENT_LEADERBOARD = "leaderboard"
EVENT_BATTLE = "battle"
EVENT_WIN = "win"

WAITING_TEXT = "WAITING FOR !WORD"
ENDED_TEXT = "WORD GAME ENDED"

HIDDEN = "_"
LEADERBOARD_SIZE = 5
COUNTDOWN_TICK = 1.0

# -----------------------------
# WORD SELECTION
# -----------------------------
MIN_WORD_LEN = 5
MAX_WORD_LEN = 9
RECENT_WORDS_LIMIT = 50
WORD_FETCH_ATTEMPTS = 8
COMMON_WORD_THRESHOLD = 3.5
FALLBACK_WORD = "streamer"

HINT_MAX_LENGTH = 200
