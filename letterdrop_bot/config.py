# letterdrop_bot/config.py

import os
from dotenv import load_dotenv

# Load .env file if present (local development)
load_dotenv()


def _seconds(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


OWNER_NAME = os.getenv("OWNER_NAME", "")

# Round timing (seconds)
ROUND_DURATION = _seconds("ROUND_DURATION", 180)
AFTER_REVEAL_DELAY = _seconds("AFTER_REVEAL_DELAY", 30)
MIN_REVEAL_INTERVAL = _seconds("MIN_REVEAL_INTERVAL", 20)
FIRST_REVEAL_DELAY = _seconds("FIRST_REVEAL_DELAY", 10)

# Twitch
TWITCH_BOT_NAME = os.getenv("TWITCH_BOT_NAME")
TWITCH_OAUTH = os.getenv("TWITCH_OAUTH")
TWITCH_CHANNEL = os.getenv("TWITCH_CHANNEL")

# Kick
KICK_CHAT_WS = os.getenv("KICK_CHAT_WS")
KICK_CHATROOM_ID = os.getenv("KICK_CHATROOM_ID")

# Overlay server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
PUBLIC_DIR = os.getenv("PUBLIC_DIR", "public")

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
