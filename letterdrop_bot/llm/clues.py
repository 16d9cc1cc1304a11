import logging
from typing import Optional

from openai import AsyncOpenAI

from letterdrop_bot.config import OPENAI_API_KEY

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """
You write hints for a live-stream word guessing game.
Viewers see the secret word with most letters hidden and race to type it.

You will receive the secret word. Reply with ONE short clue sentence.

HARD RESTRICTIONS:
* DO NOT say the word, any form of it, or any substring longer than 2 letters.
* DO NOT give letter counts, spelling patterns, rhymes, or "starts with" clues.
* Max ~20 words. No lists, no quotes, no emojis.

Describe what the word means or where you would run into it.
"""


class ClueWriter:
    """LLM-backed fallback clue for words the dictionary doesn't know."""

    def __init__(self, api_key: Optional[str] = OPENAI_API_KEY, model: str = "gpt-4.1-mini"):
        self.model = model
        self._client = AsyncOpenAI(api_key=api_key) if api_key else None

    @property
    def enabled(self) -> bool:
        return self._client is not None

    async def write_clue(self, word: str) -> Optional[str]:
        if self._client is None:
            return None

        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": f"WORD: {word.lower()}"},
                ],
                max_tokens=60,
                temperature=0.7,
                timeout=10,
            )
        except Exception as e:
            logger.warning("Clue generation failed for %r: %r", word, e)
            return None

        text = (response.choices[0].message.content or "").strip()
        return text or None
