# scripts/check_word_source.py

import asyncio
import sys

from letterdrop_bot.words.definitions import DefinitionLookup
from letterdrop_bot.words.selector import WordSelector
from letterdrop_bot.words.source import WordSource


async def check(rounds: int):
    print("Testing live word pipeline...")
    source = WordSource()
    lookup = DefinitionLookup()
    selector = WordSelector(source)
    try:
        for i in range(1, rounds + 1):
            word = await selector.select_word()
            hint = await lookup.fetch_definition(word)
            print(f"{i}. {word} -> {hint or '(no definition)'}")
    finally:
        await source.close()
        await lookup.close()


if __name__ == "__main__":
    asyncio.run(check(int(sys.argv[1]) if len(sys.argv) > 1 else 3))
