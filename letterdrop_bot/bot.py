import asyncio
import logging
import signal

from letterdrop_bot import config
from letterdrop_bot.chat.hub import ChatHub
from letterdrop_bot.chat.kick import KickConnector
from letterdrop_bot.chat.twitch import TwitchConnector
from letterdrop_bot.game.arbiter import GuessArbitrator
from letterdrop_bot.game.controller import RoundController, RoundTiming
from letterdrop_bot.game.hints import HintCache
from letterdrop_bot.game.router import CommandRouter
from letterdrop_bot.llm.clues import ClueWriter
from letterdrop_bot.overlay.server import OverlayBroadcaster, create_app, start_server
from letterdrop_bot.words.definitions import DefinitionLookup
from letterdrop_bot.words.selector import WordSelector
from letterdrop_bot.words.source import WordSource

logger = logging.getLogger(__name__)


# -----------------------------
# WIRING
# -----------------------------
def build_hub() -> ChatHub:
    hub = ChatHub()

    if config.TWITCH_OAUTH and config.TWITCH_CHANNEL:
        hub.register(TwitchConnector(config.TWITCH_OAUTH, config.TWITCH_CHANNEL))
    else:
        logger.warning("Twitch disabled: TWITCH_OAUTH / TWITCH_CHANNEL not set")

    if config.KICK_CHAT_WS:
        hub.register(KickConnector(config.KICK_CHAT_WS, config.KICK_CHATROOM_ID))
    else:
        logger.warning("Kick disabled: KICK_CHAT_WS not set")

    return hub


async def run() -> None:
    word_source = WordSource()
    clue_writer = ClueWriter()
    definitions = DefinitionLookup(clue_writer=clue_writer if clue_writer.enabled else None)

    broadcaster = OverlayBroadcaster()
    hints = HintCache(definitions)
    controller = RoundController(
        selector=WordSelector(word_source),
        hints=hints,
        broadcaster=broadcaster,
        timing=RoundTiming(),
    )
    broadcaster.snapshot = controller.snapshot

    hub = build_hub()
    arbitrator = GuessArbitrator(controller, hub)
    router = CommandRouter(controller, arbitrator, hints, hub, owner=config.OWNER_NAME)
    hub.on_message(router.handle)

    runner = await start_server(
        create_app(broadcaster, config.PUBLIC_DIR),
        config.HOST,
        config.PORT,
    )
    hub.start()

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:
            # Windows: fall back to KeyboardInterrupt
            pass

    try:
        await stop.wait()
    finally:
        logger.info("Shutting down")
        await controller.teardown()
        await hub.close()
        await runner.cleanup()
        await word_source.close()
        await definitions.close()


# -----------------------------
# ENTRY POINT
# -----------------------------
def main():
    if not config.OWNER_NAME:
        raise ValueError("OWNER_NAME is missing. Add it to .env or environment variables.")

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
