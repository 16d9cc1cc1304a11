from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Optional, Set, Tuple

from aiohttp import WSMsgType, web

logger = logging.getLogger(__name__)

Snapshot = Callable[[], Iterable[Tuple[str, Dict[str, Any]]]]


def frame(event_type: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {"type": event_type, **(payload or {})}


class OverlayBroadcaster:
    """
    Push channel to the overlay pages.

    broadcast() is synchronous so game transitions stay in one piece; each
    subscriber gets its own queue drained by its WebSocket handler, which
    keeps frames in order per client.
    """

    def __init__(self, snapshot: Optional[Snapshot] = None):
        self.snapshot = snapshot
        self._queues: Set[asyncio.Queue] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._queues)

    def broadcast(self, event_type: str, payload: Optional[Dict[str, Any]] = None) -> None:
        message = frame(event_type, payload)
        for queue in self._queues:
            queue.put_nowait(message)

    def subscribe(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue()
        if self.snapshot is not None:
            for event_type, payload in self.snapshot():
                queue.put_nowait(frame(event_type, payload))
        self._queues.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        self._queues.discard(queue)


async def _pump(ws: web.WebSocketResponse, queue: asyncio.Queue) -> None:
    while True:
        message = await queue.get()
        await ws.send_json(message)


def create_app(broadcaster: OverlayBroadcaster, public_dir: Optional[str] = None) -> web.Application:
    app = web.Application()
    app["broadcaster"] = broadcaster

    async def websocket_handler(request: web.Request) -> web.WebSocketResponse:
        ws = web.WebSocketResponse(heartbeat=30)
        await ws.prepare(request)

        queue = broadcaster.subscribe()
        pump = asyncio.create_task(_pump(ws, queue))
        logger.info("Overlay connected (%d total)", broadcaster.subscriber_count)

        try:
            async for msg in ws:
                # The overlay only listens; anything it sends is ignored.
                if msg.type == WSMsgType.ERROR:
                    logger.warning("Overlay socket error: %r", ws.exception())
                    break
        finally:
            broadcaster.unsubscribe(queue)
            pump.cancel()
            await asyncio.gather(pump, return_exceptions=True)
            logger.info("Overlay disconnected (%d left)", broadcaster.subscriber_count)

        return ws

    async def health(request: web.Request) -> web.Response:
        return web.json_response({"ok": True, "overlays": broadcaster.subscriber_count})

    app.router.add_get("/ws", websocket_handler)
    app.router.add_get("/health", health)

    if public_dir:
        static_dir = Path(public_dir)
        if static_dir.is_dir():
            index = static_dir / "index.html"

            async def root(request: web.Request) -> web.StreamResponse:
                if index.exists():
                    return web.FileResponse(index)
                raise web.HTTPNotFound()

            app.router.add_get("/", root)
            app.router.add_static("/", static_dir, show_index=False)
        else:
            logger.warning("Static dir %s not found, serving WebSocket only", static_dir)

    return app


async def start_server(app: web.Application, host: str, port: int) -> web.AppRunner:
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    logger.info("Overlay server running on http://%s:%d", host, port)
    return runner
