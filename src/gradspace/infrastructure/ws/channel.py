"""Real-time channel: one websocket to the backend, reconnecting with backoff."""
from __future__ import annotations

import asyncio
import logging
from typing import Callable

import aiohttp

from gradspace.application.ports.channel import ChannelListener
from gradspace.domain.events.mark_messages_as_seen import MarkMessagesAsSeen
from gradspace.infrastructure.ws.protocol import decode_frame, encode_mark_seen

logger = logging.getLogger(__name__)


def next_delay(current: float, max_delay: float) -> float:
    return min(current * 2, max_delay)


class WebSocketChannel:
    """Implements application.ports.channel.Channel.

    A background task keeps the connection open. Each inbound text frame is
    decoded and handed to every listener; a failing listener is logged and
    does not affect the others.
    """

    def __init__(
        self,
        url: str,
        user_id: str,
        *,
        heartbeat: float = 20.0,
        base_delay: float = 5.0,
        max_delay: float = 30.0,
        max_attempts: int = 5,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._url = url
        self._user_id = user_id
        self._heartbeat = heartbeat
        self._base_delay = base_delay
        self._max_delay = max_delay
        self._max_attempts = max_attempts
        self._session = session
        self._owns_session = session is None
        self._listeners: list[ChannelListener] = []
        self._ws: aiohttp.ClientWebSocketResponse | None = None
        self._task: asyncio.Task[None] | None = None
        self._attempts = 0
        self._delay = base_delay
        self._closing = False
        self.connected = asyncio.Event()

    @property
    def is_connected(self) -> bool:
        return self._ws is not None and not self._ws.closed

    def add_listener(self, listener: ChannelListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    async def start(self) -> None:
        if self._session is None:
            self._session = aiohttp.ClientSession()
        self._closing = False
        self._task = asyncio.create_task(self._run(), name="gradspace-channel")
        logger.info("Channel started for user=%s", self._user_id)

    async def stop(self) -> None:
        self._closing = True
        if self._ws is not None and not self._ws.closed:
            await self._ws.close(code=1000, message=b"Client closed")
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
        logger.info("Channel stopped")

    async def send(self, event: MarkMessagesAsSeen) -> bool:
        ws = self._ws
        if ws is None or ws.closed:
            logger.warning("Channel not connected, dropping %s", type(event).__name__)
            return False
        try:
            await ws.send_str(encode_mark_seen(event))
        except (aiohttp.ClientError, ConnectionError):
            logger.warning("Channel send failed, dropping %s", type(event).__name__, exc_info=True)
            return False
        return True

    def dispatch(self, raw: str | bytes) -> None:
        event = decode_frame(raw)
        if event is None:
            return
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Channel listener failed for %s", type(event).__name__)

    async def _run(self) -> None:
        if self._session is None:
            raise RuntimeError("Channel started without a client session")
        while not self._closing:
            try:
                async with self._session.ws_connect(
                    self._url,
                    params={"userId": self._user_id},
                    heartbeat=self._heartbeat,
                ) as ws:
                    self._on_open(ws)
                    await self._read_loop(ws)
                    logger.warning("Channel disconnected (code=%s)", ws.close_code)
            except (aiohttp.ClientError, OSError):
                logger.exception("Channel connection error")
            finally:
                self._ws = None
                self.connected.clear()

            if self._closing or not await self._wait_before_reconnect():
                return

    def _on_open(self, ws: aiohttp.ClientWebSocketResponse) -> None:
        logger.info("Channel connected to %s", self._url)
        self._ws = ws
        self._attempts = 0
        self._delay = self._base_delay
        self.connected.set()

    async def _read_loop(self, ws: aiohttp.ClientWebSocketResponse) -> None:
        async for msg in ws:
            if msg.type == aiohttp.WSMsgType.TEXT:
                self.dispatch(msg.data)
            elif msg.type == aiohttp.WSMsgType.ERROR:
                logger.error("Channel error: %s", ws.exception())
                break

    async def _wait_before_reconnect(self) -> bool:
        if self._attempts >= self._max_attempts:
            logger.error("Max reconnection attempts reached")
            return False
        self._delay = next_delay(self._delay, self._max_delay)
        self._attempts += 1
        logger.info("Reconnecting in %.1f seconds (attempt %d)", self._delay, self._attempts)
        await asyncio.sleep(self._delay)
        return True
