"""Watches candles for a set of products, reporting each one once it is complete."""

from __future__ import annotations

import asyncio
import contextlib

from candle_watch.candles import CompletionReporter, TrackerSession
from candle_watch.logging import Logger
from candle_watch.websocket import Channel, WsClient, listen


class CandleWatcher:
    """Runs one streaming session: connect, start the listener, subscribe
    to heartbeats and candles, then wait for the stream to end.

    The listener runs as its own task so that messages arriving while the
    subscriptions are still being sent are not lost.
    """

    def __init__(
        self,
        client: WsClient,
        logger: Logger,
        reporter: CompletionReporter | None = None,
    ) -> None:
        self._client = client
        self._logger = logger
        self._reporter = reporter or CompletionReporter(logger=logger)

        self.session: TrackerSession | None = None
        self._listener: asyncio.Task | None = None

    async def start(self, product_ids: list[str]) -> asyncio.Task:
        """Connect, spawn the listener task and subscribe.

        Returns:
            asyncio.Task: The listener task, done once the stream ends.

        Raises:
            RuntimeError: If the watcher is already running.
        """
        if self._listener is not None and not self._listener.done():
            raise RuntimeError("Watcher already running")

        reader = await self._client.connect()
        self.session = TrackerSession(self._reporter)
        self._listener = asyncio.create_task(
            listen(reader, self.session, self._logger), name="candle-listener"
        )

        # Heartbeats keep the connection open while candles are quiet.
        await self._client.subscribe(Channel.HEARTBEATS, [])
        await self._client.subscribe(Channel.CANDLES, product_ids)
        return self._listener

    async def run(self, product_ids: list[str]) -> None:
        """Watch until the stream ends or the watcher is stopped."""
        listener = await self.start(product_ids)
        # wait() leaves a cancelled listener alone but still lets
        # cancellation of run() itself propagate.
        await asyncio.wait([listener])
        if not listener.cancelled() and listener.exception() is not None:
            self._logger.error(f"Candle listener failed: {listener.exception()}")
        self._logger.info(
            f"Candle stream ended after {self.session.processed} updates."
        )

    async def stop(self) -> None:
        """Cancel the listener and close the connection."""
        self._client.close()
        if self._listener is not None and not self._listener.done():
            self._listener.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._listener
