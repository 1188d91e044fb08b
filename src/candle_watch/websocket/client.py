"""Single WebSocket session against the Coinbase Advanced Trade feed.

Provides:
- WsClient, which owns the picows connection and (un)subscribes channels
- WsReader, an async iterator over decoded messages in arrival order
- listen(), which drives a MessageSink from a reader until the stream ends
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Callable
from typing import Protocol

from picows import WSCloseCode, WSFrame, WSListener, WSMsgType, WSTransport, ws_connect

from candle_watch.logging import Logger
from candle_watch.time import time_ns
from candle_watch.websocket.messages import (
    Channel,
    Message,
    StreamError,
    decode_message,
    encode_request,
)

DEFAULT_WS_URL = "wss://advanced-trade-ws.coinbase.com"

StreamItem = Message | StreamError


class MessageSink(Protocol):
    """Receives every decoded message (or stream error) of a session."""

    def on_message(self, result: StreamItem) -> None: ...


class RawWsConnection(WSListener):
    """
    Wrapper of WSListener class for PicoWs use.

    Attributes
    ----------
    transport : WSTransport
        Link to underlying API for sending/recieving messages from buffer.

    process_frame : Callable
        Ingests the final payload, process_frame(time, payload).

    on_disconnect : Callable
        Called once the underlying transport is gone.

    final_frame : bytearray
        Holds the message being assembled, may span several fragments.
    """

    def __init__(
        self,
        process_frame: Callable[[int, bytes], None],
        on_disconnect: Callable[[], None],
    ) -> None:
        super().__init__()
        self.transport: WSTransport | None = None
        self.process_frame = process_frame
        self.on_disconnect = on_disconnect

        self.final_frame = bytearray()

    def on_ws_connected(self, transport: WSTransport):
        self.transport = transport

    def on_ws_frame(self, transport: WSTransport, frame: WSFrame):
        if frame.msg_type == WSMsgType.CLOSE:
            transport.send_close(frame.get_close_code())
            transport.disconnect()
            return

        if frame.msg_type not in (
            WSMsgType.TEXT,
            WSMsgType.BINARY,
            WSMsgType.CONTINUATION,
        ):
            return

        self.final_frame += frame.get_payload_as_memoryview()

        if frame.fin:
            self.process_frame(time_ns(), bytes(self.final_frame))
            self.final_frame.clear()

    def on_ws_disconnected(self, transport: WSTransport):
        self.on_disconnect()


class WsReader:
    """Async iterator over decoded messages of one connection.

    Yields a Message for every decoded frame and a StreamError for every
    frame that was an error or could not be decoded. Stops once the
    connection is gone.
    """

    def __init__(self, queue: asyncio.Queue[StreamItem | None]) -> None:
        self._queue = queue
        self._finished = False

    def __aiter__(self) -> WsReader:
        return self

    async def __anext__(self) -> StreamItem:
        if self._finished:
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is None:
            self._finished = True
            raise StopAsyncIteration
        return item


class WsClient:
    QUEUE_MAX_SIZE = 10000

    def __init__(
        self,
        logger: Logger,
        url: str = DEFAULT_WS_URL,
        queue_max_size: int = QUEUE_MAX_SIZE,
    ) -> None:
        """
        Initializes a WebSocket session, not yet connected.

        Parameters
        ----------
        logger : Logger
            Logger instance for logging activities.

        url : str
            The WebSocket endpoint.

        queue_max_size : int
            Decoded messages held before new frames are dropped.
        """
        if queue_max_size <= 0:
            raise ValueError(
                f"Invalid queue size; expected >0 but got {queue_max_size}"
            )

        self.logger = logger
        self.url = url
        self.queue_max_size = queue_max_size

        self._running: bool = False
        self._seq_id: int = 0
        self._ws_client: RawWsConnection | None = None
        # Unbounded so the disconnect marker always fits; the size limit
        # is enforced on frames in _process_frame.
        self._queue: asyncio.Queue[StreamItem | None] = asyncio.Queue()

    @property
    def running(self) -> bool:
        """
        Returns the websocket running state.
        """
        return self._running

    @property
    def seq_id(self) -> int:
        """
        Returns the number of frames received on this connection.
        """
        return self._seq_id

    def _process_frame(self, time: int, payload: bytes) -> None:
        """
        Decodes a complete frame and queues the result.

        Parameters
        ----------
        time : int
            Local receive time in nanoseconds.

        payload : bytes
            The raw WebSocket frame payload.
        """
        self._seq_id += 1

        if self._queue.qsize() >= self.queue_max_size:
            self.logger.warning(f"Queue full, skipping msg {self._seq_id}.")
            return

        try:
            item = decode_message(payload)
        except StreamError as e:
            item = e

        self._queue.put_nowait(item)

    def _on_disconnect(self) -> None:
        if not self._running:
            return
        self._running = False
        self.logger.info(f"Disconnected from '{self.url}'.")
        self._queue.put_nowait(None)

    async def connect(self) -> WsReader:
        """
        Opens the WebSocket connection.

        Returns
        -------
        WsReader
            Reader over every message received on this connection.

        Raises
        ------
        ConnectionError
            If the client is already connected.
        """
        if self._running:
            raise ConnectionError(f"Already connected to '{self.url}'.")

        self.logger.info(f"Connecting to '{self.url}'.")
        self._queue = asyncio.Queue()
        self._seq_id = 0

        (_, self._ws_client) = await ws_connect(
            lambda: RawWsConnection(self._process_frame, self._on_disconnect),
            self.url,
        )
        self._running = True

        return WsReader(self._queue)

    def _send(self, payload: bytes) -> None:
        if not self._running or self._ws_client is None:
            raise ConnectionError("Connection not started yet.")
        self.logger.debug(f"Sending {payload!r}.")
        self._ws_client.transport.send(WSMsgType.TEXT, payload)

    async def subscribe(self, channel: Channel, product_ids: list[str]) -> None:
        """
        Subscribes to a channel, optionally filtered by product ids.

        Raises
        ------
        ConnectionError
            If the client is not connected.
        """
        self._send(encode_request("subscribe", channel, product_ids))
        self.logger.info(f"Subscribed to '{channel}' for {len(product_ids)} products.")

    async def unsubscribe(self, channel: Channel, product_ids: list[str]) -> None:
        """
        Unsubscribes from a channel.

        Raises
        ------
        ConnectionError
            If the client is not connected.
        """
        self._send(encode_request("unsubscribe", channel, product_ids))
        self.logger.info(f"Unsubscribed from '{channel}'.")

    def close(self) -> None:
        """
        Closes the WebSocket connection, ending any active reader.
        """
        if self._ws_client is None or self._ws_client.transport is None:
            return

        self.logger.info(f"Closing connection to '{self.url}'.")

        transport = self._ws_client.transport
        self._ws_client = None
        transport.send_close(WSCloseCode.OK)
        transport.disconnect()
        self._on_disconnect()


async def listen(
    reader: WsReader, sink: MessageSink, logger: Logger | None = None
) -> None:
    """Feeds every item of a reader to a sink, one at a time, until the
    stream ends. A failing sink call is reported and the next item is
    delivered as usual.
    """
    async for item in reader:
        try:
            sink.on_message(item)
        except Exception as exc:
            if logger is not None:
                logger.error(f"Error in message sink: {exc}")
            else:
                print(f"Error in message sink: {exc}", file=sys.stderr)
