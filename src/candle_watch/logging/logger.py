"""Buffered asynchronous logger implementation."""

import asyncio
import contextlib
import sys
import traceback

from candle_watch.logging.config import LoggerConfig, LogLevel
from candle_watch.logging.handlers import BaseLogHandler
from candle_watch.time.time import time_iso8601, time_s


class Logger:
    """A simple asynchronous logger that buffers messages and pushes them to
    configured handlers at an appropriate time or based on severity.

    Must be created from within a running event loop.
    """

    def __init__(
        self,
        name: str = "",
        config: LoggerConfig = None,
        handlers: list[BaseLogHandler] | None = None,
    ):
        """Initializes a Logger with specified configuration and handlers.

        Args:
            name (str): Name of the logger. Defaults to an empty string.
            config (LoggerConfig): Configuration settings for the logger (base level, stdout, buffer size, etc.).
            handlers (list[BaseLogHandler], optional): A list of handler objects that inherit from BaseLogHandler.
                Defaults to an empty list if not provided.

        Raises:
            TypeError: If one of the provided handlers does not inherit from BaseLogHandler.
            RuntimeError: If there is no running event loop.

        """
        self._name = name

        self._config = config
        if self._config is None:
            self._config = LoggerConfig()

        self._handlers = handlers
        if self._handlers is None:
            self._handlers = []

        for handler in self._handlers:
            if not isinstance(handler, BaseLogHandler):
                raise TypeError(
                    f"Invalid handler class; expected BaseLogHandler but got {type(handler)}"
                )

        self._buffer: list[str] = []
        self._buffer_start_time_s = time_s()

        self._msg_queue: asyncio.Queue[tuple[str, LogLevel]] = asyncio.Queue()
        self._ev_loop = asyncio.get_running_loop()
        self._is_running = True

        self._log_ingestor_task = self._ev_loop.create_task(self._log_ingestor())

    async def _flush_buffer(self):
        """Flushes the log message buffer to all handlers."""
        if not self._buffer:
            return

        buffer = self._buffer
        self._buffer = []
        self._buffer_start_time_s = time_s()

        if self._config.do_stdout:
            for log_msg in buffer:
                print(log_msg)

        for handler in self._handlers:
            try:
                await handler.push(buffer)
            except Exception:
                traceback.print_exc(file=sys.stderr)

    def _should_flush(self, level: LogLevel | None) -> bool:
        if level is not None and level >= LogLevel.ERROR:
            return True
        if len(self._buffer) >= self._config.buffer_size:
            return True
        return (time_s() - self._buffer_start_time_s) >= self._config.flush_interval_s

    async def _log_ingestor(self):
        """Asynchronous loop that ingests log messages from the queue and flushes
        them based on severity, buffer fullness or age. Checks for new messages
        every 100ms and also responds immediately when messages arrive.
        """
        while True:
            try:
                log_msg, level = await asyncio.wait_for(
                    self._msg_queue.get(),
                    timeout=0.1,
                )
            except TimeoutError:
                if self._should_flush(None):
                    await self._flush_buffer()
                continue

            self._buffer.append(log_msg)
            if self._should_flush(level):
                await self._flush_buffer()

            self._msg_queue.task_done()

    def _process_log(self, level: LogLevel, msg: str):
        """Submits a formatted log message to the queue.

        Args:
            level (LogLevel): The severity level of the message.
            msg (str): The actual log message.

        """
        try:
            log_msg = self._config.str_format % {
                "asctime": time_iso8601(),
                "name": self._name,
                "levelname": level.name,
                "message": msg,
            }
            self._msg_queue.put_nowait((log_msg, level))
        except Exception:
            traceback.print_exc(file=sys.stderr)

    def _log(self, level: LogLevel, msg: str) -> None:
        if self._is_running and self._config.base_level <= level:
            self._process_log(level, msg)

    def debug(self, msg: str) -> None:
        """Send a debug-level log message."""
        self._log(LogLevel.DEBUG, msg)

    def info(self, msg: str) -> None:
        """Send an info-level log message."""
        self._log(LogLevel.INFO, msg)

    def warning(self, msg: str) -> None:
        """Send a warning-level log message."""
        self._log(LogLevel.WARNING, msg)

    def error(self, msg: str) -> None:
        """Send an error-level log message."""
        self._log(LogLevel.ERROR, msg)

    async def shutdown(self):
        """Shuts down the logger, flushing everything still queued or
        buffered and closing the handlers.
        """
        if not self._is_running:
            return

        self._is_running = False
        self._log_ingestor_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._log_ingestor_task

        while not self._msg_queue.empty():
            log_msg, _ = self._msg_queue.get_nowait()
            self._buffer.append(log_msg)

        await self._flush_buffer()

        for handler in self._handlers:
            await handler.aclose()

