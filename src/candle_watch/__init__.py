"""Coinbase candle completion watcher."""

from .candles import (
    CompletionReporter as CompletionReporter,
)
from .candles import (
    TrackerSession as TrackerSession,
)
from .candles import (
    UpdateBatchNormalizer as UpdateBatchNormalizer,
)
from .candles import (
    detect_completion as detect_completion,
)
from .logging import (
    Logger as Logger,
)
from .logging import (
    LoggerConfig as LoggerConfig,
)
from .logging import (
    LogLevel as LogLevel,
)
from .watcher import (
    CandleWatcher as CandleWatcher,
)
from .websocket import (
    Candle as Candle,
)
from .websocket import (
    Channel as Channel,
)
from .websocket import (
    WsClient as WsClient,
)

__all__ = [
    # Tracking
    "Candle",
    "CompletionReporter",
    "TrackerSession",
    "UpdateBatchNormalizer",
    "detect_completion",
    # Streaming
    "CandleWatcher",
    "Channel",
    "WsClient",
    # Logging
    "Logger",
    "LoggerConfig",
    "LogLevel",
]
