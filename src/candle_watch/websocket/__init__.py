"""Coinbase Advanced Trade WebSocket session and wire models."""

from .client import (
    MessageSink as MessageSink,
)
from .client import (
    WsClient as WsClient,
)
from .client import (
    WsReader as WsReader,
)
from .client import (
    listen as listen,
)
from .messages import (
    Candle as Candle,
)
from .messages import (
    CandlesEvent as CandlesEvent,
)
from .messages import (
    CandlesMessage as CandlesMessage,
)
from .messages import (
    Channel as Channel,
)
from .messages import (
    HeartbeatsMessage as HeartbeatsMessage,
)
from .messages import (
    Message as Message,
)
from .messages import (
    StreamError as StreamError,
)
from .messages import (
    decode_message as decode_message,
)
