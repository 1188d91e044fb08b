"""Wire-format models for the Coinbase Advanced Trade WebSocket feed.

Inbound frames are decoded into a tagged union keyed on the "channel"
field. Coinbase sends numbers as strings, so decoding runs in lax mode
to coerce them into ints and floats.
"""

from __future__ import annotations

from enum import StrEnum

import msgspec


class Channel(StrEnum):
    """Channels available on the Advanced Trade WebSocket."""

    HEARTBEATS = "heartbeats"
    CANDLES = "candles"
    STATUS = "status"
    TICKER = "ticker"
    LEVEL2 = "level2"
    MARKET_TRADES = "market_trades"
    SUBSCRIPTIONS = "subscriptions"


class StreamError(ConnectionError):
    """An inbound frame that is an error or cannot be decoded."""


class Candle(msgspec.Struct):
    """A single candle snapshot.

    Attributes:
        start: Bucket start, unix seconds aligned to the bucket size.
        high: Highest price in the bucket.
        low: Lowest price in the bucket.
        open: First price in the bucket.
        close: Latest price in the bucket.
        volume: Base volume traded in the bucket.
        product_id: Product the candle belongs to.
    """

    start: int
    high: float
    low: float
    open: float
    close: float
    volume: float
    product_id: str = ""


class CandlesEvent(msgspec.Struct):
    """A group of candle updates, either a snapshot or an update."""

    type: str
    candles: list[Candle] = []


class HeartbeatsEvent(msgspec.Struct):
    """Keepalive tick sent once per second on the heartbeats channel."""

    current_time: str
    heartbeat_counter: int


class SubscriptionsEvent(msgspec.Struct):
    """Current subscriptions, keyed by channel name."""

    subscriptions: dict[str, list[str]]


class StatusProduct(msgspec.Struct):
    """Product status entry."""

    id: str
    product_type: str = ""
    base_currency: str = ""
    quote_currency: str = ""
    status: str = ""


class StatusEvent(msgspec.Struct):
    """A group of product status entries."""

    type: str
    products: list[StatusProduct] = []


class BaseMessage(msgspec.Struct, tag_field="channel"):
    """Common envelope fields.

    Attributes:
        client_id: Client identifier, usually empty.
        timestamp: Server time as an ISO 8601 string.
        sequence_num: Per-connection message sequence number.
    """

    client_id: str = ""
    timestamp: str = ""
    sequence_num: int = 0


class CandlesMessage(BaseMessage, tag="candles"):
    events: list[CandlesEvent] = []


class HeartbeatsMessage(BaseMessage, tag="heartbeats"):
    events: list[HeartbeatsEvent] = []


class SubscriptionsMessage(BaseMessage, tag="subscriptions"):
    events: list[SubscriptionsEvent] = []


class StatusMessage(BaseMessage, tag="status"):
    events: list[StatusEvent] = []


Message = CandlesMessage | HeartbeatsMessage | SubscriptionsMessage | StatusMessage


class ErrorMessage(msgspec.Struct):
    """Error frame, sent without a channel field."""

    type: str
    message: str = ""


class SubscribeRequest(msgspec.Struct):
    """Outbound (un)subscribe request."""

    type: str
    channel: Channel
    product_ids: list[str]


_message_decoder = msgspec.json.Decoder(Message, strict=False)
_error_decoder = msgspec.json.Decoder(ErrorMessage)
_request_encoder = msgspec.json.Encoder()


def decode_message(raw: bytes) -> Message:
    """Decode one inbound frame.

    Args:
        raw: Raw WebSocket frame payload.

    Returns:
        Message: The decoded channel message.

    Raises:
        StreamError: If the frame is an error frame or cannot be decoded.
    """
    try:
        return _message_decoder.decode(raw)
    except msgspec.ValidationError as exc:
        try:
            error = _error_decoder.decode(raw)
        except msgspec.DecodeError:
            raise StreamError(f"Invalid message; {exc}") from exc
        if error.type == "error":
            raise StreamError(error.message) from None
        raise StreamError(f"Invalid message; {exc}") from exc
    except msgspec.DecodeError as exc:
        raise StreamError(f"Malformed message; {exc}") from exc


def encode_request(type: str, channel: Channel, product_ids: list[str]) -> bytes:
    """Encode a subscribe or unsubscribe request.

    Raises:
        ValueError: If type is neither 'subscribe' nor 'unsubscribe'.
    """
    if type not in ("subscribe", "unsubscribe"):
        raise ValueError(
            f"Invalid request type; expected 'subscribe' or 'unsubscribe' but got {type}"
        )
    return _request_encoder.encode(
        SubscribeRequest(type=type, channel=channel, product_ids=product_ids)
    )
