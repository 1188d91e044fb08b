"""Update records and per-product candle state."""

from __future__ import annotations

import msgspec

from candle_watch.websocket.messages import Candle

# Latest in-progress candle per product id.
CandleState = dict[str, Candle]


class CandleUpdate(msgspec.Struct, frozen=True):
    """A single candle snapshot for one product.

    Attributes:
        product_id: Product the snapshot belongs to.
        data: The candle snapshot.
    """

    product_id: str
    data: Candle

    @classmethod
    def from_candle(cls, candle: Candle) -> CandleUpdate:
        """Wrap a wire candle, which carries its own product id."""
        return cls(product_id=candle.product_id, data=candle)
