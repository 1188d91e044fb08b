from candle_watch.candles.models import CandleUpdate
from candle_watch.websocket.messages import CandlesMessage, Message


class UpdateBatchNormalizer:
    """
    Reduces one inbound message to the single candle update to apply.

    All candles of all events are flattened and counted, then only the
    most recent one (highest start) is kept. Candles of other products in
    the same message are discarded along with older ones.
    """

    def normalize(self, message: Message) -> tuple[int, CandleUpdate | None]:
        """
        Parameters
        ----------
        message : Message
            A decoded channel message.

        Returns
        -------
        tuple[int, CandleUpdate | None]
            (number of candle updates seen, update to apply or None).
        """
        if not isinstance(message, CandlesMessage) or not message.events:
            return 0, None

        candles = [candle for event in message.events for candle in event.candles]
        if not candles:
            return 0, None

        if len(candles) > 1:
            # Stable, so equal starts keep arrival order.
            candles.sort(key=lambda c: c.start, reverse=True)

        return len(candles), CandleUpdate.from_candle(candles[0])
