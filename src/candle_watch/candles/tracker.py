"""Per-product candle completion tracking."""

from candle_watch.candles.detector import detect_completion
from candle_watch.candles.models import CandleState
from candle_watch.candles.normalizer import UpdateBatchNormalizer
from candle_watch.candles.reporter import CompletionReporter
from candle_watch.websocket.client import StreamItem


class TrackerSession:
    """Tracks the in-progress candle of every product seen on one stream
    and reports each candle once a newer one replaces it.

    Messages must be delivered one at a time; the session holds no lock.
    """

    def __init__(
        self,
        reporter: CompletionReporter,
        normalizer: UpdateBatchNormalizer | None = None,
    ) -> None:
        """Initializes an empty session.

        Args:
            reporter (CompletionReporter): Sink for finished candles and errors.
            normalizer (UpdateBatchNormalizer, optional): Picks the update to
                apply from each message.

        """
        self._reporter = reporter
        self._normalizer = normalizer or UpdateBatchNormalizer()

        # Total candle updates seen, applied or not.
        self.processed: int = 0
        self.candles: CandleState = {}

    def on_message(self, result: StreamItem) -> None:
        """Handles one decoded message or stream error."""
        if isinstance(result, Exception):
            self._reporter.report_error(result)
            return

        seen, update = self._normalizer.normalize(result)
        self.processed += seen
        if update is None:
            return

        current, completed = detect_completion(
            self.candles.get(update.product_id), update.data
        )
        self.candles[update.product_id] = current

        if completed is not None:
            self._reporter.report(self.processed, update.product_id, completed.start)
