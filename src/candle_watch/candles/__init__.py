"""Candle completion tracking."""

from .detector import (
    detect_completion as detect_completion,
)
from .models import (
    CandleState as CandleState,
)
from .models import (
    CandleUpdate as CandleUpdate,
)
from .normalizer import (
    UpdateBatchNormalizer as UpdateBatchNormalizer,
)
from .reporter import (
    CompletionReporter as CompletionReporter,
)
from .tracker import (
    TrackerSession as TrackerSession,
)
