"""Time utilities and timestamp formatting functions."""

from .time import (
    time_iso8601 as time_iso8601,
)
from .time import (
    time_ns as time_ns,
)
from .time import (
    time_s as time_s,
)
