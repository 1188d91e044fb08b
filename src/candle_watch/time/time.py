from datetime import datetime, timezone
from time import (
    time_ns as time_nano,
    time as time_sec,
)


def time_s() -> float:
    """
    Get the current time in seconds since the epoch.

    Returns
    -------
    float
        The current time in seconds.
    """
    return time_sec()


def time_ns() -> int:
    """
    Get the current time in nanoseconds since the epoch.

    Returns
    -------
    int
        The current time in nanoseconds.
    """
    return time_nano()


def time_iso8601(timestamp: float | None = None) -> str:
    """
    Format a unix timestamp (seconds) as an ISO 8601 UTC string with
    millisecond precision, eg "2023-04-04T00:28:50.516Z".

    Parameters
    ----------
    timestamp : float, optional
        Seconds since the epoch, defaults to now.

    Returns
    -------
    str
        The formatted timestamp.
    """
    if timestamp is None:
        timestamp = time_sec()
    dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"
