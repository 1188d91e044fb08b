from candle_watch.websocket.messages import Candle


def detect_completion(
    current: Candle | None, incoming: Candle
) -> tuple[Candle, Candle | None]:
    """
    Decide whether an incoming snapshot closes the current candle.

    The incoming snapshot always becomes the new current candle. The old
    one is returned as completed only when the incoming candle starts
    strictly later; equal or older starts overwrite it silently.

    Parameters
    ----------
    current : Candle | None
        The stored in-progress candle, None on first sighting.

    incoming : Candle
        The newly received snapshot.

    Returns
    -------
    tuple[Candle, Candle | None]
        (new current candle, completed candle or None).
    """
    if current is not None and incoming.start > current.start:
        return incoming, current
    return incoming, None
