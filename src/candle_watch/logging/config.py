"""Logger settings."""

from enum import IntEnum


class LogLevel(IntEnum):
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4


DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


class LoggerConfig:
    """How a Logger filters, formats and batches its lines.

    Args:
        base_level (LogLevel): Lines below this level are discarded.
        do_stdout (bool): Print every flushed line to stdout as well.
        str_format (str): %-style line template. Available keys are
            asctime, levelname, name and message; message is required.
        flush_interval_s (float): Oldest a buffered line may get before
            the buffer is pushed to the handlers.
        buffer_size (int): Buffered line count that forces a push.

    Raises:
        ValueError: If the interval or size is not positive, or the
            template has no message key.
    """

    def __init__(
        self,
        base_level: LogLevel = LogLevel.INFO,
        do_stdout: bool = True,
        str_format: str = DEFAULT_FORMAT,
        flush_interval_s: float = 1.0,
        buffer_size: int = 10000,
    ):
        if flush_interval_s <= 0.0:
            raise ValueError(
                f"Invalid flush interval; expected >0 but got {flush_interval_s}"
            )
        if buffer_size <= 0:
            raise ValueError(f"Invalid buffer size; expected >0 but got {buffer_size}")
        if "%(message)s" not in str_format:
            raise ValueError("Format string must contain '%(message)s' placeholder")

        self.base_level = base_level
        self.do_stdout = do_stdout
        self.str_format = str_format
        self.flush_interval_s = flush_interval_s
        self.buffer_size = buffer_size
