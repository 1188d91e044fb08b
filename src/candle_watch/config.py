"""TOML configuration for the candle watcher."""

from __future__ import annotations

import os

import msgspec

from candle_watch.logging import LogLevel
from candle_watch.logging.handlers.file import LOG_FILE_SUFFIX
from candle_watch.rest.products import DEFAULT_REST_URL
from candle_watch.websocket.client import DEFAULT_WS_URL

DEFAULT_CONFIG_PATH = "config.toml"


class ConfigError(Exception):
    """The configuration file is missing, unreadable or invalid."""


class WatcherConfig(msgspec.Struct, forbid_unknown_fields=True):
    """Settings for discovery and streaming.

    Attributes:
        quote_currency: Products quoted in this currency are watched.
        product_ids: Explicit products to watch; skips discovery when set.
        ws_url: WebSocket endpoint.
        rest_url: REST base url used for discovery.
        queue_size: Decoded messages held before new frames are dropped.
    """

    quote_currency: str = "USD"
    product_ids: list[str] = []
    ws_url: str = DEFAULT_WS_URL
    rest_url: str = DEFAULT_REST_URL
    queue_size: int = 10000

    def __post_init__(self) -> None:
        if not self.quote_currency:
            raise ValueError("Invalid quote_currency; expected a non-empty string")
        if self.queue_size <= 0:
            raise ValueError(
                f"Invalid queue_size; expected >0 but got {self.queue_size}"
            )


class LoggingConfig(msgspec.Struct, forbid_unknown_fields=True):
    """Settings for the logger.

    Attributes:
        level: Name of the minimum log level.
        log_file: Optional '.txt' file receiving a copy of every log line.
    """

    level: str = "INFO"
    log_file: str = ""

    def __post_init__(self) -> None:
        if self.level.upper() not in LogLevel.__members__:
            raise ValueError(
                f"Invalid level; expected one of {list(LogLevel.__members__)} but got {self.level}"
            )
        if self.log_file and not self.log_file.endswith(LOG_FILE_SUFFIX):
            raise ValueError(
                f"Invalid log_file; expected a path ending with '{LOG_FILE_SUFFIX}' but got {self.log_file}"
            )

    @property
    def log_level(self) -> LogLevel:
        return LogLevel[self.level.upper()]


class AppConfig(msgspec.Struct, forbid_unknown_fields=True):
    watcher: WatcherConfig = msgspec.field(default_factory=WatcherConfig)
    logging: LoggingConfig = msgspec.field(default_factory=LoggingConfig)


def exists(path: str = DEFAULT_CONFIG_PATH) -> bool:
    """Check whether a configuration file is present."""
    return os.path.isfile(path)


def load(path: str = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Read and validate a configuration file.

    Raises:
        ConfigError: If the file cannot be read or does not hold a valid
            configuration.
    """
    try:
        with open(path, "rb") as file:
            raw = file.read()
    except OSError as exc:
        raise ConfigError(f"Unable to read '{path}'; {exc}") from exc

    try:
        return msgspec.toml.decode(raw, type=AppConfig)
    except msgspec.DecodeError as exc:
        raise ConfigError(f"Invalid configuration in '{path}'; {exc}") from exc


def create_default(path: str = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Write a configuration file holding the defaults.

    Raises:
        ConfigError: If the file already exists or cannot be written.
    """
    if exists(path):
        raise ConfigError(f"Refusing to overwrite existing '{path}'")

    config = AppConfig()
    directory = os.path.dirname(path)
    try:
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "wb") as file:
            file.write(msgspec.toml.encode(config))
    except OSError as exc:
        raise ConfigError(f"Unable to write '{path}'; {exc}") from exc
    return config
