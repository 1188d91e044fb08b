"""Command line entry point.

Loads the configuration (creating a default one when missing), discovers
the products to watch and prints every finished candle until the stream
ends or the process is interrupted.
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from candle_watch import config as app_config
from candle_watch.config import AppConfig, ConfigError
from candle_watch.logging import FileLogHandler, Logger, LoggerConfig
from candle_watch.rest import ProductsClient, get_products_by_quote
from candle_watch.watcher import CandleWatcher
from candle_watch.websocket import WsClient


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="candle-watch",
        description="Report Coinbase candles as they complete",
    )
    parser.add_argument("--config", default=app_config.DEFAULT_CONFIG_PATH)
    parser.add_argument(
        "--products",
        nargs="+",
        default=None,
        help="Watch these product ids instead of discovering them",
    )
    parser.add_argument("--quote", default=None, help="Override the quote currency")
    return parser.parse_args(argv)


def load_config(path: str) -> AppConfig:
    """Load the configuration, exiting with status 1 if it cannot be used.

    A default file is written when none exists, so the user can fill it in.
    """
    try:
        return app_config.load(path)
    except ConfigError as err:
        print("Could not load configuration file.")
        if app_config.exists(path):
            print(f"File exists, {err}")
            sys.exit(1)

    try:
        app_config.create_default(path)
    except ConfigError as err:
        print(f"Unable to create configuration file, {err}")
        sys.exit(1)
    print("Empty configuration file created, please update it.")
    sys.exit(1)


def make_logger(config: AppConfig) -> Logger:
    handlers = []
    if config.logging.log_file:
        handlers.append(FileLogHandler(config.logging.log_file))
    return Logger(
        name="candle_watch",
        config=LoggerConfig(base_level=config.logging.log_level),
        handlers=handlers,
    )


async def run(config: AppConfig, products: list[str] | None = None) -> None:
    """Discover products and watch their candles.

    Failures are logged before being raised again.
    """
    try:
        logger = make_logger(config)
    except OSError as err:
        print(f"Unable to open log file, {err}")
        raise
    watcher_config = config.watcher
    ws_client = WsClient(
        logger,
        url=watcher_config.ws_url,
        queue_max_size=watcher_config.queue_size,
    )
    watcher = CandleWatcher(ws_client, logger)

    try:
        if not products:
            products = list(watcher_config.product_ids)
        if not products:
            rest_client = ProductsClient(logger, base_url=watcher_config.rest_url)
            try:
                products = await get_products_by_quote(
                    rest_client, watcher_config.quote_currency
                )
            finally:
                await rest_client.close()
        print(f"Obtained {len(products)} products.")

        await watcher.run(products)
    except asyncio.CancelledError:
        logger.info("Candle watcher interrupted, shutting down")
        raise
    except Exception as exc:
        logger.error(f"Candle watcher failed: {exc}")
        raise
    finally:
        await watcher.stop()
        await logger.shutdown()


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    config = load_config(args.config)
    if args.quote:
        config.watcher.quote_currency = args.quote

    try:
        asyncio.run(run(config, args.products))
    except KeyboardInterrupt:
        pass
    except Exception:
        sys.exit(1)


if __name__ == "__main__":
    main()
