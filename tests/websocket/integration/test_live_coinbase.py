"""Live Coinbase Advanced Trade integration tests.

Run with: pytest tests/websocket/integration/test_live_coinbase.py --run-live
"""

from __future__ import annotations

import asyncio

import pytest

from candle_watch.logging import Logger, LoggerConfig
from candle_watch.rest import ProductsClient, get_products_by_quote
from candle_watch.websocket import CandlesMessage, Channel, HeartbeatsMessage, WsClient


@pytest.mark.live
@pytest.mark.asyncio
async def test_live_candles_and_heartbeats(request) -> None:
    timeout_s = request.config.getoption("--live-timeout")
    logger = Logger(name="live", config=LoggerConfig(do_stdout=False))
    client = WsClient(logger)
    seen: set[type] = set()

    try:
        reader = await client.connect()
        await client.subscribe(Channel.HEARTBEATS, [])
        await client.subscribe(Channel.CANDLES, ["BTC-USD"])

        async def _collect() -> None:
            async for item in reader:
                assert not isinstance(item, Exception), item
                seen.add(type(item))
                if {CandlesMessage, HeartbeatsMessage} <= seen:
                    return

        await asyncio.wait_for(_collect(), timeout=timeout_s)
    finally:
        client.close()
        await logger.shutdown()

    assert CandlesMessage in seen
    assert HeartbeatsMessage in seen


@pytest.mark.live
@pytest.mark.asyncio
async def test_live_usd_products() -> None:
    logger = Logger(name="live", config=LoggerConfig(do_stdout=False))
    client = ProductsClient(logger)
    try:
        products = await get_products_by_quote(client, "USD")
    finally:
        await client.close()
        await logger.shutdown()

    assert "BTC-USD" in products
    assert all(product.endswith("-USD") for product in products)
