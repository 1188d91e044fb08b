"""Tests for product discovery."""

import aiohttp
import pytest

from candle_watch.rest import ListProductsQuery, ProductsClient, RestError, get_products_by_quote

PRODUCTS_BODY = (
    b'{"products":['
    b'{"product_id":"BTC-USD","base_currency_id":"BTC","quote_currency_id":"USD",'
    b'"product_type":"SPOT","status":"online","trading_disabled":false,"price":"30000.1"},'
    b'{"product_id":"ETH-EUR","base_currency_id":"ETH","quote_currency_id":"EUR"},'
    b'{"product_id":"SOL-USD","base_currency_id":"SOL","quote_currency_id":"USD"}'
    b'],"num_products":"3"}'
)


class RecordingLogger:
    def __init__(self):
        self.infos: list[str] = []
        self.errors: list[str] = []

    def info(self, msg):
        self.infos.append(msg)

    def error(self, msg):
        self.errors.append(msg)


class FakeResponse:
    def __init__(self, status: int, body: bytes):
        self.status = status
        self._body = body

    async def read(self) -> bytes:
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Records GET calls and replies with a canned response."""

    def __init__(self, status: int = 200, body: bytes = PRODUCTS_BODY, error=None):
        self.status = status
        self.body = body
        self.error = error
        self.calls: list[tuple[str, list]] = []
        self.closed = False

    def get(self, url, params=None):
        self.calls.append((url, params))
        if self.error is not None:
            raise self.error
        return FakeResponse(self.status, self.body)

    async def close(self):
        self.closed = True


class TestListProductsQuery:
    def test_empty_query_sends_nothing(self):
        assert ListProductsQuery().to_params() == []

    def test_params_skip_unset_fields(self):
        query = ListProductsQuery(limit=50, product_type="SPOT", product_ids=["BTC-USD", "ETH-USD"])

        assert query.to_params() == [
            ("limit", "50"),
            ("product_type", "SPOT"),
            ("product_ids", "BTC-USD"),
            ("product_ids", "ETH-USD"),
        ]


class TestProductsClient:
    @pytest.mark.asyncio
    async def test_list_products(self):
        session = FakeSession()
        client = ProductsClient(RecordingLogger(), base_url="https://api.test/", session=session)

        products = await client.list_products(ListProductsQuery(limit=10))

        assert [p.product_id for p in products] == ["BTC-USD", "ETH-EUR", "SOL-USD"]
        assert products[0].product_type == "SPOT"
        assert session.calls == [
            ("https://api.test/api/v3/brokerage/market/products", [("limit", "10")])
        ]

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        client = ProductsClient(
            RecordingLogger(), session=FakeSession(status=503, body=b"unavailable")
        )

        with pytest.raises(RestError, match="503"):
            await client.list_products()

    @pytest.mark.asyncio
    async def test_transport_failure_raises(self):
        session = FakeSession(error=aiohttp.ClientConnectionError("refused"))
        client = ProductsClient(RecordingLogger(), session=session)

        with pytest.raises(RestError, match="refused"):
            await client.list_products()

    @pytest.mark.asyncio
    async def test_bad_body_raises(self):
        client = ProductsClient(RecordingLogger(), session=FakeSession(body=b"<html>"))

        with pytest.raises(RestError, match="Invalid products response"):
            await client.list_products()

    @pytest.mark.asyncio
    async def test_close_leaves_borrowed_session_open(self):
        session = FakeSession()
        client = ProductsClient(RecordingLogger(), session=session)

        await client.close()

        assert not session.closed


class TestGetProductsByQuote:
    @pytest.mark.asyncio
    async def test_filters_by_quote_currency(self):
        logger = RecordingLogger()
        client = ProductsClient(logger, session=FakeSession())

        products = await get_products_by_quote(client, "USD")

        assert products == ["BTC-USD", "SOL-USD"]
        assert logger.infos == ["Getting '*-USD' products."]

    @pytest.mark.asyncio
    async def test_failure_yields_empty_list(self):
        logger = RecordingLogger()
        client = ProductsClient(logger, session=FakeSession(status=500, body=b"{}"))

        products = await get_products_by_quote(client, "USD")

        assert products == []
        assert len(logger.errors) == 1
        assert logger.errors[0].startswith("Unable to get products: ")
