"""Product discovery over the Advanced Trade public REST API."""

from __future__ import annotations

import aiohttp
import msgspec

from candle_watch.logging import Logger

DEFAULT_REST_URL = "https://api.coinbase.com"
PRODUCTS_PATH = "/api/v3/brokerage/market/products"


class RestError(ConnectionError):
    """A REST request that failed or returned an unusable body."""


class Product(msgspec.Struct):
    """Product descriptor, only the fields in use are decoded."""

    product_id: str
    base_currency_id: str = ""
    quote_currency_id: str = ""
    product_type: str = ""
    status: str = ""
    trading_disabled: bool = False


class ProductsResponse(msgspec.Struct):
    products: list[Product] = []
    num_products: int = 0


class ListProductsQuery(msgspec.Struct):
    """Filters for listing products; unset fields are not sent."""

    limit: int | None = None
    offset: int | None = None
    product_type: str | None = None
    product_ids: list[str] | None = None

    def to_params(self) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = []
        if self.limit is not None:
            params.append(("limit", str(self.limit)))
        if self.offset is not None:
            params.append(("offset", str(self.offset)))
        if self.product_type:
            params.append(("product_type", self.product_type))
        for product_id in self.product_ids or []:
            params.append(("product_ids", product_id))
        return params


class ProductsClient:
    """Lists products from the public market endpoint."""

    def __init__(
        self,
        logger: Logger,
        base_url: str = DEFAULT_REST_URL,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self.logger = logger
        self.base_url = base_url.rstrip("/")
        self._http_session = session
        self._owns_session = session is None
        self._decoder = msgspec.json.Decoder(ProductsResponse, strict=False)

    @property
    def http_session(self) -> aiohttp.ClientSession:
        """Lazily initialize the HTTP session."""
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        return self._http_session

    async def list_products(self, query: ListProductsQuery | None = None) -> list[Product]:
        """Fetch the products matching a query.

        Raises:
            RestError: On transport failure, a non-2xx status or an
                undecodable body.
        """
        query = query or ListProductsQuery()
        url = self.base_url + PRODUCTS_PATH
        try:
            async with self.http_session.get(url, params=query.to_params()) as resp:
                body = await resp.read()
                if resp.status >= 300:
                    raise RestError(
                        f"GET {PRODUCTS_PATH} returned {resp.status}: {body[:200]!r}"
                    )
        except aiohttp.ClientError as exc:
            raise RestError(f"GET {PRODUCTS_PATH} failed; {exc}") from exc

        try:
            return self._decoder.decode(body).products
        except msgspec.DecodeError as exc:
            raise RestError(f"Invalid products response; {exc}") from exc

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None


async def get_products_by_quote(client: ProductsClient, quote_currency: str) -> list[str]:
    """Ids of every product quoted in the given currency.

    Failures are logged and yield an empty list.
    """
    client.logger.info(f"Getting '*-{quote_currency}' products.")
    try:
        products = await client.list_products()
    except RestError as exc:
        client.logger.error(f"Unable to get products: {exc}")
        return []

    return [p.product_id for p in products if p.quote_currency_id == quote_currency]
