"""Advanced Trade REST helpers."""

from .products import (
    ListProductsQuery as ListProductsQuery,
)
from .products import (
    Product as Product,
)
from .products import (
    ProductsClient as ProductsClient,
)
from .products import (
    RestError as RestError,
)
from .products import (
    get_products_by_quote as get_products_by_quote,
)
