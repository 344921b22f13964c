# deals_catalog/services/featured_deals.py

"""Home-page feed of the biggest current discounts."""

import logging

from deals_catalog.config.settings import Settings
from deals_catalog.models.product import Product
from deals_catalog.services.listing_engine import parse_products
from deals_catalog.store.async_calls import run_store_call
from deals_catalog.store.query import CatalogStore, StoreQuery

logger = logging.getLogger("deals_catalog.featured")


class FeaturedDeals:
    """Fetches the top-discount products across all categories."""

    def __init__(
        self,
        store: CatalogStore,
        timeout: float | None = None,
    ) -> None:
        self.store = store
        self.timeout = timeout

    async def fetch(self, limit: int | None = None) -> list[Product]:
        """Return up to *limit* products, biggest discount first.

        Ordering and limiting happen store-side.
        """
        count = Settings.FEATURED_LIMIT if limit is None else limit
        if count < 1:
            msg = f"limit must be >= 1, got {count}"
            raise ValueError(msg)

        query = StoreQuery(
            collection=Settings.PRODUCTS_TABLE,
            projection=Settings.LISTING_COLUMNS,
            order_by=("discount_percentage", True),
            limit=count,
        )
        rows = await run_store_call(
            self.store.select_many, query, self.timeout
        )
        products = parse_products(query.collection, rows)
        logger.info("Loaded %d featured deals", len(products))
        return products
