# deals_catalog/services/product_details.py

"""Product page data: the product itself plus retailer offers."""

import logging

from deals_catalog.config.settings import Settings
from deals_catalog.models.errors import FetchFailed
from deals_catalog.models.product import ProductDetail, RetailerOffer
from deals_catalog.store.async_calls import run_store_call
from deals_catalog.store.query import CatalogStore, StoreQuery

logger = logging.getLogger("deals_catalog.details")


class ProductDetails:
    """Loads a product by slug and joins its retailer offers."""

    def __init__(
        self,
        store: CatalogStore,
        timeout: float | None = None,
    ) -> None:
        self.store = store
        self.timeout = timeout

    async def fetch(self, slug: str) -> ProductDetail | None:
        """Return the detail for *slug*, or ``None`` if no product matches."""
        product_query = StoreQuery(
            collection=Settings.PRODUCTS_TABLE,
            projection=Settings.DETAIL_COLUMNS,
            equality={"slug": slug},
        )
        row = await run_store_call(
            self.store.select_one, product_query, self.timeout
        )
        if row is None:
            logger.info("No product matches slug '%s'", slug)
            return None

        offers_query = StoreQuery(
            collection=Settings.PRODUCT_RETAILERS_TABLE,
            projection=Settings.RETAILER_COLUMNS,
            equality={"product_id": row.get("id")},
        )
        offer_rows = await run_store_call(
            self.store.select_many, offers_query, self.timeout
        )

        try:
            offers = [RetailerOffer.from_row(r) for r in offer_rows]
        except (ValueError, TypeError) as exc:
            raise FetchFailed(offers_query.collection, exc) from exc
        try:
            detail = ProductDetail.from_row(row, offers)
        except (ValueError, TypeError) as exc:
            raise FetchFailed(product_query.collection, exc) from exc

        logger.debug(
            "Loaded product '%s' with %d retailer offers",
            slug,
            len(offers),
        )
        return detail
