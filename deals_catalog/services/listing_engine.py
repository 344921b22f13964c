# deals_catalog/services/listing_engine.py

"""Scoped fetch, local filtering and ordering for category listings."""

import logging
from dataclasses import dataclass, field
from typing import Any

from deals_catalog.config.settings import Settings
from deals_catalog.filters.product_filter import ProductFilter
from deals_catalog.filters.product_sorter import ProductSorter
from deals_catalog.models.criteria import FilterCriteria
from deals_catalog.models.errors import FetchFailed
from deals_catalog.models.product import Product
from deals_catalog.store.async_calls import run_store_call
from deals_catalog.store.query import CatalogStore, StoreQuery

logger = logging.getLogger("deals_catalog.engine")


@dataclass
class ListingStats:
    """Bookkeeping for the most recent listing run."""

    fetched: int = 0
    price_excluded: int = 0
    rating_excluded: int = 0
    pushed_down: list[str] = field(default_factory=lambda: list[str]())


def parse_products(
    collection: str, rows: list[dict[str, Any]]
) -> list[Product]:
    """Convert store rows to products, failing the whole fetch on bad rows."""
    try:
        return [Product.from_row(row) for row in rows]
    except (ValueError, TypeError) as exc:
        logger.error(
            "Malformed product row from '%s': %s", collection, exc
        )
        raise FetchFailed(collection, exc) from exc


class ListingEngine:
    """Produces the ordered product list behind a category page.

    The engine holds no cache; every call re-runs the fetch, the local
    filters and the sort.  Store-side rating pushdown only reduces the
    transferred rows, the local filters alone decide the result.
    """

    def __init__(
        self,
        store: CatalogStore,
        push_down_min_rating: bool | None = None,
        timeout: float | None = None,
    ) -> None:
        self.store = store
        self.push_down_min_rating = (
            Settings.PUSH_DOWN_MIN_RATING
            if push_down_min_rating is None
            else push_down_min_rating
        )
        self.timeout = timeout
        self.last_stats = ListingStats()

    def build_query(
        self, category_key: str, criteria: FilterCriteria
    ) -> StoreQuery:
        """Build the scoped fetch for *category_key*."""
        thresholds: dict[str, float] = {}
        if self.push_down_min_rating and criteria.min_rating > 0:
            thresholds["rating"] = criteria.min_rating
        return StoreQuery(
            collection=Settings.PRODUCTS_TABLE,
            projection=Settings.LISTING_COLUMNS,
            equality={"category_id": category_key},
            threshold_gte=thresholds,
        )

    async def list_products(
        self,
        category_key: str,
        criteria: FilterCriteria,
    ) -> list[Product]:
        """Return the category's products filtered and ordered by *criteria*.

        Raises ``InvalidCriteria`` before any fetch and ``FetchFailed``
        when the store call fails.  An empty list means nothing matched.
        """
        criteria.validate()

        query = self.build_query(category_key, criteria)
        rows = await run_store_call(
            self.store.select_many, query, self.timeout
        )
        fetched = parse_products(query.collection, rows)

        stats = ListingStats(
            fetched=len(fetched),
            pushed_down=sorted(query.threshold_gte),
        )
        products, stats.rating_excluded = ProductFilter.filter_by_rating(
            fetched, criteria.min_rating
        )
        products, stats.price_excluded = ProductFilter.filter_by_price(
            products, criteria.min_price, criteria.max_price
        )
        ordered = ProductSorter.sort(products, criteria.sort_key)
        self.last_stats = stats

        logger.info(
            "Category %s: %d fetched, %d listed (sort=%s)",
            category_key,
            stats.fetched,
            len(ordered),
            criteria.sort_key,
        )
        return ordered
