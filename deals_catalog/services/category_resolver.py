# deals_catalog/services/category_resolver.py

"""Resolve a category slug to its key and display name."""

import logging

from deals_catalog.config.settings import Settings
from deals_catalog.models.category import Category
from deals_catalog.models.errors import FetchFailed
from deals_catalog.store.async_calls import run_store_call
from deals_catalog.store.query import CatalogStore, StoreQuery

logger = logging.getLogger("deals_catalog.resolver")


class CategoryResolver:
    """Looks a category up by slug with a single store round-trip."""

    def __init__(
        self,
        store: CatalogStore,
        timeout: float | None = None,
    ) -> None:
        self.store = store
        self.timeout = timeout

    async def resolve(self, slug: str) -> Category | None:
        """Return the category for *slug*, or ``None`` when none matches.

        An unknown slug is an expected outcome, not an error.  Store
        failures raise ``FetchFailed``.
        """
        if not slug or not slug.strip():
            msg = "category slug must be non-empty"
            raise ValueError(msg)

        query = StoreQuery(
            collection=Settings.CATEGORIES_TABLE,
            projection=("id", "slug", "name"),
            equality={"slug": slug.strip()},
        )
        row = await run_store_call(
            self.store.select_one, query, self.timeout
        )
        if row is None:
            logger.info("No category matches slug '%s'", slug)
            return None

        try:
            category = Category.from_row(row)
        except ValueError as exc:
            raise FetchFailed(query.collection, exc) from exc
        logger.debug(
            "Resolved '%s' to category %s (%s)",
            slug,
            category.key,
            category.name,
        )
        return category
