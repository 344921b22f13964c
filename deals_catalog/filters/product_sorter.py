# deals_catalog/filters/product_sorter.py

"""Stable ordering of listing results by the storefront sort keys."""

import logging
from collections.abc import Callable

from deals_catalog.models.product import Product

logger = logging.getLogger("deals_catalog.filters")

# sort key -> (key function, descending)
_ORDERINGS: dict[str, tuple[Callable[[Product], float], bool]] = {
    "price-low": (lambda p: p.current_price, False),
    "price-high": (lambda p: p.current_price, True),
    "rating": (lambda p: p.rating, True),
    "discount": (lambda p: p.discount_or_zero, True),
}


class ProductSorter:
    """Order products for display."""

    @staticmethod
    def sort(products: list[Product], sort_key: str) -> list[Product]:
        """Return a new list ordered by *sort_key*.

        ``relevance`` keeps the store's order.  Ties always keep the
        fetch order because ``sorted`` is stable in both directions.
        Raises ``KeyError`` for an unknown sort key.
        """
        if sort_key == "relevance":
            return list(products)

        key_fn, descending = _ORDERINGS[sort_key]
        ordered = sorted(products, key=key_fn, reverse=descending)
        logger.debug(
            "Sorted %d products by '%s'", len(ordered), sort_key
        )
        return ordered
