# deals_catalog/filters/product_filter.py

"""Local product filtering applied after every scoped fetch."""

import logging

from deals_catalog.models.product import Product

logger = logging.getLogger("deals_catalog.filters")


class ProductFilter:
    """Filter fetched products by price bounds and minimum rating."""

    @staticmethod
    def filter_by_price(
        products: list[Product],
        min_price: float,
        max_price: float,
    ) -> tuple[list[Product], int]:
        """Keep products whose current price lies in [min, max].

        Returns the kept products and the count of excluded ones.
        """
        kept = [
            p
            for p in products
            if min_price <= p.current_price <= max_price
        ]
        excluded = len(products) - len(kept)
        if excluded:
            logger.info(
                "Price filter [%s, %s] excluded %d products",
                min_price,
                max_price,
                excluded,
            )
        return kept, excluded

    @staticmethod
    def filter_by_rating(
        products: list[Product],
        min_rating: float,
    ) -> tuple[list[Product], int]:
        """Keep products rated at least *min_rating*.

        Returns the kept products and the count of excluded ones.
        """
        if min_rating <= 0:
            return list(products), 0

        kept = [p for p in products if p.rating >= min_rating]
        excluded = len(products) - len(kept)
        if excluded:
            logger.info(
                "Rating filter >= %s excluded %d products",
                min_rating,
                excluded,
            )
        return kept, excluded
