# tests/test_product_filter.py

"""Tests for ProductFilter local price and rating filtering."""

import unittest

from deals_catalog.filters.product_filter import ProductFilter
from deals_catalog.models.product import Product


def _make_product(pid: str, price: float, rating: float = 4.0) -> Product:
    """Create a minimal Product with the given price and rating."""
    return Product(
        id=pid, name=pid, slug=pid, current_price=price, rating=rating
    )


class TestFilterByPrice(unittest.TestCase):
    """ProductFilter.filter_by_price behaviour."""

    def test_bounds_are_inclusive(self) -> None:
        """Prices equal to either bound are kept."""
        products = [
            _make_product("a", 400),
            _make_product("b", 600),
            _make_product("c", 399.99),
            _make_product("d", 600.01),
        ]
        kept, excluded = ProductFilter.filter_by_price(products, 400, 600)
        self.assertEqual([p.id for p in kept], ["a", "b"])
        self.assertEqual(excluded, 2)

    def test_keeps_order(self) -> None:
        """Filtering never reorders."""
        products = [_make_product(str(i), 100 - i) for i in range(5)]
        kept, _ = ProductFilter.filter_by_price(products, 0, 1000)
        self.assertEqual([p.id for p in kept], ["0", "1", "2", "3", "4"])

    def test_zero_width_range(self) -> None:
        products = [_make_product("a", 500), _make_product("b", 501)]
        kept, _ = ProductFilter.filter_by_price(products, 500, 500)
        self.assertEqual([p.id for p in kept], ["a"])

    def test_empty_products_list(self) -> None:
        kept, excluded = ProductFilter.filter_by_price([], 0, 10)
        self.assertEqual(kept, [])
        self.assertEqual(excluded, 0)

    def test_returns_new_list(self) -> None:
        """The input list is never aliased."""
        products = [_make_product("a", 5)]
        kept, _ = ProductFilter.filter_by_price(products, 0, 10)
        self.assertIsNot(kept, products)


class TestFilterByRating(unittest.TestCase):
    """ProductFilter.filter_by_rating behaviour."""

    def test_zero_keeps_everything(self) -> None:
        products = [_make_product("a", 1, 0.0), _make_product("b", 1, 5.0)]
        kept, excluded = ProductFilter.filter_by_rating(products, 0)
        self.assertEqual(len(kept), 2)
        self.assertEqual(excluded, 0)
        self.assertIsNot(kept, products)

    def test_threshold_inclusive(self) -> None:
        products = [
            _make_product("a", 1, 4.5),
            _make_product("b", 1, 4.49),
            _make_product("c", 1, 4.9),
        ]
        kept, excluded = ProductFilter.filter_by_rating(products, 4.5)
        self.assertEqual([p.id for p in kept], ["a", "c"])
        self.assertEqual(excluded, 1)


if __name__ == "__main__":
    unittest.main()
