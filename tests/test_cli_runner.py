# tests/test_cli_runner.py

"""Tests for the headless CLI commands."""

import io
import json
import unittest
from typing import Any
from unittest.mock import MagicMock, patch

from deals_catalog.cli import runner
from deals_catalog.models.criteria import FilterCriteria
from deals_catalog.store.query import StoreQuery

CATEGORY_ROW = {"id": "c-1", "slug": "laptops", "name": "Laptops"}

PRODUCT_ROWS: list[dict[str, Any]] = [
    {"id": "A", "name": "A", "slug": "a", "current_price": 500, "rating": 4.2, "discount_percentage": 10},
    {"id": "B", "name": "B", "slug": "b", "current_price": 300, "rating": 3.8, "discount_percentage": 25},
]


class CatalogStub:
    """Store stub answering by collection."""

    def __init__(
        self,
        category: dict[str, Any] | None = CATEGORY_ROW,
        products: list[dict[str, Any]] | None = None,
        fail: bool = False,
    ) -> None:
        self.category = category
        self.products = PRODUCT_ROWS if products is None else products
        self.fail = fail

    def select_one(self, query: StoreQuery) -> dict[str, Any] | None:
        if query.collection == "categories":
            return self.category
        rows = self.select_many(query)
        return rows[0] if rows else None

    def select_many(self, query: StoreQuery) -> list[dict[str, Any]]:
        if self.fail:
            msg = "store unreachable"
            raise ConnectionError(msg)
        if query.collection == "products":
            return [dict(r) for r in self.products]
        return []


class TestCliCategory(unittest.IsolatedAsyncioTestCase):
    """runner.cli_category exit codes and output."""

    @patch("sys.stdout", new_callable=io.StringIO)
    async def test_json_output(self, mock_stdout: io.StringIO) -> None:
        code = await runner.cli_category(
            "laptops",
            FilterCriteria(sort_key="discount"),
            "json",
            store=CatalogStub(),
        )
        self.assertEqual(code, runner.EXIT_OK)
        data = json.loads(mock_stdout.getvalue())
        self.assertEqual([d["id"] for d in data], ["B", "A"])

    @patch("sys.stdout", new_callable=io.StringIO)
    async def test_empty_listing_is_success(self, mock_stdout: io.StringIO) -> None:
        code = await runner.cli_category(
            "laptops", FilterCriteria(), "json", store=CatalogStub(products=[])
        )
        self.assertEqual(code, runner.EXIT_OK)
        self.assertEqual(json.loads(mock_stdout.getvalue()), [])

    async def test_unknown_category(self) -> None:
        code = await runner.cli_category(
            "toasters", FilterCriteria(), "json", store=CatalogStub(category=None)
        )
        self.assertEqual(code, runner.EXIT_FAILED)

    async def test_fetch_failure(self) -> None:
        code = await runner.cli_category(
            "laptops", FilterCriteria(), "json", store=CatalogStub(fail=True)
        )
        self.assertEqual(code, runner.EXIT_FAILED)

    async def test_invalid_criteria(self) -> None:
        store = MagicMock()
        code = await runner.cli_category(
            "laptops", FilterCriteria(price_range=(9, 1)), "json", store=store
        )
        self.assertEqual(code, runner.EXIT_INVALID)
        store.select_one.assert_not_called()

    async def test_blank_slug_is_invalid(self) -> None:
        store = MagicMock()
        code = await runner.cli_category(" ", FilterCriteria(), "json", store=store)
        self.assertEqual(code, runner.EXIT_INVALID)
        store.select_one.assert_not_called()

    @patch("sys.stdout", new_callable=io.StringIO)
    async def test_table_output(self, mock_stdout: io.StringIO) -> None:
        code = await runner.cli_category(
            "laptops", FilterCriteria(), "table", store=CatalogStub()
        )
        self.assertEqual(code, runner.EXIT_OK)
        self.assertIn("Laptops", mock_stdout.getvalue())


class TestCliOtherCommands(unittest.IsolatedAsyncioTestCase):
    """featured, product and health commands."""

    @patch("sys.stdout", new_callable=io.StringIO)
    async def test_featured(self, mock_stdout: io.StringIO) -> None:
        code = await runner.cli_featured(None, "json", store=CatalogStub())
        self.assertEqual(code, runner.EXIT_OK)
        self.assertEqual(len(json.loads(mock_stdout.getvalue())), 2)

    async def test_featured_failure(self) -> None:
        code = await runner.cli_featured(None, "json", store=CatalogStub(fail=True))
        self.assertEqual(code, runner.EXIT_FAILED)

    async def test_featured_limit_below_one_is_invalid(self) -> None:
        for limit in (0, -1):
            with self.subTest(limit=limit):
                store = MagicMock()
                code = await runner.cli_featured(limit, "json", store=store)
                self.assertEqual(code, runner.EXIT_INVALID)
                store.select_many.assert_not_called()

    @patch("sys.stdout", new_callable=io.StringIO)
    async def test_product(self, mock_stdout: io.StringIO) -> None:
        code = await runner.cli_product("a", "json", store=CatalogStub())
        self.assertEqual(code, runner.EXIT_OK)
        data = json.loads(mock_stdout.getvalue())
        self.assertEqual(data["id"], "A")
        self.assertEqual(data["retailers"], [])

    async def test_product_not_found(self) -> None:
        code = await runner.cli_product("zzz", "json", store=CatalogStub(products=[]))
        self.assertEqual(code, runner.EXIT_FAILED)

    @patch("sys.stdout", new_callable=io.StringIO)
    async def test_health_ok(self, _mock_stdout: io.StringIO) -> None:
        code = await runner.run_health_check(store=CatalogStub())
        self.assertEqual(code, runner.EXIT_OK)

    @patch("sys.stdout", new_callable=io.StringIO)
    async def test_health_down(self, _mock_stdout: io.StringIO) -> None:
        code = await runner.run_health_check(store=CatalogStub(fail=True))
        self.assertEqual(code, runner.EXIT_FAILED)


if __name__ == "__main__":
    unittest.main()
