# deals_catalog/cli/runner.py

"""Headless CLI commands over the catalog pipeline."""

import json
import logging
import sys
from typing import Any

from rich.console import Console
from rich.table import Table

from deals_catalog.models.criteria import FilterCriteria
from deals_catalog.models.errors import FetchFailed
from deals_catalog.models.product import Product, ProductDetail
from deals_catalog.services.category_resolver import CategoryResolver
from deals_catalog.services.featured_deals import FeaturedDeals
from deals_catalog.services.health_checker import HealthChecker
from deals_catalog.services.listing_engine import ListingEngine
from deals_catalog.services.product_details import ProductDetails
from deals_catalog.store.postgrest_client import PostgrestClient
from deals_catalog.store.query import CatalogStore

logger = logging.getLogger("deals_catalog.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID = 2


def _format_price(value: float | None) -> str:
    return f"${value:,.2f}" if value is not None else "—"


def _print_products(products: list[Product], title: str) -> None:
    """Render a Rich table of products to stdout."""
    table = Table(title=title, show_lines=True, title_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Name", max_width=50)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Was", justify="right", style="dim")
    table.add_column("Off", justify="right", style="yellow")
    table.add_column("Rating", justify="center")
    table.add_column("Reviews", justify="right")

    for idx, p in enumerate(products, 1):
        off = (
            f"{p.discount_percentage:g}%"
            if p.discount_percentage
            else "—"
        )
        table.add_row(
            str(idx),
            p.name[:50],
            _format_price(p.current_price),
            _format_price(p.original_price),
            off,
            f"{p.rating:.1f}",
            f"{p.review_count:,}",
        )

    Console().print(table)


def _print_detail(detail: ProductDetail) -> None:
    """Render a product and its retailer offers to stdout."""
    console = Console()
    product = detail.product
    console.print(f"[bold]{product.name}[/bold]")
    if detail.description:
        console.print(detail.description)
    price_line = f"[green]{_format_price(product.current_price)}[/green]"
    if product.savings is not None:
        price_line += (
            f"  [dim]was {_format_price(product.original_price)}[/dim]"
            f"  [yellow]save {_format_price(product.savings)}[/yellow]"
        )
    console.print(price_line)
    console.print(
        f"{product.rating:.1f}★ ({product.review_count:,} reviews)"
    )

    if detail.offers:
        table = Table(title="Compare Prices", title_style="bold cyan")
        table.add_column("Retailer")
        table.add_column("Price", justify="right", style="green")
        table.add_column("Availability")
        table.add_column("Link", overflow="fold", style="dim")
        for offer in detail.offers:
            table.add_row(
                offer.name,
                _format_price(offer.price),
                "In Stock" if offer.in_stock else "Out of Stock",
                offer.affiliate_url,
            )
        console.print(table)

    if detail.affiliate_disclosure:
        console.print(f"[dim]{detail.affiliate_disclosure}[/dim]")


def _dump_json(data: Any) -> None:
    json.dump(data, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


async def cli_category(
    slug: str,
    criteria: FilterCriteria,
    output_format: str,
    store: CatalogStore | None = None,
) -> int:
    """List a category's products and return an exit code."""
    store = store if store is not None else PostgrestClient()
    try:
        criteria.validate()
        category = await CategoryResolver(store).resolve(slug)
        if category is None:
            _err.print(f"[yellow]No category named '{slug}'.[/yellow]")
            return EXIT_FAILED
        _err.print(
            f"[bold]{category.name}[/bold]  "
            f"[dim]price={criteria.min_price:g}-{criteria.max_price:g} "
            f"rating>={criteria.min_rating:g} sort={criteria.sort_key}[/dim]"
        )
        products = await ListingEngine(store).list_products(
            category.key, criteria
        )
    except ValueError as exc:
        # InvalidCriteria and a blank slug both land here
        _err.print(f"[red]Invalid request: {exc}[/red]")
        return EXIT_INVALID
    except FetchFailed as exc:
        logger.error("Category listing failed: %s", exc, exc_info=True)
        _err.print(f"[red]Could not load products: {exc}[/red]")
        return EXIT_FAILED

    if not products:
        _err.print(
            "[yellow]No products found matching your filters.[/yellow]"
        )
    else:
        _err.print(f"[green]✓ Showing {len(products)} products[/green]")

    if output_format == "table":
        _print_products(products, category.name)
    else:
        _dump_json([p.to_dict() for p in products])
    return EXIT_OK


async def cli_featured(
    limit: int | None,
    output_format: str,
    store: CatalogStore | None = None,
) -> int:
    """Show the featured deals feed and return an exit code."""
    store = store if store is not None else PostgrestClient()
    try:
        products = await FeaturedDeals(store).fetch(limit)
    except ValueError as exc:
        _err.print(f"[red]Invalid request: {exc}[/red]")
        return EXIT_INVALID
    except FetchFailed as exc:
        logger.error("Featured deals failed: %s", exc, exc_info=True)
        _err.print(f"[red]Could not load featured deals: {exc}[/red]")
        return EXIT_FAILED

    if output_format == "table":
        _print_products(products, "Featured Deals")
    else:
        _dump_json([p.to_dict() for p in products])
    return EXIT_OK


async def cli_product(
    slug: str,
    output_format: str,
    store: CatalogStore | None = None,
) -> int:
    """Show a product page and return an exit code."""
    store = store if store is not None else PostgrestClient()
    try:
        detail = await ProductDetails(store).fetch(slug)
    except FetchFailed as exc:
        logger.error("Product detail failed: %s", exc, exc_info=True)
        _err.print(f"[red]Could not load product: {exc}[/red]")
        return EXIT_FAILED

    if detail is None:
        _err.print(f"[yellow]Product '{slug}' not found.[/yellow]")
        return EXIT_FAILED

    if output_format == "table":
        _print_detail(detail)
    else:
        _dump_json(detail.to_dict())
    return EXIT_OK


async def run_health_check(store: CatalogStore | None = None) -> int:
    """Probe every catalog collection and print a status table."""
    store = store if store is not None else PostgrestClient()
    _err.print("[bold]Running store health check...[/bold]")
    results = await HealthChecker(store).check_all()

    table = Table(
        title="Catalog Store Health",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Collection", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Notes", style="dim")

    any_down = False
    for r in results:
        if r.status == "ok":
            status = "[green]✅ OK[/green]"
        elif r.status == "slow":
            status = "[yellow]⚠️  SLOW[/yellow]"
        else:
            status = "[red]❌ DOWN[/red]"
            any_down = True

        latency = f"{r.latency_ms:.0f}ms" if r.latency_ms > 0 else "—"
        table.add_row(r.collection, status, latency, r.message)

    Console().print(table)
    return EXIT_FAILED if any_down else EXIT_OK
