# main.py

"""Entry point for the deals catalog command line."""

import argparse
import asyncio
import logging
import sys

from deals_catalog.config.logging_config import setup_logging
from deals_catalog.config.settings import Settings
from deals_catalog.models.criteria import SORT_KEYS, FilterCriteria

logger = logging.getLogger("deals_catalog.main")


def _positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        msg = f"must be >= 1, got {number}"
        raise argparse.ArgumentTypeError(msg)
    return number


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    low, high = Settings.DEFAULT_PRICE_RANGE

    parser = argparse.ArgumentParser(
        prog="deals_catalog",
        description="Browse tech deals from the hosted catalog.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    category = sub.add_parser(
        "category", help="List a category's products."
    )
    category.add_argument("slug", help="Category slug, e.g. laptops.")
    category.add_argument(
        "--min-price", type=float, default=low, dest="min_price",
        help=f"Lower price bound (default: {low:g}).",
    )
    category.add_argument(
        "--max-price", type=float, default=high, dest="max_price",
        help=f"Upper price bound (default: {high:g}).",
    )
    category.add_argument(
        "--min-rating", type=float, default=0, dest="min_rating",
        help="Minimum star rating, 0-5 (default: any).",
    )
    category.add_argument(
        "--sort", choices=SORT_KEYS, default="relevance",
        dest="sort_key", help="Sort order (default: relevance).",
    )

    featured = sub.add_parser("featured", help="Show the biggest discounts.")
    featured.add_argument(
        "--limit", type=_positive_int, default=None,
        help=f"Number of deals (default: {Settings.FEATURED_LIMIT}).",
    )

    product = sub.add_parser("product", help="Show one product's page.")
    product.add_argument("slug", help="Product slug.")

    sub.add_parser("health", help="Check store connectivity.")

    for p in (category, featured, product):
        p.add_argument(
            "-f",
            "--format",
            choices=["json", "table"],
            default="json",
            dest="output_format",
            help="Output format (default: json).",
        )
    return parser


def _dispatch(args: argparse.Namespace) -> int:
    """Run the selected command and return its exit code."""
    from deals_catalog.cli import runner

    if args.command == "category":
        criteria = FilterCriteria(
            price_range=(args.min_price, args.max_price),
            min_rating=args.min_rating,
            sort_key=args.sort_key,
        )
        return asyncio.run(
            runner.cli_category(args.slug, criteria, args.output_format)
        )
    if args.command == "featured":
        return asyncio.run(
            runner.cli_featured(args.limit, args.output_format)
        )
    if args.command == "product":
        return asyncio.run(
            runner.cli_product(args.slug, args.output_format)
        )
    return asyncio.run(runner.run_health_check())


def main() -> None:
    """Parse arguments and route to the matching command."""
    args = _build_parser().parse_args()
    log_file = setup_logging(args.command)
    logger.info("deals_catalog starting, log file: %s", log_file)

    try:
        exit_code = _dispatch(args)
    except Exception:
        logger.critical("Fatal error during '%s'", args.command, exc_info=True)
        raise
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
