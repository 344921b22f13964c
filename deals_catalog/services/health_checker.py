# deals_catalog/services/health_checker.py

"""Connectivity check for the catalog collections."""

import asyncio
import logging
import time
from dataclasses import dataclass

from deals_catalog.config.settings import Settings
from deals_catalog.store.query import CatalogStore, StoreQuery

logger = logging.getLogger("deals_catalog.health")


@dataclass
class HealthResult:
    """Result of probing a single collection."""

    collection: str
    status: str  # "ok", "slow", "down"
    latency_ms: float
    message: str


def probe_collection(
    store: CatalogStore, collection: str
) -> HealthResult:
    """Read at most one row from *collection* and time it."""
    start = time.monotonic()
    try:
        rows = store.select_many(
            StoreQuery(collection=collection, limit=1)
        )
    except Exception as exc:
        elapsed_ms = (time.monotonic() - start) * 1000
        return HealthResult(
            collection=collection,
            status="down",
            latency_ms=elapsed_ms,
            message=str(exc)[:80],
        )

    elapsed_ms = (time.monotonic() - start) * 1000
    if elapsed_ms > Settings.HEALTH_SLOW_MS:
        return HealthResult(
            collection=collection,
            status="slow",
            latency_ms=elapsed_ms,
            message="High latency",
        )
    return HealthResult(
        collection=collection,
        status="ok",
        latency_ms=elapsed_ms,
        message="" if rows else "empty",
    )


class HealthChecker:
    """Runs concurrent probes against every catalog collection."""

    def __init__(self, store: CatalogStore) -> None:
        self.store = store
        self.collections = [
            Settings.CATEGORIES_TABLE,
            Settings.PRODUCTS_TABLE,
            Settings.PRODUCT_RETAILERS_TABLE,
        ]

    async def check_all(self) -> list[HealthResult]:
        """Probe every collection concurrently."""
        tasks = [
            asyncio.to_thread(probe_collection, self.store, name)
            for name in self.collections
        ]
        results: list[HealthResult] = list(await asyncio.gather(*tasks))
        for r in results:
            logger.info(
                "Health check %s: %s (%.0fms) %s",
                r.collection,
                r.status,
                r.latency_ms,
                r.message,
            )
        return results
