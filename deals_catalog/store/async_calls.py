# deals_catalog/store/async_calls.py

"""Run blocking store calls off the event loop with a deadline."""

import asyncio
import logging
from collections.abc import Callable
from typing import TypeVar

from deals_catalog.config.settings import Settings
from deals_catalog.models.errors import FetchFailed
from deals_catalog.store.query import StoreQuery

logger = logging.getLogger("deals_catalog.store")

T = TypeVar("T")


async def run_store_call(
    call: Callable[[StoreQuery], T],
    query: StoreQuery,
    timeout: float | None = None,
) -> T:
    """Await ``call(query)`` in a worker thread.

    Raises ``FetchFailed`` when the deadline expires or the call raises
    anything other than ``FetchFailed`` itself.
    """
    deadline = Settings.FETCH_TIMEOUT if timeout is None else timeout
    try:
        return await asyncio.wait_for(
            asyncio.to_thread(call, query), timeout=deadline
        )
    except FetchFailed:
        raise
    except asyncio.TimeoutError as exc:
        logger.error(
            "%s timed out after %.1fs", query.describe(), deadline
        )
        raise FetchFailed(
            query.collection, f"timed out after {deadline}s"
        ) from exc
    except Exception as exc:
        logger.error(
            "%s failed: %s", query.describe(), exc, exc_info=True
        )
        raise FetchFailed(query.collection, exc) from exc
