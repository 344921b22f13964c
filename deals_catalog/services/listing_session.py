# deals_catalog/services/listing_session.py

"""Caller-side listing state with stale-result suppression."""

import logging

from deals_catalog.models.criteria import FilterCriteria
from deals_catalog.models.errors import CatalogError
from deals_catalog.models.listing_state import (
    Failed,
    ListingState,
    Loading,
    Success,
)
from deals_catalog.services.listing_engine import ListingEngine

logger = logging.getLogger("deals_catalog.session")


class ListingSession:
    """Tracks the listing shown for one category.

    Each :meth:`refresh` takes a new generation number.  When a slower,
    older refresh finishes after a newer one started, its outcome is
    dropped so the newest request always wins.
    """

    def __init__(self, engine: ListingEngine, category_key: str) -> None:
        self.engine = engine
        self.category_key = category_key
        self._generation: int = 0
        self._state: ListingState = Loading(generation=0)

    @property
    def state(self) -> ListingState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    async def refresh(self, criteria: FilterCriteria) -> ListingState:
        """Re-run the listing for *criteria* and return the current state.

        The returned state is the session's state after this call, which
        is a newer generation's state when this call was superseded.
        """
        self._generation += 1
        generation = self._generation
        self._state = Loading(generation=generation)

        outcome: ListingState
        try:
            products = await self.engine.list_products(
                self.category_key, criteria
            )
            outcome = Success(
                products=tuple(products), generation=generation
            )
        except CatalogError as exc:
            logger.warning(
                "Listing generation %d for %s failed: %s",
                generation,
                self.category_key,
                exc,
            )
            outcome = Failed(cause=exc, generation=generation)

        if generation != self._generation:
            logger.info(
                "Dropping stale listing generation %d (current %d)",
                generation,
                self._generation,
            )
            return self._state

        self._state = outcome
        return outcome
