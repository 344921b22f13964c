# deals_catalog/models/criteria.py

"""User-selected listing constraints."""

import math
from dataclasses import dataclass

from deals_catalog.config.settings import Settings
from deals_catalog.models.errors import InvalidCriteria

SORT_KEYS: tuple[str, ...] = (
    "relevance",
    "price-low",
    "price-high",
    "rating",
    "discount",
)

# Ratings offered by the storefront filter; the engine accepts any [0, 5]
RATING_CHOICES: tuple[float, ...] = (0, 3, 4, 4.5)

MAX_RATING: float = 5.0


@dataclass(frozen=True)
class FilterCriteria:
    """Price bounds, minimum rating and sort order for one listing run."""

    price_range: tuple[float, float] = Settings.DEFAULT_PRICE_RANGE
    min_rating: float = 0
    sort_key: str = "relevance"

    @property
    def min_price(self) -> float:
        return self.price_range[0]

    @property
    def max_price(self) -> float:
        return self.price_range[1]

    def validate(self) -> None:
        """Reject criteria the engine cannot honour.

        Raises ``InvalidCriteria`` rather than clamping.
        """
        if len(self.price_range) != 2:
            msg = f"price_range must be (min, max), got {self.price_range!r}"
            raise InvalidCriteria(msg)
        low, high = self.price_range
        if math.isnan(low) or math.isnan(high):
            msg = f"price bounds must be numbers, got {self.price_range!r}"
            raise InvalidCriteria(msg)
        if low < 0:
            msg = f"minimum price must be >= 0, got {low}"
            raise InvalidCriteria(msg)
        if low > high:
            msg = f"minimum price {low} exceeds maximum price {high}"
            raise InvalidCriteria(msg)
        if not 0 <= self.min_rating <= MAX_RATING:
            msg = (
                f"min_rating must be within [0, {MAX_RATING}], "
                f"got {self.min_rating}"
            )
            raise InvalidCriteria(msg)
        if self.sort_key not in SORT_KEYS:
            msg = (
                f"unknown sort key '{self.sort_key}' "
                f"(expected one of: {', '.join(SORT_KEYS)})"
            )
            raise InvalidCriteria(msg)
