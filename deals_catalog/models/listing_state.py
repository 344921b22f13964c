# deals_catalog/models/listing_state.py

"""Three-way listing state handed to the rendering layer."""

from dataclasses import dataclass

from deals_catalog.models.product import Product


@dataclass(frozen=True)
class Loading:
    """A fetch for this generation is in flight."""

    generation: int = 0


@dataclass(frozen=True)
class Success:
    """The listing completed; ``products`` may be empty."""

    products: tuple[Product, ...]
    generation: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.products


@dataclass(frozen=True)
class Failed:
    """The listing could not be fetched."""

    cause: Exception
    generation: int = 0


ListingState = Loading | Success | Failed
