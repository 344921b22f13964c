# deals_catalog/models/product.py

"""Product data models for the listing and detail views."""

from dataclasses import dataclass, field
from typing import Any


def _required_number(row: dict[str, Any], column: str) -> float:
    """Read a numeric column that must be present."""
    value = row.get(column)
    if value is None or isinstance(value, bool):
        msg = f"missing or invalid '{column}' in product row"
        raise ValueError(msg)
    return float(value)


def _optional_number(row: dict[str, Any], column: str) -> float | None:
    """Read a nullable numeric column."""
    value = row.get(column)
    if value is None:
        return None
    return float(value)


@dataclass(frozen=True)
class Product:
    """A single deal as shown on listing pages."""

    id: str
    name: str
    slug: str
    current_price: float
    rating: float
    image_url: str = ""
    original_price: float | None = None
    discount_percentage: float | None = None
    review_count: int = 0

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Product":
        """Build a Product from a ``products`` row.

        Raises ``ValueError`` (or ``TypeError``) on malformed rows.
        """
        if row.get("id") in (None, ""):
            msg = f"product row without id: {row!r}"
            raise ValueError(msg)
        return cls(
            id=str(row["id"]),
            name=str(row.get("name") or ""),
            slug=str(row.get("slug") or ""),
            image_url=str(row.get("image_url") or ""),
            current_price=_required_number(row, "current_price"),
            original_price=_optional_number(row, "original_price"),
            discount_percentage=_optional_number(
                row, "discount_percentage"
            ),
            rating=_required_number(row, "rating"),
            review_count=int(row.get("review_count") or 0),
        )

    @property
    def discount_or_zero(self) -> float:
        """Discount used for ordering; absent counts as 0."""
        return self.discount_percentage or 0.0

    @property
    def savings(self) -> float | None:
        """Amount saved against the original price, if any."""
        if (
            self.original_price is not None
            and self.original_price > self.current_price
        ):
            return round(self.original_price - self.current_price, 2)
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict for JSON output."""
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "image_url": self.image_url,
            "current_price": self.current_price,
            "original_price": self.original_price,
            "discount_percentage": self.discount_percentage,
            "rating": self.rating,
            "review_count": self.review_count,
        }


@dataclass(frozen=True)
class RetailerOffer:
    """One retailer's price for a product."""

    name: str
    price: float
    affiliate_url: str = ""
    in_stock: bool = False

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "RetailerOffer":
        """Flatten a ``product_retailers`` row with its embedded retailer."""
        retailer = row.get("retailers")
        if not isinstance(retailer, dict) or not retailer.get("name"):
            msg = f"retailer row without embedded name: {row!r}"
            raise ValueError(msg)
        return cls(
            name=str(retailer["name"]),
            price=_required_number(row, "price"),
            affiliate_url=str(row.get("affiliate_url") or ""),
            in_stock=bool(row.get("in_stock")),
        )


@dataclass(frozen=True)
class ProductDetail:
    """Everything the product page shows about a single deal."""

    product: Product
    description: str = ""
    specs: dict[str, str] = field(default_factory=lambda: dict[str, str]())
    pros: tuple[str, ...] = ()
    cons: tuple[str, ...] = ()
    affiliate_disclosure: str = ""
    offers: tuple[RetailerOffer, ...] = ()

    @classmethod
    def from_row(
        cls,
        row: dict[str, Any],
        offers: list[RetailerOffer],
    ) -> "ProductDetail":
        """Build a ProductDetail from a detail-projection row."""
        specs = row.get("specs") or {}
        if not isinstance(specs, dict):
            msg = f"specs must be an object, got {type(specs).__name__}"
            raise ValueError(msg)
        return cls(
            product=Product.from_row(row),
            description=str(row.get("description") or ""),
            specs={str(k): str(v) for k, v in specs.items()},
            pros=tuple(str(p) for p in row.get("pros") or ()),
            cons=tuple(str(c) for c in row.get("cons") or ()),
            affiliate_disclosure=str(
                row.get("affiliate_disclosure") or ""
            ),
            offers=tuple(offers),
        )

    @property
    def best_offer(self) -> RetailerOffer | None:
        """Cheapest in-stock offer, or ``None`` if nothing is in stock."""
        in_stock = [o for o in self.offers if o.in_stock]
        if not in_stock:
            return None
        return min(in_stock, key=lambda o: o.price)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict for JSON output."""
        data = self.product.to_dict()
        data.update(
            {
                "description": self.description,
                "specs": dict(self.specs),
                "pros": list(self.pros),
                "cons": list(self.cons),
                "affiliate_disclosure": self.affiliate_disclosure,
                "savings": self.product.savings,
                "retailers": [
                    {
                        "name": o.name,
                        "price": o.price,
                        "affiliate_url": o.affiliate_url,
                        "in_stock": o.in_stock,
                    }
                    for o in self.offers
                ],
            }
        )
        return data
