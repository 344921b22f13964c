# deals_catalog/models/category.py

"""Category data model."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Category:
    """A product category as stored in the hosted catalog."""

    key: str
    slug: str
    name: str

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Category":
        """Build a Category from a ``categories`` row.

        Raises ``ValueError`` when the row has no id.
        """
        if row.get("id") in (None, ""):
            msg = f"category row without id: {row!r}"
            raise ValueError(msg)
        return cls(
            key=str(row["id"]),
            slug=str(row.get("slug") or ""),
            name=str(row.get("name") or ""),
        )
