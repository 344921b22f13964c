# deals_catalog/store/query.py

"""Declarative description of a single store read."""

from dataclasses import dataclass, field
from typing import Any, Protocol


def _format_value(value: Any) -> str:
    """Render a filter operand the way PostgREST expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


@dataclass(frozen=True)
class StoreQuery:
    """A select against one collection.

    ``equality`` maps columns to required values and ``threshold_gte``
    maps columns to inclusive lower bounds.  ``order_by`` is a
    ``(column, descending)`` pair.
    """

    collection: str
    projection: tuple[str, ...] = ("*",)
    equality: dict[str, Any] = field(
        default_factory=lambda: dict[str, Any]()
    )
    threshold_gte: dict[str, float] = field(
        default_factory=lambda: dict[str, float]()
    )
    order_by: tuple[str, bool] | None = None
    limit: int | None = None

    def to_params(self) -> list[tuple[str, str]]:
        """Render PostgREST query-string parameters.

        Returned as pairs so a column can carry more than one filter.
        """
        params: list[tuple[str, str]] = [
            ("select", ",".join(self.projection)),
        ]
        for column, value in self.equality.items():
            params.append((column, f"eq.{_format_value(value)}"))
        for column, bound in self.threshold_gte.items():
            params.append((column, f"gte.{_format_value(bound)}"))
        if self.order_by is not None:
            column, descending = self.order_by
            direction = "desc" if descending else "asc"
            params.append(("order", f"{column}.{direction}.nullslast"))
        if self.limit is not None:
            params.append(("limit", str(self.limit)))
        return params

    def describe(self) -> str:
        """Short human-readable form for log lines."""
        parts = [f"{k}={v}" for k, v in self.equality.items()]
        parts += [f"{k}>={v}" for k, v in self.threshold_gte.items()]
        where = " and ".join(parts) or "*"
        return f"{self.collection}[{where}]"


class CatalogStore(Protocol):
    """The read interface the pipeline needs from a store."""

    def select_one(self, query: StoreQuery) -> dict[str, Any] | None: ...

    def select_many(self, query: StoreQuery) -> list[dict[str, Any]]: ...
