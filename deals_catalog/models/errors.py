# deals_catalog/models/errors.py

"""Error taxonomy for the catalog pipeline."""


class CatalogError(Exception):
    """Base class for catalog pipeline errors."""


class FetchFailed(CatalogError):
    """A store call errored, timed out, or returned malformed data."""

    def __init__(self, collection: str, cause: BaseException | str) -> None:
        self.collection = collection
        self.cause = cause
        super().__init__(f"Fetch from '{collection}' failed: {cause}")


class InvalidCriteria(CatalogError, ValueError):
    """Filter criteria that the listing engine refuses to run."""
