from typing import Iterable, Optional


class CatalogError(Exception):
    """Base error for the catalog; carries the HTTP status it maps to."""

    status_code = 500
    message = "Internal error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)


class StorageReadError(CatalogError):
    message = "Failed to read data file"


class StorageWriteError(CatalogError):
    message = "Failed to write data file"


class NotFound(CatalogError):
    status_code = 404
    message = "Not found"


class ReferenceNotFound(CatalogError):
    status_code = 404

    def __init__(self, missing_ids: Iterable[int]):
        self.missing_ids = list(missing_ids)
        super().__init__(f"Categories not found: {', '.join(str(i) for i in self.missing_ids)}")
