from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog errors."""


class StorageError(CatalogError):
    """A data file could not be read or written."""


class CorruptDataError(StorageError):
    """A data file exists but does not hold a valid record document."""


class ProductNotFoundError(CatalogError, ValueError):
    def __init__(self, product_id: int):
        super().__init__(f"Product with ID {product_id} not found")
        self.product_id = product_id


class DuplicateProductError(CatalogError, ValueError):
    def __init__(self, name: str):
        super().__init__(f"Product named '{name}' already exists")
        self.name = name
