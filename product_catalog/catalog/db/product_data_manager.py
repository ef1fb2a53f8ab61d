from __future__ import annotations

import logging
from pathlib import Path
from decimal import InvalidOperation
from typing import Iterable, Optional

from catalog.config import PRODUCTS_FILE
from catalog.db.storage import read_records, write_records
from catalog.exceptions import StorageError
from catalog.models.product import Product

log = logging.getLogger(__name__)

KIND = "products"


class ProductDataManager:
    """Same contract as UserDataManager, but load failures give an empty catalog."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else Path(PRODUCTS_FILE)
        self._last_error: str = ""

    @property
    def last_error(self) -> str:
        return self._last_error

    def save_products(self, products: Iterable[Product]) -> tuple[bool, str]:
        self._last_error = ""
        products = list(products)
        try:
            write_records(self.path, KIND, [p.to_dict() for p in products])
        except (StorageError, AttributeError, TypeError, ValueError) as e:
            self._last_error = str(e)
            log.warning("Failed to save products: %s", e)
            return False, self._last_error
        msg = f"Saved {len(products)} product(s) to {self.path}"
        log.info(msg)
        return True, msg

    def load_products(self) -> list[Product]:
        self._last_error = ""
        try:
            records = read_records(self.path, KIND)
            products = [Product.from_dict(r) for r in records]
        except FileNotFoundError:
            log.info("Products file %s not found, starting an empty catalog", self.path)
            return []
        except (StorageError, KeyError, TypeError, ValueError, InvalidOperation) as e:
            self._last_error = str(e)
            log.warning("Failed to load products from %s: %s", self.path, e)
            return []
        log.info("Loaded %d product(s) from %s", len(products), self.path)
        return products
