from __future__ import annotations

import logging
from typing import Any, Optional

from catalog.constants import (
    OP_ADD_FAILED,
    OP_ADD_PRODUCT,
    OP_DELETE_PRODUCT,
    OP_FIND_BY_BRAND,
    OP_FIND_BY_CATEGORY,
    OP_FIND_BY_ID,
    OP_FIND_BY_NAME,
    OP_LIST_PRODUCTS,
    OP_UPDATE_PRODUCT,
)
from catalog.db.product_repository import InMemoryProductRepository
from catalog.exceptions import DuplicateProductError, ProductNotFoundError
from catalog.models.product import Product
from catalog.services.metrics_service import MetricsService

log = logging.getLogger(__name__)


def _key(text: str) -> str:
    return (text or "").strip().lower()


class ProductService:
    """
    Catalog operations on top of the repository.
    Lookups by id, category and brand are cached; any write clears every cache.
    """

    def __init__(self, repository: InMemoryProductRepository, metrics: MetricsService):
        self.repository = repository
        self.metrics = metrics
        self._by_id: dict[int, Product] = {}
        self._by_category: dict[str, list[Product]] = {}
        self._by_brand: dict[str, list[Product]] = {}
        self.cache_hits = 0
        self.cache_misses = 0

    # ---- Writes ----
    def add_product(self, product: Product) -> Product:
        with self.metrics.timed(OP_ADD_PRODUCT):
            if self.repository.find_by_name(product.name) is not None:
                self.metrics.increment_counter(OP_ADD_FAILED)
                raise DuplicateProductError(product.name)
            saved = self.repository.save(product)
            self.clear_cache()
        log.info("Added product %s (%s)", saved.id, saved.name)
        return saved

    def update_product(self, product_id: int, updated: Product) -> Product:
        with self.metrics.timed(OP_UPDATE_PRODUCT):
            existing = self.repository.find_by_id(product_id)
            if existing is None:
                raise ProductNotFoundError(product_id)

            if _key(existing.name) != _key(updated.name):
                clash = self.repository.find_by_name(updated.name)
                if clash is not None and clash.id != product_id:
                    raise DuplicateProductError(updated.name)

            updated.id = product_id
            updated.created_at = existing.created_at
            saved = self.repository.save(updated)
            self.clear_cache()
        log.info("Updated product %s", product_id)
        return saved

    def delete_product(self, product_id: int) -> bool:
        with self.metrics.timed(OP_DELETE_PRODUCT):
            removed = self.repository.delete(product_id)
            self.clear_cache()
        if removed:
            log.info("Deleted product %s", product_id)
        return removed

    # ---- Reads ----
    def get_product_by_id(self, product_id: int) -> Optional[Product]:
        with self.metrics.timed(OP_FIND_BY_ID):
            if product_id in self._by_id:
                self.cache_hits += 1
                log.debug("cache hit: id=%s", product_id)
                return self._by_id[product_id]
            self.cache_misses += 1
            product = self.repository.find_by_id(product_id)
            if product is not None:
                self._by_id[product_id] = product
            return product

    def get_product_by_name(self, name: str) -> Optional[Product]:
        with self.metrics.timed(OP_FIND_BY_NAME):
            return self.repository.find_by_name(name)

    def get_all_products(self) -> list[Product]:
        with self.metrics.timed(OP_LIST_PRODUCTS):
            return self.repository.find_all()

    def get_products_by_category(self, category: str) -> list[Product]:
        with self.metrics.timed(OP_FIND_BY_CATEGORY):
            return self._cached_list(self._by_category, category, self.repository.find_by_category)

    def get_products_by_brand(self, brand: str) -> list[Product]:
        with self.metrics.timed(OP_FIND_BY_BRAND):
            return self._cached_list(self._by_brand, brand, self.repository.find_by_brand)

    def _cached_list(self, cache: dict[str, list[Product]], value: str, loader) -> list[Product]:
        k = _key(value)
        if k in cache:
            self.cache_hits += 1
            log.debug("cache hit: %r", value)
            return list(cache[k])
        self.cache_misses += 1
        products = loader(value)
        cache[k] = list(products)
        return products

    # ---- Cache / stats ----
    def clear_cache(self) -> None:
        self._by_id.clear()
        self._by_category.clear()
        self._by_brand.clear()
        log.debug("product caches cleared")

    def cache_stats(self) -> dict[str, Any]:
        total = self.cache_hits + self.cache_misses
        return {
            "products_cached": len(self._by_id),
            "categories_cached": len(self._by_category),
            "brands_cached": len(self._by_brand),
            "hits": self.cache_hits,
            "misses": self.cache_misses,
            "hit_rate": (self.cache_hits / total * 100.0) if total else None,
            "categories": {k: len(v) for k, v in self._by_category.items()},
            "brands": {k: len(v) for k, v in self._by_brand.items()},
        }

    def product_stats(self) -> dict[str, int]:
        return self.repository.get_product_stats()
