from __future__ import annotations

from typing import Optional

from catalog.db.product_data_manager import ProductDataManager
from catalog.models.product import Product
from catalog.utils import now


class InMemoryProductRepository:
    """
    Products kept in memory, keyed by id.
    Every write checkpoints the full list through ProductDataManager.
    """

    def __init__(self, data_manager: Optional[ProductDataManager] = None):
        self.data_manager = data_manager or ProductDataManager()
        self._products: dict[int, Product] = {}
        self._next_id = 1
        self._load()

    def _load(self) -> None:
        for p in self.data_manager.load_products():
            if p.id is None:
                continue
            self._products[p.id] = p
            if p.id >= self._next_id:
                self._next_id = p.id + 1

    def _checkpoint(self) -> None:
        self.data_manager.save_products(self.find_all())

    # ---- Writes ----
    def save(self, product: Product) -> Product:
        stamp = now()
        if product.id is None:
            product.id = self._next_id
            self._next_id += 1
            product.created_at = product.created_at or stamp
        product.updated_at = stamp
        self._products[product.id] = product
        self._checkpoint()
        return product

    def delete(self, product_id: int) -> bool:
        removed = self._products.pop(product_id, None)
        if removed is None:
            return False
        self._checkpoint()
        return True

    # ---- Reads ----
    def find_by_id(self, product_id: int) -> Optional[Product]:
        return self._products.get(product_id)

    def find_by_name(self, name: str) -> Optional[Product]:
        key = (name or "").strip().lower()
        for p in self._products.values():
            if p.name.lower() == key:
                return p
        return None

    def find_all(self) -> list[Product]:
        return [self._products[k] for k in sorted(self._products)]

    def find_by_category(self, category: str) -> list[Product]:
        key = (category or "").strip().lower()
        return [p for p in self.find_all() if p.category.lower() == key]

    def find_by_brand(self, brand: str) -> list[Product]:
        key = (brand or "").strip().lower()
        return [p for p in self.find_all() if p.brand.lower() == key]

    def get_product_stats(self) -> dict[str, int]:
        products = self._products.values()
        return {
            "total_products": len(self._products),
            "total_categories": len({p.category for p in products}),
            "total_brands": len({p.brand for p in products}),
        }
