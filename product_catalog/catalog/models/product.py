from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from catalog.utils import now


@dataclass
class Product:
    """
    Catalog item. Equality and hashing use ``id`` only.
    No validation of price or stock happens here.
    """

    id: Optional[int] = None
    name: str = field(default="", compare=False)
    description: str = field(default="", compare=False)
    price: Decimal = field(default=Decimal("0"), compare=False)
    category: str = field(default="", compare=False)
    brand: str = field(default="", compare=False)
    stock_quantity: int = field(default=0, compare=False)
    created_at: Optional[datetime] = field(default=None, compare=False)
    updated_at: Optional[datetime] = field(default=None, compare=False)

    def __hash__(self) -> int:
        return hash(self.id)

    @classmethod
    def new(
        cls,
        name: str,
        description: str,
        price: Decimal,
        category: str,
        brand: str,
        stock_quantity: int,
    ) -> "Product":
        """Build an unsaved product stamped with the current time."""
        stamp = now()
        return cls(
            id=None,
            name=name,
            description=description,
            price=price,
            category=category,
            brand=brand,
            stock_quantity=stock_quantity,
            created_at=stamp,
            updated_at=stamp,
        )

    def touch(self) -> None:
        self.updated_at = now()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": str(self.price),
            "category": self.category,
            "brand": self.brand,
            "stock_quantity": self.stock_quantity,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        created = data.get("created_at")
        updated = data.get("updated_at")
        raw_id = data.get("id")
        return cls(
            id=int(raw_id) if raw_id is not None else None,
            name=str(data.get("name", "")),
            description=str(data.get("description", "")),
            price=Decimal(str(data.get("price", "0"))),
            category=str(data.get("category", "")),
            brand=str(data.get("brand", "")),
            stock_quantity=int(data.get("stock_quantity", 0)),
            created_at=datetime.fromisoformat(created) if created else None,
            updated_at=datetime.fromisoformat(updated) if updated else None,
        )
