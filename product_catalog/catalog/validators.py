from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional


def nonempty(s: Optional[str]) -> bool:
    return bool(s and s.strip())

def nonneg_int(s: str) -> bool:
    try:
        return int(s) >= 0
    except (TypeError, ValueError):
        return False

def parse_price(s: str) -> Optional[Decimal]:
    """Positive decimal amount; accepts ',' as the decimal separator."""
    try:
        value = Decimal(s.strip().replace(",", "."))
        if not value.is_finite() or value <= 0:
            return None
        return value.quantize(Decimal("0.01"))
    except (AttributeError, InvalidOperation):
        return None
