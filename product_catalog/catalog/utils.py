from __future__ import annotations

import hashlib
import hmac
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any

# ---------------- Password hashing ----------------
# users.dat keeps only the digest, so the salt is fixed for the life of that
# file. Changing it locks every stored account out.

_SALT = b"product-catalog-salt"

def hash_password(password: str) -> str:
    data = _SALT + password.encode("utf-8")
    return hashlib.sha256(data).hexdigest()

def verify_password(password: str, password_hash: str) -> bool:
    return hmac.compare_digest(hash_password(password), password_hash)


# ---------------- Time ----------------
def now() -> datetime:
    return datetime.now()

def format_duration(delta: timedelta) -> str:
    total = int(delta.total_seconds())
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


# ---------------- Money formatting ----------------
def to_decimal(value: Any) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal("0")

def money(value: Any, currency: str = "RUB") -> str:
    return f"{to_decimal(value):,.2f} {currency}"
