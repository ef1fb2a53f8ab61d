from __future__ import annotations

from catalog.constants import DEFAULT_USERS
from catalog.models.user import User
from catalog.utils import hash_password


def default_users() -> list[User]:
    """The stock admin / manager / user accounts, passwords already hashed."""
    return [
        User(username, hash_password(password), role)
        for username, password, role in DEFAULT_USERS
    ]
