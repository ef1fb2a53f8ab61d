from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from catalog.constants import DEFAULT_ROLE_PERMISSIONS, UserRole


@dataclass
class User:
    """
    Account record. Equality and hashing use ``username`` only
    (case-sensitive): two users with the same name compare equal even when
    role or password differ.
    """

    username: str
    password: str = field(default="", compare=False, repr=False)
    role: UserRole = field(default=UserRole.USER, compare=False)
    is_logged_in: bool = field(default=False, compare=False)

    def __post_init__(self):
        self.role = UserRole(self.role)

    def __hash__(self) -> int:
        return hash(self.username)

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def is_manager(self) -> bool:
        return self.role == UserRole.MANAGER

    def is_user(self) -> bool:
        return self.role == UserRole.USER

    def can_manage_products(self) -> bool:
        return self.is_admin() or self.is_manager()

    def can_view_audit(self) -> bool:
        return self.is_admin() or self.is_manager()

    def has_permission(self, perm: str) -> bool:
        return perm in DEFAULT_ROLE_PERMISSIONS.get(self.role, set())

    def to_dict(self) -> dict[str, Any]:
        # is_logged_in is session state and is not stored
        return {
            "username": self.username,
            "password": self.password,
            "role": UserRole(self.role).value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        return cls(
            username=str(data["username"]),
            password=str(data.get("password", "")),
            role=UserRole(str(data.get("role", UserRole.USER.value)).upper()),
            is_logged_in=False,
        )
