from __future__ import annotations

import logging
from typing import Optional

from catalog.constants import (
    ERROR_EMPTY_CREDENTIALS,
    ERROR_INVALID_CREDENTIALS,
    ERROR_USER_EXISTS,
    ERROR_USER_NOT_FOUND,
    GUEST_USERNAME,
    UserRole,
)
from catalog.db.seed_users import default_users
from catalog.db.user_data_manager import UserDataManager
from catalog.models.user import User
from catalog.utils import hash_password, verify_password
from catalog.validators import nonempty

log = logging.getLogger(__name__)


class AuthService:
    def __init__(self, data_manager: Optional[UserDataManager] = None):
        self.data_manager = data_manager or UserDataManager()
        self._users: dict[str, User] = {}
        self._current_user: Optional[User] = None
        self._last_error: str = ""
        self._load_users()

    def _load_users(self) -> None:
        loaded = self.data_manager.load_users()
        if loaded:
            for user in loaded:
                self._users[user.username] = user
            return

        log.info("Seeding default users")
        for user in default_users():
            self._users[user.username] = user
        self._save_users()

    def _save_users(self) -> None:
        ok, msg = self.data_manager.save_users(list(self._users.values()))
        if not ok:
            self._last_error = msg

    def get_last_error(self) -> str:
        return self._last_error

    # ---- Session ----
    def login(self, username: str, password: str) -> bool:
        self._last_error = ""
        user = self._users.get((username or "").strip())
        if not user:
            self._last_error = ERROR_USER_NOT_FOUND
            return False

        if not verify_password(password or "", user.password):
            self._last_error = ERROR_INVALID_CREDENTIALS
            return False

        if self._current_user is not None and self._current_user is not user:
            self._current_user.is_logged_in = False
        user.is_logged_in = True
        self._current_user = user
        log.info("User '%s' signed in", user.username)
        return True

    def logout(self) -> None:
        if self._current_user is not None:
            self._current_user.is_logged_in = False
            log.info("User '%s' signed out", self._current_user.username)
        self._current_user = None
        self._last_error = ""

    def register(
        self, username: Optional[str], password: Optional[str],
        role: UserRole = UserRole.USER,
    ) -> bool:
        self._last_error = ""
        if not nonempty(username) or not nonempty(password):
            self._last_error = ERROR_EMPTY_CREDENTIALS
            return False

        username = username.strip()
        if username in self._users:
            self._last_error = ERROR_USER_EXISTS
            return False

        self._users[username] = User(username, hash_password(password.strip()), UserRole(role))
        self._save_users()
        log.info("Registered user '%s' with role %s", username, UserRole(role).value)
        return True

    # ---- Current user ----
    def is_authenticated(self) -> bool:
        return self._current_user is not None

    def get_current_user(self) -> Optional[User]:
        return self._current_user

    def get_current_username(self) -> str:
        return self._current_user.username if self._current_user else GUEST_USERNAME

    def get_current_user_role(self) -> Optional[UserRole]:
        return self._current_user.role if self._current_user else None

    # ---- Permissions ----
    def can_manage_products(self) -> bool:
        return self._current_user is not None and self._current_user.can_manage_products()

    def can_view_audit(self) -> bool:
        return self._current_user is not None and self._current_user.can_view_audit()

    def is_admin(self) -> bool:
        return self._current_user is not None and self._current_user.is_admin()

    def has_permission(self, perm: str) -> bool:
        return self._current_user is not None and self._current_user.has_permission(perm)

    def get_users(self) -> dict[str, User]:
        return dict(self._users)
