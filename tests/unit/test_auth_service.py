"""Unit tests for sign-in, registration and permissions."""

import json

from catalog.constants import ERROR_INVALID_CREDENTIALS, ERROR_USER_NOT_FOUND, UserRole
from catalog.db.user_data_manager import UserDataManager
from catalog.models.user import User
from catalog.services.auth_service import AuthService


class TestSeeding:
    def test_default_users_seeded_when_file_missing(self, auth, users_path):
        users = auth.get_users()
        assert set(users) == {"admin", "manager", "user"}
        assert users["admin"].role is UserRole.ADMIN
        assert users_path.exists()

    def test_default_users_seeded_when_file_empty(self, user_manager):
        user_manager.save_users([])
        auth = AuthService(user_manager)
        assert "admin" in auth.get_users()

    def test_passwords_are_not_stored_in_plain_text(self, auth, users_path):
        raw = users_path.read_text(encoding="utf-8")
        assert "admin123" not in raw
        assert auth.login("admin", "admin123")

    def test_existing_users_are_loaded(self, user_manager):
        seeded = AuthService(user_manager)
        seeded.register("carol", "secret", UserRole.MANAGER)

        reloaded = AuthService(UserDataManager(user_manager.path))
        assert reloaded.get_users()["carol"].role is UserRole.MANAGER
        assert reloaded.login("carol", "secret")


class TestLogin:
    def test_valid_credentials(self, auth):
        auth.register("testuser", "password123", UserRole.USER)

        assert auth.login("testuser", "password123")
        assert auth.is_authenticated()
        assert auth.get_current_username() == "testuser"
        assert auth.get_current_user_role() is UserRole.USER
        assert auth.get_current_user().is_logged_in

    def test_wrong_password(self, auth):
        auth.register("testuser", "password123")

        assert not auth.login("testuser", "wrong")
        assert not auth.is_authenticated()
        assert auth.get_current_user() is None
        assert auth.get_last_error() == ERROR_INVALID_CREDENTIALS

    def test_unknown_user(self, auth):
        assert not auth.login("unknown", "password")
        assert auth.get_last_error() == ERROR_USER_NOT_FOUND

    def test_logout_clears_current_user(self, auth):
        auth.login("admin", "admin123")
        user = auth.get_current_user()
        auth.logout()

        assert not auth.is_authenticated()
        assert user.is_logged_in is False
        assert auth.get_current_username() == "Guest"
        assert auth.get_current_user_role() is None


class TestRegister:
    def test_new_user_defaults_to_user_role(self, auth, user_manager):
        assert auth.register("newuser", "newpassword123")
        assert auth.get_users()["newuser"].role is UserRole.USER
        assert User("newuser") in user_manager.load_users()

    def test_existing_username_rejected(self, auth):
        auth.register("existing", "password123")
        assert not auth.register("existing", "other")

    def test_invalid_values_rejected(self, auth):
        assert not auth.register("", "password")
        assert not auth.register("user1", "")
        assert not auth.register(None, "password")
        assert not auth.register("user1", None)
        assert not auth.register("   ", "password")

    def test_username_and_password_are_trimmed(self, auth):
        assert auth.register("  trimmed  ", "  password  ")
        assert "trimmed" in auth.get_users()
        assert auth.login("trimmed", "password")

    def test_saved_file_lists_registered_user(self, auth, users_path):
        auth.register("dave", "pw")
        doc = json.loads(users_path.read_text(encoding="utf-8"))
        assert "dave" in [r["username"] for r in doc["records"]]


class TestPermissions:
    def _as(self, auth, role):
        name = f"{role.value.lower()}_x"
        auth.register(name, "pw", role)
        auth.login(name, "pw")

    def test_admin(self, auth):
        self._as(auth, UserRole.ADMIN)
        assert auth.can_manage_products()
        assert auth.can_view_audit()
        assert auth.is_admin()

    def test_manager(self, auth):
        self._as(auth, UserRole.MANAGER)
        assert auth.can_manage_products()
        assert auth.can_view_audit()
        assert not auth.is_admin()

    def test_user(self, auth):
        self._as(auth, UserRole.USER)
        assert not auth.can_manage_products()
        assert not auth.can_view_audit()
        assert not auth.is_admin()

    def test_signed_out(self, auth):
        assert not auth.can_manage_products()
        assert not auth.can_view_audit()
        assert not auth.is_admin()
        assert auth.get_current_username() == "Guest"

    def test_get_users_returns_a_copy(self, auth):
        users = auth.get_users()
        users["temp"] = User("temp")
        assert "temp" not in auth.get_users()
