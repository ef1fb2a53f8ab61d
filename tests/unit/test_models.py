"""Unit tests for the Product and User records."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from catalog.constants import P_MANAGE_USERS, P_VIEW_CATALOG, UserRole
from catalog.models.product import Product
from catalog.models.user import User


class TestProduct:
    def test_new_sets_equal_timestamps_near_now(self):
        before = datetime.now()
        p = Product.new("Phone", "desc", Decimal("10.00"), "Electronics", "Acme", 3)
        after = datetime.now()

        assert p.id is None
        assert p.created_at == p.updated_at
        assert before <= p.created_at <= after

    def test_equality_uses_id_only(self):
        a = Product(id=7, name="A", price=Decimal("1"))
        b = Product(id=7, name="B", price=Decimal("999"), stock_quantity=50)
        c = Product(id=8, name="A", price=Decimal("1"))

        assert a == b
        assert hash(a) == hash(b)
        assert a != c
        assert len({a, b, c}) == 2

    def test_no_validation_of_price_or_stock(self):
        p = Product.new("Odd", "", Decimal("-5"), "X", "Y", -1)
        assert p.price == Decimal("-5")
        assert p.stock_quantity == -1

    def test_touch_refreshes_updated_at(self):
        p = Product.new("Phone", "", Decimal("1"), "", "", 0)
        p.updated_at = p.updated_at - timedelta(hours=1)
        old = p.updated_at
        p.touch()
        assert p.updated_at > old
        assert p.created_at > old

    def test_dict_record_keeps_all_fields(self):
        p = Product.new("Phone", "desc", Decimal("12.50"), "Electronics", "Acme", 4)
        p.id = 3
        restored = Product.from_dict(p.to_dict())

        assert restored == p
        assert restored.name == "Phone"
        assert restored.price == Decimal("12.50")
        assert restored.created_at == p.created_at
        assert restored.stock_quantity == 4


class TestUser:
    @pytest.mark.parametrize("role", list(UserRole))
    def test_permissions_follow_role(self, role):
        user = User("u", "pw", role)
        expected = role in (UserRole.ADMIN, UserRole.MANAGER)

        assert user.can_manage_products() is expected
        assert user.can_view_audit() is expected

    def test_role_predicates(self):
        assert User("a", "", UserRole.ADMIN).is_admin()
        assert User("m", "", UserRole.MANAGER).is_manager()
        assert User("u", "", UserRole.USER).is_user()
        assert not User("u", "", UserRole.USER).is_admin()

    def test_logged_in_defaults_to_false(self):
        assert User("alice", "pw1", UserRole.ADMIN).is_logged_in is False

    def test_same_username_compares_equal(self):
        a = User("alice", "pw1", UserRole.ADMIN, False)
        b = User("alice", "other", UserRole.USER, True)

        assert a == b
        assert hash(a) == hash(b)
        assert a.role != b.role

    def test_username_match_is_case_sensitive(self):
        assert User("alice") != User("Alice")

    def test_role_given_as_text_is_coerced(self):
        user = User("bob", "pw", "MANAGER")

        assert user.role is UserRole.MANAGER
        assert user.to_dict()["role"] == "MANAGER"

    def test_unknown_role_rejected(self):
        with pytest.raises(ValueError):
            User("bob", "pw", "ROOT")

    def test_has_permission(self):
        assert User("a", "", UserRole.ADMIN).has_permission(P_MANAGE_USERS)
        assert not User("m", "", UserRole.MANAGER).has_permission(P_MANAGE_USERS)
        assert User("u", "", UserRole.USER).has_permission(P_VIEW_CATALOG)

    def test_record_does_not_restore_session_flag(self):
        user = User("alice", "pw1", UserRole.MANAGER, True)
        restored = User.from_dict(user.to_dict())

        assert restored == user
        assert restored.role is UserRole.MANAGER
        assert restored.is_logged_in is False
