from __future__ import annotations

from enum import Enum


# APP ROLES (match stored values)
class UserRole(str, Enum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    USER = "USER"

    def __str__(self) -> str:
        return self.value


ROLES = [UserRole.ADMIN, UserRole.MANAGER, UserRole.USER]

# ── Permission keys ───────────────────────────────────────────────────────────
P_VIEW_CATALOG = "can_view_catalog"
P_MANAGE_PRODS = "can_manage_products"
P_VIEW_AUDIT   = "can_view_audit"
P_METRICS      = "can_view_metrics"
P_EXPORT       = "can_export_data"
P_MANAGE_USERS = "can_manage_users"

ALL_PERMISSION_KEYS: list[str] = [
    P_VIEW_CATALOG,
    P_MANAGE_PRODS,
    P_VIEW_AUDIT,
    P_METRICS,
    P_EXPORT,
    P_MANAGE_USERS,
]


DEFAULT_ROLE_PERMISSIONS: dict[UserRole, set[str]] = {
    UserRole.ADMIN: set(ALL_PERMISSION_KEYS),
    UserRole.MANAGER: {
        P_VIEW_CATALOG, P_MANAGE_PRODS, P_VIEW_AUDIT, P_METRICS, P_EXPORT,
    },
    UserRole.USER: {
        P_VIEW_CATALOG,
    },
}

# ── Seeded accounts (username, password, role) ───────────────────────────────
DEFAULT_USERS: list[tuple[str, str, UserRole]] = [
    ("admin", "admin123", UserRole.ADMIN),
    ("manager", "manager123", UserRole.MANAGER),
    ("user", "user123", UserRole.USER),
]

GUEST_USERNAME = "Guest"

# AUTH MESSAGES
ERROR_USER_NOT_FOUND      = "User not found"
ERROR_INVALID_CREDENTIALS = "Invalid username or password"
ERROR_EMPTY_CREDENTIALS   = "Username and password cannot be empty"
ERROR_USER_EXISTS         = "Username already exists"

# ── Audit actions ─────────────────────────────────────────────────────────────
A_LOGIN            = "LOGIN"
A_LOGIN_FAILED     = "LOGIN_FAILED"
A_REGISTER         = "REGISTER"
A_REGISTER_FAILED  = "REGISTER_FAILED"
A_LOGOUT           = "LOGOUT"
A_VIEW_PRODUCTS    = "VIEW_PRODUCTS"
A_FIND_BY_ID       = "FIND_BY_ID"
A_FIND_BY_NAME     = "FIND_BY_NAME"
A_FIND_BY_CATEGORY = "FIND_BY_CATEGORY"
A_FIND_BY_BRAND    = "FIND_BY_BRAND"
A_ADD_PRODUCT      = "ADD_PRODUCT"
A_UPDATE_PRODUCT   = "UPDATE_PRODUCT"
A_DELETE_PRODUCT   = "DELETE_PRODUCT"
A_VIEW_CACHE       = "VIEW_CACHE_STATS"
A_VIEW_AUDIT       = "VIEW_AUDIT_LOG"
A_VIEW_METRICS     = "VIEW_METRICS"
A_MANAGE_USERS     = "MANAGE_USERS"
A_CREATE_USER      = "CREATE_USER"
A_EXPORT           = "EXPORT"
A_ACCESS_DENIED    = "ACCESS_DENIED"
A_INVALID_CHOICE   = "INVALID_CHOICE"

# ── Metrics operation names ───────────────────────────────────────────────────
OP_FIND_BY_ID       = "find_by_id"
OP_FIND_BY_NAME     = "find_by_name"
OP_FIND_BY_CATEGORY = "find_by_category"
OP_FIND_BY_BRAND    = "find_by_brand"
OP_ADD_PRODUCT      = "add_product"
OP_ADD_FAILED       = "add_product_failed"
OP_UPDATE_PRODUCT   = "update_product"
OP_DELETE_PRODUCT   = "delete_product"
OP_LIST_PRODUCTS    = "list_products"
