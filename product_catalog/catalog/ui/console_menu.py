from __future__ import annotations

from decimal import Decimal
from typing import Callable, Optional

from catalog.config import APP_NAME, CURRENCY, LOGIN_ATTEMPTS
from catalog.constants import (
    A_ACCESS_DENIED,
    A_ADD_PRODUCT,
    A_CREATE_USER,
    A_DELETE_PRODUCT,
    A_EXPORT,
    A_FIND_BY_BRAND,
    A_FIND_BY_CATEGORY,
    A_FIND_BY_ID,
    A_FIND_BY_NAME,
    A_INVALID_CHOICE,
    A_LOGIN,
    A_LOGIN_FAILED,
    A_LOGOUT,
    A_MANAGE_USERS,
    A_REGISTER,
    A_REGISTER_FAILED,
    A_UPDATE_PRODUCT,
    A_VIEW_AUDIT,
    A_VIEW_CACHE,
    A_VIEW_METRICS,
    A_VIEW_PRODUCTS,
    P_EXPORT,
    ROLES,
    UserRole,
)
from catalog.exceptions import CatalogError
from catalog.models.product import Product
from catalog.services.audit_service import AuditService
from catalog.services.auth_service import AuthService
from catalog.services.export_service import ExportService
from catalog.services.metrics_service import MetricsService
from catalog.services.product_service import ProductService
from catalog.services.report_service import ReportService
from catalog.utils import money
from catalog.validators import nonneg_int, parse_price


class ConsoleMenu:
    """
    Text front end. Reads through ``input_func`` and writes through
    ``output`` so it can be driven by scripted input.
    """

    def __init__(
        self,
        products: ProductService,
        auth: AuthService,
        audit: AuditService,
        metrics: MetricsService,
        exports: Optional[ExportService] = None,
        reports: Optional[ReportService] = None,
        input_func: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
    ):
        self.products = products
        self.auth = auth
        self.audit = audit
        self.metrics = metrics
        self.exports = exports
        self.reports = reports
        self._input = input_func
        self._out = output

    # ──────────────────────────────────────────────────────────────────────
    # Loop
    # ──────────────────────────────────────────────────────────────────────

    def run(self) -> None:
        self._out(f"=== {APP_NAME.upper()} ===")
        try:
            while True:
                if not self.auth.is_authenticated():
                    if not self._auth_menu():
                        return
                    continue
                self._show_main_menu()
                self._process_choice(self._read_choice())
        except EOFError:
            self._out("")
        finally:
            self.auth.logout()

    def _ask(self, prompt: str) -> str:
        return self._input(prompt)

    def _read_choice(self, prompt: str = "Choose an action: ") -> int:
        raw = self._ask(prompt).strip()
        try:
            return int(raw)
        except ValueError:
            return -1

    # ──────────────────────────────────────────────────────────────────────
    # Auth menu
    # ──────────────────────────────────────────────────────────────────────

    def _auth_menu(self) -> bool:
        """False when the user chose to quit."""
        while not self.auth.is_authenticated():
            self._out("\n=== SIGN IN ===")
            self._out("1. Log in")
            self._out("2. Register")
            self._out("3. Quit")
            choice = self._read_choice()
            if choice == 1:
                self._login()
            elif choice == 2:
                self._register()
            elif choice == 3:
                self._out("Goodbye.")
                return False
            else:
                self._out("Invalid choice, try again.")
        return True

    def _login(self) -> None:
        self._out("\n=== LOG IN ===")
        attempts = LOGIN_ATTEMPTS
        while attempts > 0 and not self.auth.is_authenticated():
            username = self._ask("Username: ").strip()
            password = self._ask("Password: ")
            if self.auth.login(username, password):
                self.audit.log_action(username, A_LOGIN, "Signed in")
                self._out(f"Welcome, {username}!")
                return
            attempts -= 1
            self.audit.log_action(username, A_LOGIN_FAILED, self.auth.get_last_error())
            self._out(f"Invalid username or password. Attempts left: {attempts}")
        if not self.auth.is_authenticated():
            self._out("Too many failed attempts. Try again later.")

    def _register(self) -> None:
        self._out("\n=== REGISTER ===")
        username = self._ask("Choose a username: ")
        password = self._ask("Choose a password: ")
        if self.auth.register(username, password):
            self.audit.log_action(username.strip(), A_REGISTER, "New user registered")
            self._out("Registered. You can log in now.")
        else:
            self.audit.log_action(username.strip(), A_REGISTER_FAILED, self.auth.get_last_error())
            self._out(f"Registration failed: {self.auth.get_last_error()}")

    # ──────────────────────────────────────────────────────────────────────
    # Main menu
    # ──────────────────────────────────────────────────────────────────────

    def _show_main_menu(self) -> None:
        self._out("\n=== MAIN MENU ===")
        self._out(f"Current user: {self.auth.get_current_username()} "
                  f"[{self.auth.get_current_user_role()}]")
        self._out("1. List all products")
        self._out("2. Find product by ID")
        self._out("3. Find product by name")
        self._out("4. Find products by category")
        self._out("5. Find products by brand")
        if self.auth.can_manage_products():
            self._out("6. Add product")
            self._out("7. Update product")
            self._out("8. Delete product")
        self._out("9. Cache statistics")
        if self.auth.can_view_audit():
            self._out("10. Audit journal")
        if self.auth.can_manage_products():
            self._out("11. Application metrics")
        if self.auth.is_admin():
            self._out("12. User management")
        if self.auth.has_permission(P_EXPORT):
            self._out("13. Export catalog")
        self._out("0. Log out")

    def _deny(self, what: str) -> None:
        self._out(f"Error: not enough rights to {what}")
        self.audit.log_action(self.auth.get_current_username(), A_ACCESS_DENIED, f"Tried to {what}")

    def _process_choice(self, choice: int) -> None:
        username = self.auth.get_current_username()
        manage = self.auth.can_manage_products()

        if choice == 1:
            self.audit.log_action(username, A_VIEW_PRODUCTS, "List all products")
            self._show_all_products()
        elif choice == 2:
            self.audit.log_action(username, A_FIND_BY_ID, "Find product by ID")
            self._find_by_id()
        elif choice == 3:
            self.audit.log_action(username, A_FIND_BY_NAME, "Find product by name")
            self._find_by_name()
        elif choice == 4:
            self.audit.log_action(username, A_FIND_BY_CATEGORY, "Find products by category")
            self._find_by_category()
        elif choice == 5:
            self.audit.log_action(username, A_FIND_BY_BRAND, "Find products by brand")
            self._find_by_brand()
        elif choice == 6:
            if not manage:
                return self._deny("add products")
            self.audit.log_action(username, A_ADD_PRODUCT, "Started")
            self._add_product()
        elif choice == 7:
            if not manage:
                return self._deny("update products")
            self.audit.log_action(username, A_UPDATE_PRODUCT, "Started")
            self._update_product()
        elif choice == 8:
            if not manage:
                return self._deny("delete products")
            self.audit.log_action(username, A_DELETE_PRODUCT, "Started")
            self._delete_product()
        elif choice == 9:
            self.audit.log_action(username, A_VIEW_CACHE, "Cache statistics")
            self._show_cache_stats()
        elif choice == 10:
            if not self.auth.can_view_audit():
                return self._deny("view the audit journal")
            self.audit.log_action(username, A_VIEW_AUDIT, "Audit journal")
            self._show_audit_log()
        elif choice == 11:
            if not manage:
                return self._deny("view metrics")
            self.audit.log_action(username, A_VIEW_METRICS, "Application metrics")
            self._show_metrics()
        elif choice == 12:
            if not self.auth.is_admin():
                return self._deny("manage users")
            self.audit.log_action(username, A_MANAGE_USERS, "User management")
            self._manage_users()
        elif choice == 13:
            if not self.auth.has_permission(P_EXPORT):
                return self._deny("export the catalog")
            self.audit.log_action(username, A_EXPORT, "Export catalog")
            self._export()
        elif choice == 0:
            self.audit.log_action(username, A_LOGOUT, "Session ended")
            self._out(f"Goodbye, {username}!")
            self.auth.logout()
        else:
            self.audit.log_action(username, A_INVALID_CHOICE, f"Unknown option: {choice}")
            self._out("Invalid choice!")

    # ──────────────────────────────────────────────────────────────────────
    # Catalog views
    # ──────────────────────────────────────────────────────────────────────

    def _print_short(self, p: Product) -> None:
        self._out(
            f"ID: {p.id:<3} | Name: {p.name:<15} | Price: {money(p.price, CURRENCY):>14} | "
            f"Category: {p.category:<15} | Brand: {p.brand:<15} | Qty: {p.stock_quantity:<3}"
        )

    def _print_detailed(self, p: Product) -> None:
        self._out("=== PRODUCT DETAILS ===")
        self._out(f"ID: {p.id}")
        self._out(f"Name: {p.name}")
        self._out(f"Description: {p.description}")
        self._out(f"Price: {money(p.price, CURRENCY)}")
        self._out(f"Category: {p.category}")
        self._out(f"Brand: {p.brand}")
        self._out(f"Quantity: {p.stock_quantity}")
        self._out(f"Created: {p.created_at}")
        self._out(f"Updated: {p.updated_at}")

    def _print_list(self, products: list[Product], empty_msg: str) -> None:
        if not products:
            self._out(empty_msg)
            return
        self._out(f"Found: {len(products)}")
        for p in products:
            self._print_short(p)

    def _show_all_products(self) -> None:
        self._out("\n=== ALL PRODUCTS ===")
        products = self.products.get_all_products()
        if not products:
            self._out("No products")
        for p in products:
            self._print_short(p)

        stats = self.products.product_stats()
        self._out("\n=== CATALOG STATISTICS ===")
        self._out(f" - Products: {stats['total_products']}")
        self._out(f" - Categories: {stats['total_categories']}")
        self._out(f" - Brands: {stats['total_brands']}")

    def _read_id(self, prompt: str) -> Optional[int]:
        raw = self._ask(prompt).strip()
        try:
            return int(raw)
        except ValueError:
            self._out("Error: invalid ID format")
            return None

    def _find_by_id(self) -> None:
        self._out("\n=== FIND BY ID ===")
        product_id = self._read_id("Product ID: ")
        if product_id is None:
            return
        product = self.products.get_product_by_id(product_id)
        if product is None:
            self._out(f"Product with ID {product_id} not found")
        else:
            self._print_detailed(product)

    def _find_by_name(self) -> None:
        self._out("\n=== FIND BY NAME ===")
        name = self._ask("Product name: ").strip()
        product = self.products.get_product_by_name(name)
        if product is None:
            self._out(f"Product '{name}' not found")
        else:
            self._print_detailed(product)

    def _find_by_category(self) -> None:
        self._out("\n=== FIND BY CATEGORY ===")
        category = self._ask("Category: ").strip()
        self._print_list(self.products.get_products_by_category(category),
                         f"No products in category '{category}'")

    def _find_by_brand(self) -> None:
        self._out("\n=== FIND BY BRAND ===")
        brand = self._ask("Brand: ").strip()
        self._print_list(self.products.get_products_by_brand(brand),
                         f"No products of brand '{brand}'")

    # ──────────────────────────────────────────────────────────────────────
    # Catalog edits
    # ──────────────────────────────────────────────────────────────────────

    def _read_name(self, prompt: str, current: Optional[str] = None) -> str:
        while True:
            name = self._ask(prompt).strip()
            if not name:
                self._out("Error: name cannot be empty.")
                continue
            existing = self.products.get_product_by_name(name)
            if existing is not None and existing.name != current:
                self._out(f"Error: a product named '{name}' already exists. Enter another name.")
                continue
            return name

    def _read_price(self, prompt: str) -> Decimal:
        while True:
            value = parse_price(self._ask(prompt))
            if value is not None:
                return value
            self._out("Error: enter a positive number (e.g. 15.99 or 15,99).")

    def _read_quantity(self, prompt: str) -> int:
        while True:
            raw = self._ask(prompt).strip()
            if nonneg_int(raw):
                return int(raw)
            self._out("Error: enter a whole number that is not negative.")

    def _read_product(self, current: Optional[Product] = None) -> Product:
        name = self._read_name("Name: ", current.name if current else None)
        description = self._ask("Description: ").strip()
        price = self._read_price("Price: ")
        category = self._ask("Category: ").strip()
        brand = self._ask("Brand: ").strip()
        quantity = self._read_quantity("Quantity: ")
        return Product.new(name, description, price, category, brand, quantity)

    def _add_product(self) -> None:
        self._out("\n=== ADD PRODUCT ===")
        product = self._read_product()
        try:
            saved = self.products.add_product(product)
        except CatalogError as e:
            self._out(f"Error: {e}")
            return
        self._out(f"Product added! ID: {saved.id}")

    def _update_product(self) -> None:
        self._out("\n=== UPDATE PRODUCT ===")
        product_id = self._read_id("Product ID to update: ")
        if product_id is None:
            return
        existing = self.products.get_product_by_id(product_id)
        if existing is None:
            self._out(f"Product with ID {product_id} not found")
            return
        self._out("Current data:")
        self._print_detailed(existing)
        self._out("\nEnter new data:")
        updated = self._read_product(existing)
        try:
            saved = self.products.update_product(product_id, updated)
        except CatalogError as e:
            self._out(f"Error: {e}")
            return
        self._out(f"Product updated! ID: {saved.id}")

    def _delete_product(self) -> None:
        self._out("\n=== DELETE PRODUCT ===")
        product_id = self._read_id("Product ID to delete: ")
        if product_id is None:
            return
        if self.products.delete_product(product_id):
            self._out(f"Product with ID {product_id} deleted")
        else:
            self._out(f"Product with ID {product_id} not found")

    # ──────────────────────────────────────────────────────────────────────
    # Stats, audit, users, exports
    # ──────────────────────────────────────────────────────────────────────

    def _show_cache_stats(self) -> None:
        s = self.products.cache_stats()
        self._out("\n=== CACHE STATISTICS ===")
        self._out(f"   - Products cached: {s['products_cached']}")
        self._out(f"   - Categories cached: {s['categories_cached']}")
        self._out(f"   - Brands cached: {s['brands_cached']}")
        if s["hit_rate"] is None:
            self._out("   - No cache requests yet")
        else:
            self._out(f"   - Hits: {s['hits']}")
            self._out(f"   - Misses: {s['misses']}")
            self._out(f"   - Hit rate: {s['hit_rate']:.1f}%")
        for category, count in s["categories"].items():
            self._out(f"   - category '{category}': {count} product(s)")
        for brand, count in s["brands"].items():
            self._out(f"   - brand '{brand}': {count} product(s)")

    def _show_audit_log(self) -> None:
        self._out("\n=== AUDIT JOURNAL ===")
        entries = self.audit.entries()
        if not entries:
            self._out("Journal is empty")
        for entry in entries:
            self._out(self.audit.format_entry(entry))

    def _show_metrics(self) -> None:
        s = self.metrics.summary()
        self._out("\n=== APPLICATION METRICS ===")
        self._out(f"Uptime: {s['uptime']}")
        if not s["operations"]:
            self._out("No operations recorded yet")
            return
        for op, row in s["operations"].items():
            self._out(f"   - {op}: {row['count']} call(s), avg {row['avg_ms']:.2f} ms")
        self._out(f"Fastest operation: {s['fastest']}")
        self._out(f"Slowest operation: {s['slowest']}")
        self._out(f"Total operations: {s['total_operations']}")

    def _manage_users(self) -> None:
        self._out("\n=== USER MANAGEMENT ===")
        for username, user in self.auth.get_users().items():
            online = " (online)" if user.is_logged_in else ""
            self._out(f"- {username} [{user.role}]{online}")

        self._out("1. Create user")
        self._out("0. Back")
        if self._read_choice() != 1:
            return

        username = self._ask("Username: ")
        password = self._ask("Password: ")
        self._out("Roles: " + ", ".join(f"{i}. {r.value}" for i, r in enumerate(ROLES, start=1)))
        idx = self._read_choice("Role: ")
        role = ROLES[idx - 1] if 1 <= idx <= len(ROLES) else UserRole.USER
        if self.auth.register(username, password, role):
            self.audit.log_action(self.auth.get_current_username(), A_CREATE_USER,
                                  f"Created '{username.strip()}' as {role.value}")
            self._out(f"User '{username.strip()}' created as {role.value}")
        else:
            self._out(f"Error: {self.auth.get_last_error()}")

    def _export(self) -> None:
        if self.exports is None or self.reports is None:
            self._out("Exports are not available")
            return
        self._out("\n=== EXPORT ===")
        self._out("1. Catalog to CSV")
        self._out("2. Catalog to Excel")
        self._out("3. Stock chart (PNG)")
        choice = self._read_choice()
        try:
            if choice == 1:
                path = self.exports.export_catalog_csv()
            elif choice == 2:
                path = self.exports.export_catalog_xlsx()
            elif choice == 3:
                path = self.reports.render_stock_chart()
            else:
                self._out("Invalid choice!")
                return
        except OSError as e:
            self._out(f"Export failed: {e}")
            return
        self._out(f"Saved to: {path}")
