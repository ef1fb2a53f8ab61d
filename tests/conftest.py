"""Shared fixtures: every test gets its own data directory."""

from decimal import Decimal

import pytest

from catalog.db.product_data_manager import ProductDataManager
from catalog.db.product_repository import InMemoryProductRepository
from catalog.db.user_data_manager import UserDataManager
from catalog.models.product import Product
from catalog.services.auth_service import AuthService
from catalog.services.metrics_service import MetricsService
from catalog.services.product_service import ProductService


@pytest.fixture
def users_path(tmp_path):
    return tmp_path / "users.dat"


@pytest.fixture
def products_path(tmp_path):
    return tmp_path / "products.dat"


@pytest.fixture
def user_manager(users_path):
    return UserDataManager(users_path)


@pytest.fixture
def product_manager(products_path):
    return ProductDataManager(products_path)


@pytest.fixture
def repository(product_manager):
    return InMemoryProductRepository(product_manager)


@pytest.fixture
def metrics():
    return MetricsService()


@pytest.fixture
def product_service(repository, metrics):
    return ProductService(repository, metrics)


@pytest.fixture
def auth(user_manager):
    return AuthService(user_manager)


@pytest.fixture
def make_product():
    def _make(name="Phone", category="Electronics", brand="Acme",
              price="199.99", qty=10, description="A product"):
        return Product.new(name, description, Decimal(price), category, brand, qty)
    return _make
