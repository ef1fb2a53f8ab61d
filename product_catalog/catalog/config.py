from __future__ import annotations

import os
from pathlib import Path

# ---------------- App Info ----------------
APP_NAME = "Marketplace Product Catalog"
APP_VERSION = "1.0"


# ---------------- Paths ----------------
BASE_DIR = Path(__file__).resolve().parent  # .../catalog
PROJECT_DIR = BASE_DIR.parent  # product_catalog/

DATA_DIR = Path(os.getenv("CATALOG_DATA_DIR") or PROJECT_DIR / "data")
USERS_FILE_NAME = "users.dat"
PRODUCTS_FILE_NAME = "products.dat"
USERS_FILE = DATA_DIR / USERS_FILE_NAME
PRODUCTS_FILE = DATA_DIR / PRODUCTS_FILE_NAME

EXPORTS_DIR = Path(os.getenv("CATALOG_EXPORTS_DIR") or PROJECT_DIR / "exports")


# ---------------- Storage format ----------------
STORAGE_FORMAT = "product-catalog"
STORAGE_VERSION = 1


# ---------------- Logging ----------------
LOG_LEVEL = os.getenv("CATALOG_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


# ---------------- Console ----------------
LOGIN_ATTEMPTS = 3
CURRENCY = "RUB"
