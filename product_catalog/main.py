from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from catalog.config import (
    APP_NAME,
    APP_VERSION,
    DATA_DIR,
    EXPORTS_DIR,
    LOG_LEVEL,
    PRODUCTS_FILE_NAME,
    USERS_FILE_NAME,
)
from catalog.db.product_data_manager import ProductDataManager
from catalog.db.product_repository import InMemoryProductRepository
from catalog.db.user_data_manager import UserDataManager
from catalog.logger import configure_logging
from catalog.services.audit_service import AuditService
from catalog.services.auth_service import AuthService
from catalog.services.export_service import ExportService
from catalog.services.metrics_service import MetricsService
from catalog.services.product_service import ProductService
from catalog.services.report_service import ReportService
from catalog.ui.console_menu import ConsoleMenu

log = logging.getLogger("catalog.main")


def build_menu(data_dir: Path, exports_dir: Path) -> ConsoleMenu:
    metrics = MetricsService()
    repository = InMemoryProductRepository(ProductDataManager(data_dir / PRODUCTS_FILE_NAME))
    auth = AuthService(UserDataManager(data_dir / USERS_FILE_NAME))

    return ConsoleMenu(
        products=ProductService(repository, metrics),
        auth=auth,
        audit=AuditService(),
        metrics=metrics,
        exports=ExportService(repository, exports_dir),
        reports=ReportService(repository, exports_dir),
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    ap = argparse.ArgumentParser(prog="product-catalog", description=f"{APP_NAME} v{APP_VERSION}")
    ap.add_argument("--data-dir", type=Path, default=DATA_DIR,
                    help="directory holding users.dat and products.dat")
    ap.add_argument("--exports-dir", type=Path, default=EXPORTS_DIR,
                    help="directory for CSV / Excel / chart exports")
    ap.add_argument("--log-level", default=LOG_LEVEL,
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"], type=str.upper)
    args = ap.parse_args(argv)

    configure_logging(args.log_level)
    log.info("Starting %s v%s (data: %s)", APP_NAME, APP_VERSION, args.data_dir)

    build_menu(args.data_dir, args.exports_dir).run()


if __name__ == "__main__":
    main()
