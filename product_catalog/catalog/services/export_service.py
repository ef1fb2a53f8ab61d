from __future__ import annotations

import csv
from pathlib import Path
from typing import Optional

import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from catalog.config import APP_NAME, CURRENCY, EXPORTS_DIR
from catalog.db.product_repository import InMemoryProductRepository
from catalog.utils import now

HEADERS = ["id", "name", "description", "price", "category", "brand",
           "stock_quantity", "created_at", "updated_at"]


class ExportService:
    def __init__(self, repository: InMemoryProductRepository, exports_dir: Optional[Path] = None):
        self.repository = repository
        self.exports_dir = Path(exports_dir) if exports_dir else Path(EXPORTS_DIR)

    def _target(self, out_path: Optional[Path], default_name: str) -> Path:
        if out_path:
            out_path = Path(out_path)
        else:
            out_path = self.exports_dir / default_name
        out_path.parent.mkdir(parents=True, exist_ok=True)
        return out_path

    def export_catalog_csv(self, out_path: Optional[Path] = None) -> Path:
        out_path = self._target(out_path, "catalog.csv")
        with open(out_path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(HEADERS)
            for p in self.repository.find_all():
                d = p.to_dict()
                w.writerow([d[h] for h in HEADERS])
        return out_path

    def export_catalog_xlsx(self, out_path: Optional[Path] = None) -> Path:
        out_path = self._target(out_path, "catalog.xlsx")
        products = self.repository.find_all()

        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "Catalog"

        title_fill   = PatternFill("solid", fgColor="6B4B3A")
        title_font   = Font(bold=True, size=14, color="FFFFFF")
        header_fill  = PatternFill("solid", fgColor="EADFD2")
        header_font  = Font(bold=True, size=10, color="1F1F1F")
        total_fill   = PatternFill("solid", fgColor="F0FAF4")
        thin_border  = Border(bottom=Side(style="thin", color="D5C7B8"))
        center_align = Alignment(horizontal="center", vertical="center")
        right_align  = Alignment(horizontal="right", vertical="center")

        last_col = get_column_letter(len(HEADERS))

        # ── Title block ───────────────────────────────────────────────────
        ws.merge_cells(f"A1:{last_col}1")
        ws["A1"] = f"{APP_NAME} - Catalog export"
        ws["A1"].font = title_font
        ws["A1"].fill = title_fill
        ws["A1"].alignment = center_align
        ws.row_dimensions[1].height = 28

        ws.merge_cells(f"A2:{last_col}2")
        ws["A2"] = f"Generated: {now().strftime('%Y-%m-%d %H:%M')}  |  Products: {len(products)}"
        ws["A2"].font = Font(size=10, color="6E6E6E")
        ws["A2"].alignment = center_align

        # ── Column headers ────────────────────────────────────────────────
        for col_idx, h in enumerate(HEADERS, start=1):
            cell = ws.cell(row=4, column=col_idx, value=h)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = center_align
            cell.border = thin_border

        # ── Data rows ─────────────────────────────────────────────────────
        for row_idx, p in enumerate(products, start=5):
            ws.cell(row=row_idx, column=1, value=p.id)
            ws.cell(row=row_idx, column=2, value=p.name)
            ws.cell(row=row_idx, column=3, value=p.description)
            c_price = ws.cell(row=row_idx, column=4, value=float(p.price))
            c_price.number_format = f'#,##0.00 "{CURRENCY}"'
            c_price.alignment = right_align
            ws.cell(row=row_idx, column=5, value=p.category)
            ws.cell(row=row_idx, column=6, value=p.brand)
            ws.cell(row=row_idx, column=7, value=p.stock_quantity)
            ws.cell(row=row_idx, column=8, value=p.created_at)
            ws.cell(row=row_idx, column=9, value=p.updated_at)

        # ── Totals row ────────────────────────────────────────────────────
        totals_row = len(products) + 5
        ws.cell(row=totals_row, column=1, value="TOTAL").font = Font(bold=True, size=10)
        c_stock = ws.cell(
            row=totals_row, column=7,
            value=sum(p.stock_quantity for p in products),
        )
        c_stock.font = Font(bold=True, size=10)
        for col_idx in range(1, len(HEADERS) + 1):
            ws.cell(row=totals_row, column=col_idx).fill = total_fill

        widths = [6, 24, 36, 14, 18, 18, 10, 20, 20]
        for col_idx, width in enumerate(widths, start=1):
            ws.column_dimensions[get_column_letter(col_idx)].width = width

        ws.freeze_panes = "A5"

        wb.save(out_path)
        return out_path
