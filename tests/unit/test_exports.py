"""Unit tests for CSV / Excel exports and the stock chart."""

import csv

import openpyxl

from catalog.services.export_service import HEADERS, ExportService
from catalog.services.report_service import ReportService


class TestExportService:
    def test_csv(self, repository, make_product, tmp_path):
        repository.save(make_product("A", price="10.50", qty=3))
        repository.save(make_product("B", qty=7))

        path = ExportService(repository, tmp_path / "exports").export_catalog_csv()
        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))

        assert path.name == "catalog.csv"
        assert rows[0] == HEADERS
        assert [r[1] for r in rows[1:]] == ["A", "B"]
        assert rows[1][3] == "10.50"

    def test_xlsx(self, repository, make_product, tmp_path):
        repository.save(make_product("A", qty=3))
        repository.save(make_product("B", qty=7))

        path = ExportService(repository).export_catalog_xlsx(tmp_path / "out.xlsx")
        ws = openpyxl.load_workbook(path).active

        assert ws.title == "Catalog"
        assert ws.cell(row=4, column=2).value == "name"
        assert ws.cell(row=5, column=2).value == "A"
        assert ws.cell(row=6, column=2).value == "B"
        assert ws.cell(row=7, column=1).value == "TOTAL"
        assert ws.cell(row=7, column=7).value == 10


class TestReportService:
    def test_stock_by_category(self, repository, make_product):
        repository.save(make_product("A", category="Books", qty=2))
        repository.save(make_product("B", category="Books", qty=3))
        repository.save(make_product("C", category="Audio", qty=1))

        assert ReportService(repository).stock_by_category() == [("Audio", 1), ("Books", 5)]

    def test_chart_is_written(self, repository, make_product, tmp_path):
        repository.save(make_product("A", category="Books", qty=2))
        path = ReportService(repository, tmp_path).render_stock_chart()

        assert path.exists()
        assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_empty_catalog_chart_as_pdf(self, repository, tmp_path):
        path = ReportService(repository).render_stock_chart(tmp_path / "stock.pdf")
        assert path.read_bytes()[:4] == b"%PDF"
