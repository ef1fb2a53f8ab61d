"""Unit tests for the audit journal and operation metrics."""

import pytest

from catalog.services.audit_service import AuditService
from catalog.services.metrics_service import MetricsService


class TestAuditService:
    def test_entries_in_order(self):
        audit = AuditService()
        audit.log_action("alice", "LOGIN", "ok")
        audit.log_action("alice", "LOGOUT")

        entries = audit.entries()
        assert [e.action for e in entries] == ["LOGIN", "LOGOUT"]
        assert entries[1].details == ""

    def test_entries_returns_copy(self):
        audit = AuditService()
        audit.log_action("a", "X")
        audit.entries().clear()
        assert len(audit.entries()) == 1

    def test_format_entry(self):
        entry = AuditService().log_action("bob", "VIEW", "all products")
        line = AuditService.format_entry(entry)
        assert "User: bob" in line
        assert "Action: VIEW" in line
        assert "Details: all products" in line


class TestMetricsService:
    def test_empty_summary(self):
        s = MetricsService().summary()
        assert s["operations"] == {}
        assert s["fastest"] is None
        assert s["slowest"] is None
        assert s["total_operations"] == 0

    def test_record_and_summary(self):
        m = MetricsService()
        m.record_operation("fast", 0.001)
        m.record_operation("slow", 0.5)
        m.record_operation("slow", 0.3)

        s = m.summary()
        assert s["operations"]["slow"]["count"] == 2
        assert s["operations"]["slow"]["avg_ms"] == pytest.approx(400.0)
        assert s["fastest"] == "fast"
        assert s["slowest"] == "slow"
        assert s["total_operations"] == 3

    def test_timed_records_even_on_error(self):
        m = MetricsService()
        with pytest.raises(RuntimeError):
            with m.timed("boom"):
                raise RuntimeError("x")
        assert m.count("boom") == 1

    def test_increment_counter_only_counts(self):
        m = MetricsService()
        m.increment_counter("failed")
        assert m.count("failed") == 1
        assert "failed" not in m.summary()["operations"]

    def test_uptime_format(self):
        assert len(MetricsService().format_uptime()) == 8

    def test_instances_do_not_share_counts(self):
        first, second = MetricsService(), MetricsService()
        first.record_operation("list", 0.01)

        assert first.count("list") == 1
        assert second.count("list") == 0
        assert first.registry.get_sample_value(
            "catalog_operation_duration_seconds_count", {"operation": "list"}
        ) == 1
