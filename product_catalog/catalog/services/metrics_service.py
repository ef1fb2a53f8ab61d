from __future__ import annotations

import time
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Any, Iterator, Optional

from prometheus_client import CollectorRegistry, Counter, Histogram

from catalog.utils import format_duration, now

# Console operations are in-memory lookups: sub-millisecond to a few seconds
_DURATION_BUCKETS = (0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0)


class MetricsService:
    """
    Per-operation call counts and durations, kept in a private prometheus
    registry so each service instance starts from zero.
    """

    def __init__(self):
        self.started_at: datetime = now()
        self.registry = CollectorRegistry()
        self._calls = Counter(
            "catalog_operations_total",
            "Catalog operations performed",
            ["operation"],
            registry=self.registry,
        )
        self._latency = Histogram(
            "catalog_operation_duration_seconds",
            "Catalog operation duration in seconds",
            ["operation"],
            buckets=_DURATION_BUCKETS,
            registry=self.registry,
        )

    def record_operation(self, operation: str, seconds: float) -> None:
        self._calls.labels(operation=operation).inc()
        self._latency.labels(operation=operation).observe(max(0.0, seconds))

    def increment_counter(self, operation: str) -> None:
        self._calls.labels(operation=operation).inc()

    @contextmanager
    def timed(self, operation: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            self.record_operation(operation, time.perf_counter() - start)

    def count(self, operation: str) -> int:
        value = self.registry.get_sample_value(
            "catalog_operations_total", {"operation": operation}
        )
        return int(value or 0)

    def _samples(self, metric, sample_name: str) -> dict[str, float]:
        out: dict[str, float] = {}
        for family in metric.collect():
            for sample in family.samples:
                if sample.name == sample_name:
                    out[sample.labels["operation"]] = sample.value
        return out

    def uptime(self) -> timedelta:
        return now() - self.started_at

    def format_uptime(self) -> str:
        return format_duration(self.uptime())

    def summary(self) -> dict[str, Any]:
        counts = self._samples(self._calls, "catalog_operations_total")
        durations = self._samples(self._latency, "catalog_operation_duration_seconds_sum")

        operations = {}
        for op, total in sorted(durations.items()):
            count = int(counts.get(op, 0))
            if count:
                operations[op] = {"count": count, "avg_ms": total * 1000.0 / count}

        fastest: Optional[str] = None
        slowest: Optional[str] = None
        if durations:
            fastest = min(durations, key=durations.__getitem__)
            slowest = max(durations, key=durations.__getitem__)

        return {
            "uptime": self.format_uptime(),
            "operations": operations,
            "fastest": fastest,
            "slowest": slowest,
            "total_operations": int(sum(counts.values())),
        }
