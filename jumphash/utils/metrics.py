from __future__ import annotations

from dataclasses import dataclass, field
from time import perf_counter
from typing import TYPE_CHECKING

from prometheus_client import Counter, Histogram, start_http_server

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(slots=True)
class Metrics:
    slot_requests_total: Counter = field(
        default_factory=lambda: Counter(
            "jumphash_slot_requests_total",
            "Total number of slot requests",
            ["endpoint", "status"],
        )
    )
    slot_request_latency: Histogram = field(
        default_factory=lambda: Histogram(
            "jumphash_slot_request_latency_seconds",
            "Slot request latency in seconds",
            ["endpoint"],
            buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
        )
    )
    keys_assigned: Counter = field(
        default_factory=lambda: Counter(
            "jumphash_keys_assigned_total",
            "Total number of keys assigned to a slot",
        )
    )


class MetricsCollector:
    _instance: MetricsCollector | None = None
    _metrics: Metrics | None = None
    _started: bool = False

    def __new__(cls) -> MetricsCollector:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._metrics = Metrics()
        return cls._instance

    @property
    def metrics(self) -> Metrics:
        if self._metrics is None:
            self._metrics = Metrics()
        return self._metrics

    def start_server(self, port: int = 9090) -> None:
        if not self._started:
            start_http_server(port)
            self._started = True

    def record_request(self, endpoint: str, status: str, latency: float) -> None:
        self.metrics.slot_requests_total.labels(
            endpoint=endpoint,
            status=status,
        ).inc()
        self.metrics.slot_request_latency.labels(endpoint=endpoint).observe(latency)

    def record_keys(self, count: int) -> None:
        self.metrics.keys_assigned.inc(count)


class Timer:
    def __init__(
        self,
        callback: Callable[[float], None] | None = None,
    ) -> None:
        self._start: float = 0.0
        self._callback = callback

    def __enter__(self) -> Timer:
        self._start = perf_counter()
        return self

    def __exit__(self, *_: object) -> None:
        elapsed = perf_counter() - self._start
        if self._callback:
            self._callback(elapsed)

    @property
    def elapsed(self) -> float:
        return perf_counter() - self._start
