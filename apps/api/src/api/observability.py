from __future__ import annotations

from collections import Counter as TallyCounter
from contextvars import ContextVar
from dataclasses import asdict, dataclass
from typing import Protocol

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, generate_latest

_trace_id_ctx: ContextVar[str] = ContextVar("trace_id", default="")

SESSION_OPENED = "opened"
SESSION_CLOSED = "closed"
SESSION_REJECTED = "rejected"


def set_trace_id(trace_id: str) -> None:
    _trace_id_ctx.set(trace_id)


def get_trace_id() -> str:
    return _trace_id_ctx.get()


@dataclass(frozen=True)
class ApiRequestMetric:
    method: str
    path: str
    status_code: int
    duration_ms: float
    trace_id: str


class ApiMetricCollector(Protocol):
    def observe(self, metric: ApiRequestMetric) -> None: ...

    def observe_session(self, outcome: str) -> None: ...


class InMemoryApiMetricsCollector(ApiMetricCollector):
    def __init__(self) -> None:
        self._metrics: list[ApiRequestMetric] = []
        self._sessions: TallyCounter[str] = TallyCounter()

    def observe(self, metric: ApiRequestMetric) -> None:
        self._metrics.append(metric)

    def observe_session(self, outcome: str) -> None:
        self._sessions[outcome] += 1

    def snapshot(self) -> list[dict]:
        return [asdict(item) for item in self._metrics]

    def session_counts(self) -> dict[str, int]:
        return dict(self._sessions)


class PrometheusApiMetricsCollector(ApiMetricCollector):
    def __init__(self) -> None:
        self._registry = CollectorRegistry()
        self._request_counter = Counter(
            "event_map_http_requests_total",
            "Total event map HTTP requests",
            labelnames=("method", "path", "status_code"),
            registry=self._registry,
        )
        self._latency_histogram = Histogram(
            "event_map_http_request_duration_ms",
            "Event map HTTP request latency in milliseconds",
            labelnames=("method", "path"),
            buckets=(5, 10, 25, 50, 100, 250, 500, 1000, 3000),
            registry=self._registry,
        )
        self._session_counter = Counter(
            "event_map_sessions_total",
            "Map view sessions by outcome",
            labelnames=("outcome",),
            registry=self._registry,
        )
        self._active_sessions = Gauge(
            "event_map_sessions_active",
            "Map view sessions currently connected",
            registry=self._registry,
        )

    def observe(self, metric: ApiRequestMetric) -> None:
        status = str(metric.status_code)
        self._request_counter.labels(metric.method, metric.path, status).inc()
        self._latency_histogram.labels(metric.method, metric.path).observe(metric.duration_ms)

    def observe_session(self, outcome: str) -> None:
        self._session_counter.labels(outcome).inc()
        if outcome == SESSION_OPENED:
            self._active_sessions.inc()
        elif outcome == SESSION_CLOSED:
            self._active_sessions.dec()

    def render(self) -> str:
        return generate_latest(self._registry).decode("utf-8")


class CompositeApiMetricsCollector(ApiMetricCollector):
    def __init__(self, collectors: list[ApiMetricCollector]) -> None:
        self._collectors = collectors

    def observe(self, metric: ApiRequestMetric) -> None:
        for collector in self._collectors:
            collector.observe(metric)

    def observe_session(self, outcome: str) -> None:
        for collector in self._collectors:
            collector.observe_session(outcome)
