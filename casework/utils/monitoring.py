"""Monitoring utilities leveraging Prometheus client."""

from __future__ import annotations

from typing import Tuple

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

http_requests_total = Counter(
    "casework_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

http_request_latency_seconds = Histogram(
    "casework_http_request_latency_seconds",
    "HTTP request latency",
    ["method", "path"],
)

ai_annotations_total = Counter(
    "casework_ai_annotations_total",
    "AI annotation attempts by record kind and outcome",
    ["kind", "outcome"],
)


def observe_request(method: str, path: str, status: int, duration_seconds: float) -> None:
    http_requests_total.labels(method=method, path=path, status=str(status)).inc()
    http_request_latency_seconds.labels(method=method, path=path).observe(duration_seconds)


def observe_annotation(kind: str, applied: bool) -> None:
    ai_annotations_total.labels(kind=kind, outcome="applied" if applied else "skipped").inc()


def render_metrics() -> Tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST
