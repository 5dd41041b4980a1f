"""
Prometheus request metrics and the `/metrics` scrape endpoint.

Paths are labelled with the route template (`/api/v1/miniatures/projects/{project_id}`),
never the raw URL, so ids do not create new series.
"""

from __future__ import annotations

import time

from fastapi import FastAPI, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

NAMESPACE = "portfolio"
SUBSYSTEM = "admin"

REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total HTTP requests.",
    ["method", "path", "status"],
    namespace=NAMESPACE,
    subsystem=SUBSYSTEM,
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds.",
    ["method", "path"],
    namespace=NAMESPACE,
    subsystem=SUBSYSTEM,
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)


def _route_path(request: Request) -> str:
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return path or "unmatched"


def install_metrics(app: FastAPI) -> None:
    @app.middleware("http")
    async def _record(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        path = _route_path(request)
        REQUESTS_TOTAL.labels(request.method, path, str(response.status_code)).inc()
        REQUEST_DURATION.labels(request.method, path).observe(time.perf_counter() - started)
        return response

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
