from __future__ import annotations

import os
import time
from typing import Any, Awaitable, Callable

from fastapi import Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

REGISTRY = CollectorRegistry()
HTTP_REQUESTS = Counter(
    "scorecard_http_requests_total",
    "HTTP requests",
    ["route", "method", "status"],
    registry=REGISTRY,
)
HTTP_LATENCY = Histogram(
    "scorecard_http_request_latency_seconds",
    "Request latency (seconds)",
    ["route", "method"],
    registry=REGISTRY,
)

BUILD_VERSION = os.getenv("BUILD_VERSION", "dev")
GIT_SHA = os.getenv("GIT_SHA", "unknown")


async def metrics_app(_req: Request | None = None) -> Response:
    data = generate_latest(REGISTRY)
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)


def _route_label(scope: dict[str, Any]) -> str:
    # templated path keeps venue ids out of the label set
    route = scope.get("route")
    template = getattr(route, "path", None)
    if isinstance(template, str) and template:
        return template
    return "unmatched"


class MetricsMiddleware:
    """Count and time HTTP requests per route template.

    Prometheus scrapes of ``/metrics`` are passed through untracked.
    """

    untracked_paths = frozenset({"/metrics"})

    def __init__(self, app: Callable[..., Awaitable[Any]]):
        self.app = app

    async def __call__(
        self,
        scope: dict[str, Any],
        receive: Callable[..., Awaitable[Any]],
        send: Callable[..., Awaitable[Any]],
    ) -> None:
        if scope.get("type") != "http" or scope.get("path") in self.untracked_paths:
            await self.app(scope, receive, send)
            return

        started = time.perf_counter()
        response_status = {"code": 500}

        async def send_wrapper(message: dict[str, Any]) -> None:
            if message.get("type") == "http.response.start":
                response_status["code"] = message.get("status", 200)
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            self._observe(scope, response_status["code"], time.perf_counter() - started)

    @staticmethod
    def _observe(scope: dict[str, Any], status_code: int, elapsed: float) -> None:
        route = _route_label(scope)
        method = scope.get("method", "GET")
        HTTP_LATENCY.labels(route=route, method=method).observe(elapsed)
        HTTP_REQUESTS.labels(route=route, method=method, status=str(status_code)).inc()


__all__ = [
    "REGISTRY",
    "HTTP_REQUESTS",
    "HTTP_LATENCY",
    "BUILD_VERSION",
    "GIT_SHA",
    "metrics_app",
    "MetricsMiddleware",
]
