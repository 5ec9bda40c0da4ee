"""Instrumented HTTP server to point the harness at."""

from __future__ import annotations

import time
from dataclasses import dataclass
from http import HTTPStatus
from typing import TYPE_CHECKING

from aiohttp import web
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

from loadburst._internal.logging import get_logger
from loadburst.target.status import ServiceStatus

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = get_logger("target.server")

DEFAULT_HOST = "0.0.0.0"  # noqa: S104
DEFAULT_PORT = 8081
DEFAULT_LATENCY_THRESHOLD = 1.0
_DRAIN_CHUNK = 64 * 1024

VISUALIZATION_HTML = """\
<!DOCTYPE html>
<html>
<head>
    <title>Service Metrics</title>
    <script>
        function reload() {
            fetch('/metrics').then(res => res.text()).then(data => {
                document.getElementById('metrics').innerText = data;
            });
            setTimeout(reload, 5000);
        }
        window.onload = reload;
    </script>
</head>
<body>
    <h1>Service Metrics</h1>
    <pre id="metrics">Loading metrics...</pre>
</body>
</html>
"""


@dataclass
class ServerMetrics:
    """Prometheus collectors owned by one application instance.

    Attributes:
        registry: Registry exposed on ``/metrics``.
        requests_total: Request counter by path, method and status.
        request_duration: Response time histogram by path, method and status.
    """

    registry: CollectorRegistry
    requests_total: Counter
    request_duration: Histogram

    @classmethod
    def create(cls) -> ServerMetrics:
        registry = CollectorRegistry()
        labels = ["path", "method", "status"]
        return cls(
            registry=registry,
            requests_total=Counter(
                "http_requests_total",
                "Total number of HTTP requests",
                labels,
                registry=registry,
            ),
            request_duration=Histogram(
                "http_request_duration_seconds",
                "Histogram of response time for handler in seconds",
                labels,
                registry=registry,
            ),
        )

    def observe(self, path: str, method: str, status: int, duration: float) -> None:
        status_text = _status_text(status)
        self.requests_total.labels(path, method, status_text).inc()
        self.request_duration.labels(path, method, status_text).observe(duration)


STATUS_KEY = web.AppKey("status", ServiceStatus)
METRICS_KEY = web.AppKey("metrics", ServerMetrics)
THRESHOLD_KEY = web.AppKey("latency_threshold", float)


def _status_text(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return str(status)


@web.middleware
async def metrics_middleware(
    request: web.Request,
    handler: Callable[[web.Request], Awaitable[web.StreamResponse]],
) -> web.StreamResponse:
    """Record request count and duration, and flag slow requests.

    A request slower than the app's latency threshold marks the service
    down on ``/status``.
    """
    start = time.monotonic()
    status = HTTPStatus.OK.value
    try:
        response = await handler(request)
        status = response.status
        return response
    except web.HTTPException as exc:
        status = exc.status
        raise
    except Exception:
        status = HTTPStatus.INTERNAL_SERVER_ERROR.value
        raise
    finally:
        duration = time.monotonic() - start
        request.app[METRICS_KEY].observe(request.path, request.method, status, duration)
        if duration > request.app[THRESHOLD_KEY]:
            request.app[STATUS_KEY].mark_down()


async def hello_handler(request: web.Request) -> web.Response:
    """Answer any method on any unrouted path, draining the body first."""
    async for _chunk in request.content.iter_chunked(_DRAIN_CHUNK):
        pass
    return web.Response(text="Hello, World!")


async def status_handler(request: web.Request) -> web.Response:
    return web.Response(text=request.app[STATUS_KEY].describe())


async def metrics_handler(request: web.Request) -> web.Response:
    """Expose the app's collectors in the Prometheus text format."""
    body = generate_latest(request.app[METRICS_KEY].registry)
    return web.Response(body=body, headers={"Content-Type": CONTENT_TYPE_LATEST})


async def visualization_handler(request: web.Request) -> web.Response:
    return web.Response(text=VISUALIZATION_HTML, content_type="text/html")


def create_app(
    *,
    latency_threshold: float = DEFAULT_LATENCY_THRESHOLD,
    status: ServiceStatus | None = None,
) -> web.Application:
    """Build the target application.

    Args:
        latency_threshold: Seconds above which a request marks the service
            down.
        status: Health flag to use. A fresh one is created when omitted.

    Returns:
        Configured aiohttp Application.
    """
    app = web.Application(middlewares=[metrics_middleware])
    app[STATUS_KEY] = status or ServiceStatus()
    app[METRICS_KEY] = ServerMetrics.create()
    app[THRESHOLD_KEY] = latency_threshold

    app.router.add_get("/status", status_handler)
    app.router.add_get("/metrics", metrics_handler)
    app.router.add_get("/visualization", visualization_handler)
    # Any other path falls through to the hello handler
    app.router.add_route("*", "/{tail:.*}", hello_handler)
    return app


def run_server(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    *,
    latency_threshold: float = DEFAULT_LATENCY_THRESHOLD,
) -> None:
    """Serve the target application until interrupted."""
    logger.info("Starting server on %s:%d", host, port)
    web.run_app(
        create_app(latency_threshold=latency_threshold),
        host=host,
        port=port,
        print=None,
    )
