"""Shared test fixtures for the loadburst test suite."""

from __future__ import annotations

import asyncio
import logging
import socket
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import pytest
from aiohttp import web

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator


# =============================================================================
# Pytest configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-apply markers based on test directory structure."""
    for item in items:
        test_path = str(item.fspath)
        if "/unit/" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/e2e/" in test_path:
            item.add_marker(pytest.mark.e2e)


@pytest.fixture(autouse=True)
def _reset_loadburst_logger() -> Iterator[None]:
    """Undo setup_logging() so caplog keeps working across tests."""
    yield
    logger = logging.getLogger("loadburst")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


# =============================================================================
# Network utilities
# =============================================================================


def _get_free_port() -> int:
    """Find an available port on localhost."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("", 0))
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        return s.getsockname()[1]


# =============================================================================
# Recording HTTP target
# =============================================================================


@dataclass
class RecordedRequest:
    method: str
    path: str
    content_type: str | None
    body_size: int
    peer: tuple[str, int] | None


@dataclass
class TargetServer:
    """Handle on a running test target.

    Attributes:
        base_url: Server root, e.g. ``http://127.0.0.1:54321``.
        requests: Every request the server has seen, in arrival order.
    """

    base_url: str
    requests: list[RecordedRequest] = field(default_factory=list)

    @property
    def url(self) -> str:
        return f"{self.base_url}/"

    def peers(self) -> set[tuple[str, int]]:
        """Distinct client sockets (host, port) that sent requests."""
        return {r.peer for r in self.requests if r.peer is not None}


def _create_target_app(target: TargetServer) -> web.Application:
    """Build a target app that records each request it receives."""

    async def _record(request: web.Request) -> None:
        body = await request.read()
        peer = request.transport.get_extra_info("peername") if request.transport else None
        target.requests.append(
            RecordedRequest(
                method=request.method,
                path=request.path,
                content_type=request.headers.get("Content-Type"),
                body_size=len(body),
                peer=tuple(peer[:2]) if peer else None,
            )
        )

    async def _root_handler(request: web.Request) -> web.Response:
        await _record(request)
        return web.Response(text="ok")

    async def _status_handler(request: web.Request) -> web.Response:
        await _record(request)
        return web.Response(text="status", status=int(request.match_info["code"]))

    async def _slow_handler(request: web.Request) -> web.Response:
        await _record(request)
        await asyncio.sleep(float(request.query.get("delay", "0.5")))
        return web.Response(text="slow")

    app = web.Application(client_max_size=16 * 1024 * 1024)
    app.router.add_route("*", "/", _root_handler)
    app.router.add_route("*", "/status/{code}", _status_handler)
    app.router.add_route("*", "/slow", _slow_handler)
    return app


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
async def target_server() -> AsyncIterator[TargetServer]:
    """Recording target running on the test's own event loop."""
    port = _get_free_port()
    target = TargetServer(base_url=f"http://127.0.0.1:{port}")
    runner = web.AppRunner(_create_target_app(target))
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", port)
    await site.start()
    yield target
    await runner.cleanup()


@pytest.fixture
def sync_target_server() -> Iterator[TargetServer]:
    """Recording target running in a background thread.

    Needed whenever the code under test blocks the main thread, such as
    the driver waiting on its join barrier.
    """
    port = _get_free_port()
    target = TargetServer(base_url=f"http://127.0.0.1:{port}")
    started = threading.Event()
    loop_holder: list[asyncio.AbstractEventLoop] = []

    def _thread_target() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        runner = web.AppRunner(_create_target_app(target))
        loop.run_until_complete(runner.setup())
        site = web.TCPSite(runner, "127.0.0.1", port)
        loop.run_until_complete(site.start())
        loop_holder.append(loop)
        started.set()
        loop.run_forever()
        loop.run_until_complete(runner.cleanup())
        loop.close()

    thread = threading.Thread(target=_thread_target, daemon=True)
    thread.start()
    started.wait(timeout=5.0)

    yield target

    if loop_holder:
        loop_holder[0].call_soon_threadsafe(loop_holder[0].stop)
    thread.join(timeout=5.0)


@pytest.fixture
def free_port() -> int:
    """A localhost port that was free a moment ago."""
    return _get_free_port()


@pytest.fixture
def unreachable_url() -> str:
    """URL of a local port nothing is listening on."""
    return f"http://127.0.0.1:{_get_free_port()}/"


@pytest.fixture
def silent_server_url() -> Iterator[str]:
    """URL of a socket that accepts connections but never answers.

    The kernel completes the TCP handshake from the listen backlog, so a
    client can send its request and then waits for a response that never
    comes.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(16)
    port = sock.getsockname()[1]
    yield f"http://127.0.0.1:{port}/"
    sock.close()
