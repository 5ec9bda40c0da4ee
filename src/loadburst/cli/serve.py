"""``loadburst serve``: run the instrumented target server."""

from __future__ import annotations

import logging

import typer

from loadburst._internal.logging import setup_logging
from loadburst.target.server import (
    DEFAULT_HOST,
    DEFAULT_LATENCY_THRESHOLD,
    DEFAULT_PORT,
    run_server,
)


def serve_cmd(
    host: str = typer.Option(
        DEFAULT_HOST,
        "--host",
        help="Interface to bind.",
    ),
    port: int = typer.Option(
        DEFAULT_PORT,
        "--port",
        "-p",
        help="Port to listen on.",
        min=1,
        max=65535,
    ),
    latency_threshold: float = typer.Option(
        DEFAULT_LATENCY_THRESHOLD,
        "--latency-threshold",
        help="Seconds above which a request marks /status as DOWN.",
        min=0.0,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging.",
    ),
) -> None:
    """Serve /, /status, /metrics and /visualization until interrupted."""
    setup_logging(level=logging.DEBUG if verbose else logging.INFO)
    run_server(host, port, latency_threshold=latency_threshold)
