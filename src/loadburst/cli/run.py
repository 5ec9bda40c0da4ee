"""``loadburst run``: drive a workload and print the timing summary."""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from loadburst._internal.config import load_config
from loadburst._internal.errors import LoadBurstError
from loadburst._internal.logging import setup_logging
from loadburst.engine.driver import Driver

if TYPE_CHECKING:
    from loadburst.engine.models import AggregateResult
    from loadburst.workload.config import WorkloadConfig

console = Console(stderr=True)


def _apply_overrides(
    config: WorkloadConfig,
    *,
    url: str | None,
    requests: int | None,
    workers: int | None,
    delay: float | None,
    body_size: int | None,
    timeout: float | None,
) -> WorkloadConfig:
    """Layer CLI flags over a config loaded from profile and environment."""
    overrides = {
        "url": url,
        "total_requests": requests,
        "workers": workers,
        "delay": delay,
        "body_size": body_size,
        "timeout": timeout,
    }
    changes = {k: v for k, v in overrides.items() if v is not None}
    return dataclasses.replace(config, **changes)  # type: ignore[arg-type]


def _print_summary(result: AggregateResult) -> None:
    """Print a summary table after the run completes.

    Args:
        result: Completed run result.
    """
    latency = result.latency
    table = Table(
        title="Run Complete",
        show_header=True,
        header_style="bold green",
        expand=True,
    )
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Configured Requests", str(result.total_requests))
    table.add_row("Issued Requests", str(result.requests_issued))
    table.add_row("Duration", f"{result.duration_seconds:.3f}s")
    table.add_row("Responses", str(result.successes))
    table.add_row("Failures", str(result.failures))
    for status, count in sorted(result.status_counts.items()):
        table.add_row(f"  HTTP {status}", str(count))
    if latency.count:
        table.add_row("p50 Latency", f"{latency.p50:.1f}ms")
        table.add_row("p95 Latency", f"{latency.p95:.1f}ms")
        table.add_row("p99 Latency", f"{latency.p99:.1f}ms")
        table.add_row("Max Latency", f"{latency.max:.1f}ms")

    console.print(table)


def run_cmd(
    profile: str = typer.Option(
        "light",
        "--profile",
        "-p",
        help="Workload profile: light or heavy.",
    ),
    url: str | None = typer.Option(
        None,
        "--url",
        "-u",
        help="Target URL (default: profile or LOADBURST_URL).",
    ),
    requests: int | None = typer.Option(
        None,
        "--requests",
        "-n",
        help="Total requests across all workers.",
        min=0,
    ),
    workers: int | None = typer.Option(
        None,
        "--workers",
        "-w",
        help="Number of concurrent workers.",
        min=1,
    ),
    delay: float | None = typer.Option(
        None,
        "--delay",
        help="Seconds to sleep after every request.",
        min=0.0,
    ),
    body_size: int | None = typer.Option(
        None,
        "--body-size",
        help="POST body size in bytes; 0 sends GET requests.",
        min=0,
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        help="Client timeout in seconds; 0 waits indefinitely.",
        min=0.0,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Emit one JSON object per log line.",
    ),
) -> None:
    """Run a workload to completion and report total requests and duration."""
    setup_logging(
        level=logging.DEBUG if verbose else logging.INFO,
        json_format=json_logs,
    )

    try:
        config = _apply_overrides(
            load_config(profile),
            url=url,
            requests=requests,
            workers=workers,
            delay=delay,
            body_size=body_size,
            timeout=timeout,
        )
    except LoadBurstError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    timeout_text = (
        "unbounded" if config.effective_timeout is None else f"{config.effective_timeout}s"
    )
    console.print(
        Panel(
            f"[bold]Profile:[/bold]  {config.profile}\n"
            f"[bold]Target:[/bold]   {config.method} {config.url}\n"
            f"[bold]Workers:[/bold]  {config.workers} x {config.requests_per_worker} requests\n"
            f"[bold]Body:[/bold]     {config.body_size} bytes\n"
            f"[bold]Delay:[/bold]    {config.delay}s\n"
            f"[bold]Timeout:[/bold]  {timeout_text}",
            title="loadburst",
            border_style="cyan",
        )
    )
    if config.effective_timeout is None:
        console.print(
            "[yellow]Client timeout is unbounded; an unresponsive target "
            "will stall this run.[/yellow]"
        )

    try:
        result = Driver(config).run()
    except LoadBurstError as exc:
        console.print(f"[red]Run failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    _print_summary(result)
    typer.echo(result.summary_line())
