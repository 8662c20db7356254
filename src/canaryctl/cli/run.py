# Copyright (c) Syntropy Systems
"""canaryctl run command."""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from canaryctl.builder import RequestAssembler
from canaryctl.cli.options import TIME_FORMATS, empty_as_none, resolve_window
from canaryctl.cli.report import print_execution_status
from canaryctl.client import CanaryClient
from canaryctl.config import load_config
from canaryctl.errors import AssemblyError, InvalidSubtypeConfiguration, SubmissionError
from canaryctl.monitor import ExecutionMonitor

console = Console()


def run(  # noqa: PLR0913
    request: Optional[Path] = typer.Option(
        None,
        "--request", "-r",
        help="Ad-hoc request config file (JSON or YAML)",
    ),
    url: Optional[str] = typer.Option(
        None,
        "--url", "-u",
        envvar="CANARYCTL_URL",
        help="Canary endpoint of the analysis service",
    ),
    metrics_account: Optional[str] = typer.Option(
        None,
        "--metrics-account", "-m",
        envvar="CANARYCTL_METRICS_ACCOUNT",
        help="Metrics account name",
    ),
    storage_account: Optional[str] = typer.Option(
        None,
        "--storage-account", "-s",
        envvar="CANARYCTL_STORAGE_ACCOUNT",
        help="Storage account name",
    ),
    start: Optional[datetime] = typer.Option(
        None,
        "--start", "-t0",
        formats=TIME_FORMATS,
        help="Analysis start time, local time zone (default: 1 hour ago)",
    ),
    end: Optional[datetime] = typer.Option(
        None,
        "--end", "-t1",
        formats=TIME_FORMATS,
        help="Analysis end time, local time zone (default: start + 1 hour)",
    ),
    timeout: Optional[int] = typer.Option(
        None,
        "--timeout",
        help="Maximum number of status checks before giving up",
    ),
    poll_interval: Optional[float] = typer.Option(
        None,
        "--poll-interval",
        help="Seconds between status checks",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Show passed and failed metric results",
    ),
) -> None:
    """Submit an ad-hoc canary analysis and wait for the verdict.

    Exits 0 once the run finishes, whatever the verdict:

        canaryctl run -r adhoc-request.json -t0 "2024-01-01 10:00:00" -v
    """
    config = load_config()
    request_path = request or Path(config.request_file)
    service_url = url or config.service_url
    metrics_account = empty_as_none(metrics_account or config.metrics_account)
    storage_account = empty_as_none(storage_account or config.storage_account)
    window_start, window_end = resolve_window(start, end)

    console.print(f"[dim]Assembling adhoc request from {request_path}...[/dim]")
    try:
        adhoc_request = RequestAssembler().build(request_path, window_start, window_end)
    except (AssemblyError, InvalidSubtypeConfiguration) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    with CanaryClient(service_url, timeout=config.request_timeout) as client:
        monitor = ExecutionMonitor(
            client,
            poll_interval=poll_interval if poll_interval is not None else config.poll_interval,
            wait_timeout=timeout if timeout is not None else config.wait_timeout,
            progress_interval=config.progress_interval,
            on_progress=lambda: console.print(".", end=""),
        )

        try:
            execution_id = monitor.submit(
                adhoc_request,
                metrics_account=metrics_account,
                storage_account=storage_account,
            )
        except SubmissionError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1) from e

        console.print(f"[green]Started canary execution[/green] {execution_id}")
        console.print("waiting for the request to complete...", end="")
        status = monitor.await_completion(execution_id, storage_account=storage_account)
        console.print()

        print_execution_status(
            console,
            client.status_url(execution_id),
            status,
            verbose=verbose,
        )
