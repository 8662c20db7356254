# Copyright (c) Syntropy Systems
"""canaryctl status command."""
from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from canaryctl.cli.options import empty_as_none
from canaryctl.cli.report import print_execution_status
from canaryctl.client import CanaryClient
from canaryctl.config import load_config
from canaryctl.errors import PollTransportError

console = Console()


def status(
    execution_id: str = typer.Argument(
        ...,
        help="Canary execution ID",
    ),
    url: Optional[str] = typer.Option(
        None,
        "--url", "-u",
        envvar="CANARYCTL_URL",
        help="Canary endpoint of the analysis service",
    ),
    storage_account: Optional[str] = typer.Option(
        None,
        "--storage-account", "-s",
        envvar="CANARYCTL_STORAGE_ACCOUNT",
        help="Storage account name",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Show passed and failed metric results",
    ),
) -> None:
    """Show the current status of a canary execution."""
    config = load_config()
    service_url = url or config.service_url
    storage_account = empty_as_none(storage_account or config.storage_account)

    with CanaryClient(service_url, timeout=config.request_timeout) as client:
        try:
            execution_status = client.get_execution_status(
                execution_id,
                storage_account=storage_account,
            )
        except PollTransportError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1) from e

        print_execution_status(
            console,
            client.status_url(execution_id),
            execution_status,
            verbose=verbose,
        )
