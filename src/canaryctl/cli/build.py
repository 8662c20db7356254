# Copyright (c) Syntropy Systems
"""canaryctl build command."""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from canaryctl.builder import RequestAssembler
from canaryctl.cli.options import TIME_FORMATS, resolve_window
from canaryctl.config import load_config
from canaryctl.errors import AssemblyError, InvalidSubtypeConfiguration

console = Console()


def build(
    request: Optional[Path] = typer.Option(
        None,
        "--request", "-r",
        help="Ad-hoc request config file (JSON or YAML)",
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
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Write the request to a file instead of stdout",
    ),
) -> None:
    """Assemble the ad-hoc execution request without submitting it."""
    config = load_config()
    request_path = request or Path(config.request_file)
    window_start, window_end = resolve_window(start, end)

    try:
        adhoc_request = RequestAssembler().build(request_path, window_start, window_end)
    except (AssemblyError, InvalidSubtypeConfiguration) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    body = json.dumps(adhoc_request.to_wire(), indent=2)
    if output is None:
        typer.echo(body)
        return

    _ = output.write_text(body + "\n")
    console.print(f"[green]Wrote adhoc request:[/green] {output}")
