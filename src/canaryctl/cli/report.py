# Copyright (c) Syntropy Systems
"""Console report of a canary execution status."""
from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import TypeAdapter
from rich.markup import escape
from rich.table import Table

from canaryctl.models.base import JSONValue
from canaryctl.results import partition

if TYPE_CHECKING:
    from rich.console import Console

    from canaryctl.models.api import (
        CanaryAnalysisResult,
        CanaryExecutionStatusResponse,
    )

_METADATA_ADAPTER = TypeAdapter(dict[str, JSONValue])


def format_metadata(metadata: dict[str, JSONValue]) -> str:
    """Render a metadata blob as compact JSON."""
    if not metadata:
        return "-"
    return _METADATA_ADAPTER.dump_json(metadata).decode("utf-8")


def build_results_table(title: str, results: list[CanaryAnalysisResult]) -> Table:
    """Build a table of per-metric results."""
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Name")
    table.add_column("Classification")
    table.add_column("Experiment")
    table.add_column("Control")
    table.add_column("Overall")

    if not results:
        table.add_row("[dim]None[/dim]", "-", "-", "-", "-")
        return table

    for result in results:
        style = "green" if result.classification == "Pass" else "red"
        classification = escape(result.classification or "-")
        table.add_row(
            escape(result.name),
            f"[{style}]{classification}[/{style}]",
            escape(format_metadata(result.experiment_metadata)),
            escape(format_metadata(result.control_metadata)),
            escape(format_metadata(result.result_metadata)),
        )

    return table


def print_execution_status(
    console: Console,
    status_url: str,
    status: CanaryExecutionStatusResponse | None,
    *,
    verbose: bool = False,
) -> None:
    """Print the final execution status, and per-metric results if verbose."""
    console.rule("Canary Execution Status")
    console.print(f"[dim]Status URL:[/dim] {escape(status_url)}")

    if status is None:
        console.print("[dim]Complete:[/dim] false")
        console.print("[dim]Status:[/dim] -")
        console.rule()
        return

    complete_style = "green" if status.complete else "yellow"
    console.print(
        f"[dim]Complete:[/dim] [{complete_style}]{str(status.complete).lower()}"
        f"[/{complete_style}]"
    )
    console.print(f"[dim]Status:[/dim] {escape(status.status or '-')}")

    judge_result = status.result.judge_result if status.result is not None else None
    if judge_result is not None:
        score = judge_result.score
        if score is not None:
            console.print(f"[dim]Score:[/dim] {score.score}")
            console.print(f"[dim]Grade:[/dim] {escape(score.classification or '-')}")
            if score.classification_reason:
                console.print(f"[dim]Reason:[/dim] {escape(score.classification_reason)}")

        if verbose:
            passing, failing = partition(judge_result.results)
            console.print(build_results_table("Passed Results Summary", passing))
            console.print(build_results_table("Failed Results Summary", failing))

    console.rule()
