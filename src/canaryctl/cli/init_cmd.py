# Copyright (c) Syntropy Systems
"""canaryctl init command."""
from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

import typer
import yaml
from rich.console import Console

from canaryctl.config import CONFIG_DIR_NAME, CanaryctlConfig
from canaryctl.models.adhoc import DEFAULT_REQUEST_FILENAME

console = Console()

SAMPLE_REQUEST: dict[str, object] = {
    "name": "adhoc-canary",
    "scopeName": "default",
    "judge": "NetflixACAJudge-v1.0",
    "templates": {},
    "classifier": {
        "groupWeights": {"system": 100.0},
        "scoreThresholds": {"marginal": 50.0, "pass": 75.0},
    },
    "requestThresholds": {"marginal": 50.0, "pass": 75.0},
    "controlScope": {
        "location": "us-east-1",
        "extendedScopeParams": {"instance": "baseline"},
    },
    "experimentScope": {
        "location": "us-east-1",
        "extendedScopeParams": {"instance": "canary"},
    },
    "metricGroups": [
        {
            "groupName": "system",
            "serviceType": "prometheus",
            "metricNames": ["cpu", "mem"],
            "groupByFields": [],
            "customFilterTemplate": None,
            "analysisConfigurations": {
                "canary": {"direction": "increase", "nanStrategy": "remove"},
            },
        },
    ],
}


def init(
    path: Path = typer.Argument(
        Path(),
        help="Directory to initialize (default: current directory)",
    ),
) -> None:
    """Create a .canaryctl config and a sample ad-hoc request file."""
    target = path.resolve()
    config_dir = target / CONFIG_DIR_NAME
    request_path = target / Path(DEFAULT_REQUEST_FILENAME).name

    if config_dir.exists():
        console.print(f"[yellow]Already initialized:[/yellow] {config_dir}")
        return

    config_dir.mkdir(parents=True)
    config_path = config_dir / "config.yaml"
    with config_path.open("w") as f:
        yaml.dump(asdict(CanaryctlConfig()), f, default_flow_style=False)

    console.print(f"[green]Initialized canaryctl:[/green] {config_dir}")
    console.print(f"  [dim]config:[/dim] {config_path}")

    if request_path.exists():
        console.print(f"  [dim]request:[/dim] {request_path} (kept existing)")
        return

    _ = request_path.write_text(json.dumps(SAMPLE_REQUEST, indent=2) + "\n")
    console.print(f"  [dim]request:[/dim] {request_path}")
