# Copyright (c) Syntropy Systems
"""Pytest fixtures for canaryctl tests."""

import copy
import json
import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

# Store original cwd at module load time
_original_cwd = Path.cwd()

ADHOC_CONFIG: dict[str, object] = {
    "name": "checkout-canary",
    "scopeName": "checkout",
    "judge": "NetflixACAJudge-v1.0",
    "templates": {"by-instance": "instance=\"${instance}\""},
    "classifier": {
        "groupWeights": {"system": 60.0, "latency": 40.0},
        "scoreThresholds": {"marginal": 50.0, "pass": 75.0},
    },
    "requestThresholds": {"marginal": 50.0, "pass": 75.0},
    "controlScope": {
        "location": "us-east-1",
        "extendedScopeParams": {"instance": "checkout-baseline"},
    },
    "experimentScope": {
        "location": "us-west-2",
        "extendedScopeParams": {"instance": "checkout-canary"},
    },
    "metricGroups": [
        {
            "groupName": "system",
            "serviceType": "prometheus",
            "metricNames": ["cpu", "mem"],
            "customFilterTemplate": "by-instance",
            "groupByFields": ["pod"],
            "analysisConfigurations": {
                "canary": {"direction": "increase", "nanStrategy": "remove"},
            },
        },
        {
            "groupName": "latency",
            "serviceType": "datadog",
            "metricNames": ["p99"],
            "customFilter": "env:prod",
            "analysisConfigurations": {},
        },
    ],
}


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at an empty directory so no global config is picked up."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ("CANARYCTL_URL", "CANARYCTL_METRICS_ACCOUNT", "CANARYCTL_STORAGE_ACCOUNT"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def project(temp_dir: Path) -> Generator[Path, None, None]:
    """Change into an empty project directory."""
    os.chdir(temp_dir)

    yield temp_dir

    # Always return to original cwd
    os.chdir(_original_cwd)


@pytest.fixture
def adhoc_config_data() -> dict[str, object]:
    """A fresh copy of a valid ad-hoc request config document."""
    return copy.deepcopy(ADHOC_CONFIG)


@pytest.fixture
def adhoc_config_file(
    project: Path, adhoc_config_data: dict[str, object]
) -> Path:
    """Write the ad-hoc request config as adhoc-request.json in the project."""
    path = project / "adhoc-request.json"
    _ = path.write_text(json.dumps(adhoc_config_data))
    return path
