# Copyright (c) Syntropy Systems
"""Configuration management for canaryctl."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import cast

import yaml

from canaryctl.client import DEFAULT_SERVICE_URL
from canaryctl.models.adhoc import DEFAULT_REQUEST_FILENAME
from canaryctl.monitor import (
    DEFAULT_POLL_INTERVAL,
    DEFAULT_PROGRESS_INTERVAL,
    DEFAULT_WAIT_TIMEOUT,
)

CONFIG_DIR_NAME = ".canaryctl"


@dataclass
class CanaryctlConfig:
    """Configuration for canaryctl."""

    # Canary endpoint of the analysis service
    service_url: str = DEFAULT_SERVICE_URL

    # Accounts passed to the service (empty = service default)
    metrics_account: str = ""
    storage_account: str = ""

    # Ad-hoc request config file
    request_file: str = DEFAULT_REQUEST_FILENAME

    # Seconds between status requests
    poll_interval: float = DEFAULT_POLL_INTERVAL

    # Maximum number of status requests before giving up
    wait_timeout: int = DEFAULT_WAIT_TIMEOUT

    # Status requests between progress dots
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL

    # HTTP request timeout in seconds
    request_timeout: float = 30.0


def find_config_dir(start_path: Path | None = None) -> Path | None:
    """Find the nearest .canaryctl directory by walking up from start_path.

    Returns None if no .canaryctl directory is found.
    """
    if start_path is None:
        start_path = Path.cwd()

    current = start_path.resolve()

    while current != current.parent:
        config_dir = current / CONFIG_DIR_NAME
        if config_dir.is_dir():
            return config_dir
        current = current.parent

    # Check root
    config_dir = current / CONFIG_DIR_NAME
    if config_dir.is_dir():
        return config_dir

    return None


def get_global_config_dir() -> Path:
    """Get the global canaryctl config directory (~/.canaryctl)."""
    return Path.home() / CONFIG_DIR_NAME


def load_config(config_dir: Path | None = None) -> CanaryctlConfig:
    """Load configuration from .canaryctl/config.yaml or defaults.

    Looks for config in:
    1. Provided config_dir
    2. Nearest .canaryctl directory walking up
    3. ~/.canaryctl/config.yaml
    4. Defaults
    """
    config = CanaryctlConfig()

    # Find config file
    config_path = None

    if config_dir is not None:
        config_path = config_dir / "config.yaml"
    else:
        found_dir = find_config_dir()
        if found_dir is not None:
            config_path = found_dir / "config.yaml"
        else:
            global_config = get_global_config_dir() / "config.yaml"
            if global_config.exists():
                config_path = global_config

    if config_path is not None and config_path.exists():
        with config_path.open() as f:
            data = cast("dict[str, object]", yaml.safe_load(f) or {})

        for key in ("service_url", "metrics_account", "storage_account", "request_file"):
            value = data.get(key)
            if isinstance(value, str):
                setattr(config, key, value)
        poll_interval = data.get("poll_interval")
        if isinstance(poll_interval, (int, float)):
            config.poll_interval = float(poll_interval)
        wait_timeout = data.get("wait_timeout")
        if isinstance(wait_timeout, (int, float)):
            config.wait_timeout = int(wait_timeout)
        progress_interval = data.get("progress_interval")
        if isinstance(progress_interval, (int, float)):
            config.progress_interval = int(progress_interval)
        request_timeout = data.get("request_timeout")
        if isinstance(request_timeout, (int, float)):
            config.request_timeout = float(request_timeout)

    return config
