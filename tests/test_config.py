# Copyright (c) Syntropy Systems
"""Tests for canaryctl configuration loading."""

from pathlib import Path

import yaml

from canaryctl.config import CanaryctlConfig, find_config_dir, load_config


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self, project: Path) -> None:
        """Test defaults when no config file exists."""
        _ = project
        config = load_config()

        assert config == CanaryctlConfig()
        assert config.service_url == "http://localhost:8090/canary"
        assert config.poll_interval == 1.0
        assert config.wait_timeout == 300
        assert config.progress_interval == 5
        assert config.request_file == "./adhoc-request.json"

    def test_project_config_found_walking_up(self, project: Path) -> None:
        """Test the nearest .canaryctl directory is used."""
        config_dir = project / ".canaryctl"
        config_dir.mkdir()
        _ = (config_dir / "config.yaml").write_text(
            yaml.safe_dump(
                {
                    "service_url": "http://kayenta:8090/canary",
                    "storage_account": "s3-account",
                    "wait_timeout": 60,
                    "poll_interval": 2,
                }
            )
        )
        nested = project / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_dir(nested) == config_dir.resolve()

        config = load_config()
        assert config.service_url == "http://kayenta:8090/canary"
        assert config.storage_account == "s3-account"
        assert config.wait_timeout == 60
        assert config.poll_interval == 2.0
        assert config.metrics_account == ""

    def test_global_config(self, project: Path, isolated_home: Path) -> None:
        """Test ~/.canaryctl/config.yaml is used when no project config exists."""
        _ = project
        global_dir = isolated_home / ".canaryctl"
        global_dir.mkdir()
        _ = (global_dir / "config.yaml").write_text("metrics_account: prom\n")

        assert load_config().metrics_account == "prom"

    def test_wrong_types_ignored(self, temp_dir: Path) -> None:
        """Test values of the wrong type fall back to defaults."""
        _ = (temp_dir / "config.yaml").write_text(
            yaml.safe_dump({"wait_timeout": "soon", "service_url": 42})
        )

        config = load_config(temp_dir)

        assert config.wait_timeout == 300
        assert config.service_url == "http://localhost:8090/canary"

    def test_empty_file(self, temp_dir: Path) -> None:
        """Test an empty config file gives defaults."""
        _ = (temp_dir / "config.yaml").write_text("")

        assert load_config(temp_dir) == CanaryctlConfig()
