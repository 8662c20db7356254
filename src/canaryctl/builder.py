# Copyright (c) Syntropy Systems
"""Assemble ad-hoc canary execution requests from a request config."""
from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, cast

import yaml
from pydantic import ValidationError

from canaryctl.errors import AssemblyError, ConfigReadError, UnknownServiceType
from canaryctl.models.adhoc import AdhocConfig
from canaryctl.models.base import format_instant
from canaryctl.models.canary import (
    DEFAULT_STEP_SECONDS,
    CanaryAdhocExecutionRequest,
    CanaryClassifierConfig,
    CanaryClassifierThresholdsConfig,
    CanaryConfig,
    CanaryExecutionRequest,
    CanaryJudgeConfig,
    CanaryMetricConfig,
    CanaryScope,
    CanaryScopePair,
)
from canaryctl.providers import MetricProviderRegistry

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from pathlib import Path

    from canaryctl.models.adhoc import ClientCanaryScope

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def epoch_millis() -> int:
    """Current time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def instant_from_millis(millis: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime without rounding."""
    return _EPOCH + timedelta(milliseconds=millis)


def load_adhoc_config(path: Path) -> AdhocConfig:
    """Read an ad-hoc request config from a JSON or YAML file.

    Raises:
        ConfigReadError: If the file cannot be read, parsed or validated.

    """
    try:
        text = path.read_text()
        if path.suffix.lower() == ".json":
            data = cast("object", json.loads(text))
        else:
            data = cast("object", yaml.safe_load(text))
        return AdhocConfig.model_validate(data)
    except (OSError, ValueError, yaml.YAMLError) as e:
        # ValidationError is a ValueError
        msg = (
            "An exception was encountered reading adhoc request configuration "
            f"file {path}: {e}"
        )
        logger.error("Failed to read adhoc request configuration file %s", path)
        raise ConfigReadError(msg) from e


def _thresholds(values: Mapping[str, float], source: str) -> CanaryClassifierThresholdsConfig:
    missing = [key for key in ("marginal", "pass") if key not in values]
    if missing:
        msg = f"{source} is missing required key(s): {', '.join(missing)}"
        raise AssemblyError(msg)
    return CanaryClassifierThresholdsConfig(
        marginal=values["marginal"],
        pass_=values["pass"],
    )


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        value = value.astimezone()
    return value.astimezone(timezone.utc)


class RequestAssembler:
    """Turns an ad-hoc request config into a submittable execution request."""

    registry: MetricProviderRegistry
    clock: Callable[[], int]

    def __init__(
        self,
        registry: MetricProviderRegistry | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        """Initialize the assembler.

        Args:
            registry: Metric provider registry (default: all known backends)
            clock: Returns the current time in epoch milliseconds

        """
        self.registry = registry or MetricProviderRegistry()
        self.clock = clock or epoch_millis

    def build(
        self,
        config_path: Path,
        start: datetime,
        end: datetime,
    ) -> CanaryAdhocExecutionRequest:
        """Load a config file and assemble the execution request."""
        return self.assemble(load_adhoc_config(config_path), start, end)

    def assemble(
        self,
        config: AdhocConfig | Mapping[str, object],
        start: datetime,
        end: datetime,
    ) -> CanaryAdhocExecutionRequest:
        """Assemble an execution request for an analysis window.

        Args:
            config: Parsed config, or a raw mapping to validate
            start: Analysis window start
            end: Analysis window end

        Returns:
            The ad-hoc execution request envelope

        Raises:
            AssemblyError: If the config is invalid, a threshold is missing or
                a metric group names an unknown service type

        """
        if not isinstance(config, AdhocConfig):
            try:
                config = AdhocConfig.model_validate(config)
            except ValidationError as e:
                msg = f"Invalid adhoc request configuration: {e}"
                raise AssemblyError(msg) from e

        start = _as_utc(start)
        end = _as_utc(end)
        if end < start:
            msg = "Analysis end time is before the start time"
            raise AssemblyError(msg)

        scope_name = config.scope_name
        classifier = CanaryClassifierConfig(
            group_weights=dict(config.classifier.group_weights),
            score_thresholds=_thresholds(
                config.classifier.score_thresholds, "classifier.scoreThresholds"
            ),
        )
        metrics = self._metric_configs(config)

        now = self.clock()
        now_instant = instant_from_millis(now)
        canary_config = CanaryConfig(
            name=config.name,
            applications=[scope_name],
            judge=CanaryJudgeConfig(name=config.judge),
            metrics=metrics,
            templates=dict(config.templates),
            classifier=classifier,
            created_timestamp=now,
            created_timestamp_iso=format_instant(now_instant),
            updated_timestamp=now,
            updated_timestamp_iso=format_instant(now_instant),
        )

        scope_pair = CanaryScopePair(
            control_scope=self._scope(scope_name, config.control_scope, start, end),
            experiment_scope=self._scope(
                scope_name, config.experiment_scope, start, end
            ),
        )
        execution_request = CanaryExecutionRequest(
            scopes={scope_name: scope_pair},
            thresholds=_thresholds(config.request_thresholds, "requestThresholds"),
        )

        logger.debug(
            "Assembled adhoc request for scope %s with %d metrics",
            scope_name,
            len(metrics),
        )
        return CanaryAdhocExecutionRequest(
            canary_config=canary_config,
            execution_request=execution_request,
        )

    def _metric_configs(self, config: AdhocConfig) -> list[CanaryMetricConfig]:
        metrics: list[CanaryMetricConfig] = []
        for group in config.metric_groups:
            try:
                provider = self.registry.resolve(group.service_type)
            except UnknownServiceType as e:
                msg = f"Metric group '{group.group_name}': {e}"
                raise AssemblyError(msg) from e
            for metric_name in group.metric_names:
                metrics.append(
                    CanaryMetricConfig(
                        name=metric_name,
                        query=provider.build_query(metric_name, group),
                        groups=[group.group_name],
                        analysis_configurations=group.analysis_configurations,
                        scope_name=config.scope_name,
                    )
                )
        return metrics

    @staticmethod
    def _scope(
        scope_name: str,
        client_scope: ClientCanaryScope,
        start: datetime,
        end: datetime,
    ) -> CanaryScope:
        return CanaryScope(
            scope=scope_name,
            location=client_scope.location,
            extended_scope_params=dict(client_scope.extended_scope_params),
            start=start,
            end=end,
            step=DEFAULT_STEP_SECONDS,
        )
