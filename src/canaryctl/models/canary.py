# Copyright (c) Syntropy Systems
"""Pydantic models for the canary execution request sent to the service."""

from __future__ import annotations

from pydantic import Field

from .base import CanaryBaseModel, Instant, JSONValue
from .query import MetricSetQuery

DEFAULT_STEP_SECONDS = 60


class CanaryJudgeConfig(CanaryBaseModel):
    """Judge implementation used to score the comparison."""

    name: str | None = None
    judge_configurations: dict[str, JSONValue] = Field(default_factory=dict)


class CanaryClassifierThresholdsConfig(CanaryBaseModel):
    """Marginal and pass cut points."""

    marginal: float
    pass_: float = Field(alias="pass")


class CanaryClassifierConfig(CanaryBaseModel):
    """Group weights plus score thresholds."""

    group_weights: dict[str, float] = Field(default_factory=dict)
    score_thresholds: CanaryClassifierThresholdsConfig


class CanaryMetricConfig(CanaryBaseModel):
    """One metric to compare, with its backend query."""

    name: str
    query: MetricSetQuery
    groups: list[str] = Field(default_factory=list)
    analysis_configurations: dict[str, dict[str, JSONValue]] = Field(
        default_factory=dict
    )
    scope_name: str


class CanaryConfig(CanaryBaseModel):
    """Canary configuration embedded in an ad-hoc request."""

    name: str | None = None
    applications: list[str] = Field(default_factory=list)
    judge: CanaryJudgeConfig
    metrics: list[CanaryMetricConfig] = Field(default_factory=list)
    templates: dict[str, str] = Field(default_factory=dict)
    classifier: CanaryClassifierConfig
    created_timestamp: int
    created_timestamp_iso: str
    updated_timestamp: int
    updated_timestamp_iso: str


class CanaryScope(CanaryBaseModel):
    """Location and time window of one side of the comparison."""

    scope: str
    location: str | None = None
    start: Instant
    end: Instant
    step: int = DEFAULT_STEP_SECONDS
    extended_scope_params: dict[str, str] = Field(default_factory=dict)


class CanaryScopePair(CanaryBaseModel):
    """Control and experiment scopes compared against each other."""

    control_scope: CanaryScope
    experiment_scope: CanaryScope


class CanaryExecutionRequest(CanaryBaseModel):
    """Scopes and overall thresholds for one execution."""

    scopes: dict[str, CanaryScopePair]
    thresholds: CanaryClassifierThresholdsConfig
    metadata: list[dict[str, JSONValue]] = Field(default_factory=list)
    site_local: dict[str, JSONValue] = Field(default_factory=dict)


class CanaryAdhocExecutionRequest(CanaryBaseModel):
    """Submittable envelope: canary config plus execution request."""

    canary_config: CanaryConfig
    execution_request: CanaryExecutionRequest
