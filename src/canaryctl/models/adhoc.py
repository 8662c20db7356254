# Copyright (c) Syntropy Systems
"""Pydantic models for the user-authored ad-hoc request configuration."""

from __future__ import annotations

from pydantic import Field, field_validator

from .base import CanaryBaseModel, JSONValue

DEFAULT_REQUEST_FILENAME = "./adhoc-request.json"


class ClientCanaryScope(CanaryBaseModel):
    """Where one side of the comparison runs."""

    location: str | None = None
    extended_scope_params: dict[str, str] = Field(default_factory=dict)


class CanaryConfigClassifier(CanaryBaseModel):
    """Classifier weights and score cut points."""

    group_weights: dict[str, float] = Field(default_factory=dict)
    score_thresholds: dict[str, float] = Field(default_factory=dict)


class MetricGroup(CanaryBaseModel):
    """A group of metrics queried from one metrics backend."""

    group_name: str
    service_type: str
    metric_names: list[str] = Field(default_factory=list)
    custom_filter: str | None = None
    custom_filter_template: str | None = None
    group_by_fields: list[str] | None = None
    analysis_configurations: dict[str, dict[str, JSONValue]] = Field(
        default_factory=dict
    )


class AdhocConfig(CanaryBaseModel):
    """Ad-hoc canary request configuration read from disk."""

    name: str | None = None
    scope_name: str = Field(min_length=1)
    judge: str | None = None
    templates: dict[str, str] = Field(default_factory=dict)
    classifier: CanaryConfigClassifier = Field(default_factory=CanaryConfigClassifier)
    request_thresholds: dict[str, float] = Field(default_factory=dict)
    control_scope: ClientCanaryScope
    experiment_scope: ClientCanaryScope
    metric_groups: list[MetricGroup] = Field(default_factory=list)

    @field_validator("templates", "request_thresholds", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        if value is None:
            return {}
        return value
