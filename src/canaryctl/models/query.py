# Copyright (c) Syntropy Systems
"""Metric set query schemas, one per metrics backend.

Each variant declares its service type through the default of its ``type``
field. That value is both the JSON discriminator the analysis service expects
and the key the metric provider registry resolves.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Literal, Union

from pydantic import Field
from typing_extensions import Self, TypeAlias

from .base import CanaryBaseModel

if TYPE_CHECKING:
    from .adhoc import MetricGroup


class MetricSetQueryConfig(CanaryBaseModel):
    """Base class for backend-specific metric set queries."""

    @classmethod
    def from_metric_group(cls, metric_name: str, group: MetricGroup) -> Self:
        """Build the query for one metric of a metric group."""
        raise NotImplementedError


class PrometheusCanaryMetricSetQueryConfig(MetricSetQueryConfig):
    """Prometheus metric query."""

    type: Literal["prometheus"] = "prometheus"
    metric_name: str
    custom_filter: str | None = None
    custom_filter_template: str | None = None
    group_by_fields: list[str] | None = None

    @classmethod
    def from_metric_group(cls, metric_name: str, group: MetricGroup) -> Self:
        return cls(
            metric_name=metric_name,
            custom_filter=group.custom_filter,
            custom_filter_template=group.custom_filter_template,
            group_by_fields=group.group_by_fields,
        )


class StackdriverCanaryMetricSetQueryConfig(MetricSetQueryConfig):
    """Stackdriver metric query; the metric name is the metric type."""

    type: Literal["stackdriver"] = "stackdriver"
    metric_type: str
    custom_filter: str | None = None
    custom_filter_template: str | None = None
    group_by_fields: list[str] | None = None

    @classmethod
    def from_metric_group(cls, metric_name: str, group: MetricGroup) -> Self:
        return cls(
            metric_type=metric_name,
            custom_filter=group.custom_filter,
            custom_filter_template=group.custom_filter_template,
            group_by_fields=group.group_by_fields,
        )


class DatadogCanaryMetricSetQueryConfig(MetricSetQueryConfig):
    """Datadog metric query (metric name only)."""

    type: Literal["datadog"] = "datadog"
    metric_name: str

    @classmethod
    def from_metric_group(cls, metric_name: str, group: MetricGroup) -> Self:  # noqa: ARG003
        return cls(metric_name=metric_name)


MetricSetQuery: TypeAlias = Annotated[
    Union[
        PrometheusCanaryMetricSetQueryConfig,
        StackdriverCanaryMetricSetQueryConfig,
        DatadogCanaryMetricSetQueryConfig,
    ],
    Field(discriminator="type"),
]
