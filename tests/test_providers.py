# Copyright (c) Syntropy Systems
"""Tests for the metric provider registry."""

from typing import Literal

import pytest

from canaryctl.errors import InvalidSubtypeConfiguration, UnknownServiceType
from canaryctl.models.adhoc import MetricGroup
from canaryctl.models.query import (
    DatadogCanaryMetricSetQueryConfig,
    MetricSetQueryConfig,
    PrometheusCanaryMetricSetQueryConfig,
    StackdriverCanaryMetricSetQueryConfig,
)
from canaryctl.providers import MetricProviderRegistry, service_type_of


class UntypedQuery(MetricSetQueryConfig):
    """Variant that forgets to declare its service type."""

    metric_name: str


class BlankTypeQuery(MetricSetQueryConfig):
    """Variant with an empty service type."""

    type: str = ""
    metric_name: str


class OtherPrometheusQuery(MetricSetQueryConfig):
    """Second variant claiming the prometheus key."""

    type: Literal["prometheus"] = "prometheus"
    metric_name: str


def make_group(service_type: str) -> MetricGroup:
    return MetricGroup(
        group_name="system",
        service_type=service_type,
        metric_names=["cpu"],
        custom_filter="env=prod",
        custom_filter_template="by-instance",
        group_by_fields=["pod"],
    )


class TestRegistry:
    """Tests for MetricProviderRegistry."""

    def test_default_service_types(self) -> None:
        """Test all built-in backends are registered."""
        registry = MetricProviderRegistry()
        assert sorted(registry.service_types()) == [
            "datadog",
            "prometheus",
            "stackdriver",
        ]

    @pytest.mark.parametrize(
        ("service_type", "query_class"),
        [
            ("prometheus", PrometheusCanaryMetricSetQueryConfig),
            ("stackdriver", StackdriverCanaryMetricSetQueryConfig),
            ("datadog", DatadogCanaryMetricSetQueryConfig),
        ],
    )
    def test_resolve_builds_matching_variant(
        self, service_type: str, query_class: type[MetricSetQueryConfig]
    ) -> None:
        """Test a resolved provider builds the variant for its service type."""
        provider = MetricProviderRegistry().resolve(service_type)

        query = provider.build_query("cpu", make_group(service_type))

        assert provider.service_type == service_type
        assert type(query) is query_class
        assert query.to_wire()["type"] == service_type

    def test_resolve_unknown_service_type(self) -> None:
        """Test resolving an unregistered key fails."""
        registry = MetricProviderRegistry()

        with pytest.raises(UnknownServiceType, match="influxdb") as exc_info:
            _ = registry.resolve("influxdb")

        assert exc_info.value.service_type == "influxdb"
        assert "prometheus" in str(exc_info.value)

    def test_resolve_is_case_sensitive(self) -> None:
        """Test service type keys match exactly."""
        with pytest.raises(UnknownServiceType):
            _ = MetricProviderRegistry().resolve("Prometheus")

    def test_discovery_is_lazy_and_cached(self) -> None:
        """Test the table is built on first use and reused afterwards."""
        registry = MetricProviderRegistry(variants=[UntypedQuery])

        # Constructing the registry does not discover anything yet
        with pytest.raises(InvalidSubtypeConfiguration):
            _ = registry.service_types()

        good = MetricProviderRegistry()
        first = good.providers
        _ = good.resolve("datadog")
        assert good.providers is first

    def test_untyped_variant_fails_discovery(self) -> None:
        """Test a variant without a type key fails even for other lookups."""
        registry = MetricProviderRegistry(
            variants=[PrometheusCanaryMetricSetQueryConfig, UntypedQuery]
        )

        with pytest.raises(InvalidSubtypeConfiguration, match="UntypedQuery"):
            _ = registry.resolve("prometheus")

    def test_blank_type_fails_discovery(self) -> None:
        """Test an empty type key is rejected."""
        with pytest.raises(InvalidSubtypeConfiguration, match="BlankTypeQuery"):
            _ = service_type_of(BlankTypeQuery)

    def test_duplicate_type_fails_discovery(self) -> None:
        """Test two variants cannot claim the same key."""
        registry = MetricProviderRegistry(
            variants=[PrometheusCanaryMetricSetQueryConfig, OtherPrometheusQuery]
        )

        with pytest.raises(InvalidSubtypeConfiguration, match="prometheus"):
            _ = registry.resolve("prometheus")


class TestQueryVariants:
    """Tests for the per-backend query factories."""

    def test_prometheus_copies_filters(self) -> None:
        """Test prometheus queries carry filters and group-by fields."""
        query = PrometheusCanaryMetricSetQueryConfig.from_metric_group(
            "cpu", make_group("prometheus")
        )

        assert query.to_wire() == {
            "type": "prometheus",
            "metricName": "cpu",
            "customFilter": "env=prod",
            "customFilterTemplate": "by-instance",
            "groupByFields": ["pod"],
        }

    def test_stackdriver_uses_metric_type(self) -> None:
        """Test stackdriver queries put the metric name in metricType."""
        query = StackdriverCanaryMetricSetQueryConfig.from_metric_group(
            "compute.googleapis.com/instance/cpu/utilization",
            make_group("stackdriver"),
        )

        wire = query.to_wire()
        assert wire["metricType"] == "compute.googleapis.com/instance/cpu/utilization"
        assert "metricName" not in wire
        assert wire["customFilterTemplate"] == "by-instance"

    def test_datadog_only_has_metric_name(self) -> None:
        """Test datadog queries ignore filter fields."""
        query = DatadogCanaryMetricSetQueryConfig.from_metric_group(
            "p99", make_group("datadog")
        )

        assert query.to_wire() == {"type": "datadog", "metricName": "p99"}
