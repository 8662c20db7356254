# Copyright (c) Syntropy Systems
"""Registry mapping service types to metric set query schemas."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from canaryctl.errors import InvalidSubtypeConfiguration, UnknownServiceType
from canaryctl.models.query import (
    DatadogCanaryMetricSetQueryConfig,
    MetricSetQueryConfig,
    PrometheusCanaryMetricSetQueryConfig,
    StackdriverCanaryMetricSetQueryConfig,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from canaryctl.models.adhoc import MetricGroup

logger = logging.getLogger(__name__)

# Every metrics backend this build can query.
METRIC_SET_QUERY_VARIANTS: tuple[type[MetricSetQueryConfig], ...] = (
    DatadogCanaryMetricSetQueryConfig,
    PrometheusCanaryMetricSetQueryConfig,
    StackdriverCanaryMetricSetQueryConfig,
)


@dataclass(frozen=True)
class MetricProvider:
    """A registered metrics backend and the query schema it accepts."""

    service_type: str
    query_class: type[MetricSetQueryConfig]

    def build_query(self, metric_name: str, group: MetricGroup) -> MetricSetQueryConfig:
        """Build this backend's query for one metric of a group."""
        return self.query_class.from_metric_group(metric_name, group)


def service_type_of(variant: type[MetricSetQueryConfig]) -> str:
    """Return the service type a query variant declares.

    Raises:
        InvalidSubtypeConfiguration: If the variant has no non-empty ``type``
            field default.

    """
    field = variant.model_fields.get("type")
    key = field.default if field is not None else None
    if not isinstance(key, str) or not key:
        msg = f"Subtype {variant.__name__} does not declare a service type"
        raise InvalidSubtypeConfiguration(msg)
    return key


class MetricProviderRegistry:
    """Lookup table from service type to metric provider.

    The table is built from the variant list on first use and is read-only
    afterwards.
    """

    _variants: tuple[type[MetricSetQueryConfig], ...]
    _providers: dict[str, MetricProvider] | None

    def __init__(
        self,
        variants: Sequence[type[MetricSetQueryConfig]] = METRIC_SET_QUERY_VARIANTS,
    ) -> None:
        self._variants = tuple(variants)
        self._providers = None

    def _discover(self) -> dict[str, MetricProvider]:
        providers: dict[str, MetricProvider] = {}
        for variant in self._variants:
            service_type = service_type_of(variant)
            if service_type in providers:
                existing = providers[service_type].query_class.__name__
                msg = (
                    f"Subtypes {existing} and {variant.__name__} both declare "
                    f"service type '{service_type}'"
                )
                raise InvalidSubtypeConfiguration(msg)
            providers[service_type] = MetricProvider(service_type, variant)
        logger.debug("Discovered metric providers: %s", ", ".join(providers))
        return providers

    @property
    def providers(self) -> dict[str, MetricProvider]:
        """Registered providers keyed by service type."""
        if self._providers is None:
            self._providers = self._discover()
        return self._providers

    def service_types(self) -> list[str]:
        """List the registered service types."""
        return list(self.providers)

    def resolve(self, service_type: str) -> MetricProvider:
        """Return the provider registered for a service type.

        Raises:
            UnknownServiceType: If no variant declares ``service_type``.

        """
        try:
            return self.providers[service_type]
        except KeyError:
            raise UnknownServiceType(service_type, self.providers) from None
