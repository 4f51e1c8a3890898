"""Base class for measurement providers.

A measurement provider is the external collaborator that knows how to
obtain the value of a metric for a reporting period: an analytics system,
a survey aggregation, an uptime monitor, or a file of recorded values.
There is one provider per metric category.

The aggregator does not care how a provider computes its value. It only
relies on the contract below:

- `get_sample()` returns a MeasurementSample for the requested metric and
  period, or raises. Any exception raised is mapped by the aggregator to
  IncompleteDataError; providers do not need to know that type.
- Providers must not return a sample for a different metric or period.
  Doing so is reported as InconsistentPeriodError.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from govmetrics.definitions import MeasurementSample, ReportingPeriod


class MeasurementProvider(ABC):
    """Base class for all measurement providers.

    Example:
        ```python
        class UptimeProvider(MeasurementProvider):
            @property
            def name(self) -> str:
                return "uptime_monitor"

            async def get_sample(self, metric_name, period):
                value = await self.client.fetch(metric_name, period.value)
                return MeasurementSample(
                    metric=self.registry.get(MetricCategory.OPERATIONAL_EXCELLENCE, metric_name),
                    period=period,
                    value=value,
                    collected_at=datetime.now(timezone.utc),
                )
        ```
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize provider with optional configuration.

        Args:
            config: Optional provider-specific settings (endpoints, credentials, ...)
        """
        self.config = config or {}

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this provider."""
        pass

    @abstractmethod
    async def get_sample(self, metric_name: str, period: ReportingPeriod) -> MeasurementSample:
        """Return the sample for ``metric_name`` in ``period``.

        Args:
            metric_name: Name of a metric registered in the provider's category
            period: The reporting period being generated

        Returns:
            MeasurementSample for exactly that metric and period
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"
