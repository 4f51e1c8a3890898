"""Shared fixtures for governance metrics tests."""

import asyncio
from datetime import datetime, timezone
from typing import Dict, Optional

import pytest

from govmetrics.definitions import (
    MeasurementSample,
    MetricCategory,
    MetricDefinition,
    MetricFrequency,
    MetricRegistry,
    MetricUnit,
    ReportingPeriod,
)
from govmetrics.providers import MeasurementProvider

COLLECTED_AT = datetime(2026, 9, 30, 18, 0, tzinfo=timezone.utc)


class FakeProvider(MeasurementProvider):
    """In-memory provider with optional latency, failures and wrong periods."""

    def __init__(
        self,
        category: MetricCategory,
        registry: MetricRegistry,
        values: Dict[str, float],
        delays: Optional[Dict[str, float]] = None,
        errors: Optional[Dict[str, Exception]] = None,
        period_override: Optional[ReportingPeriod] = None,
        collected_at: datetime = COLLECTED_AT,
    ):
        super().__init__()
        self.category = category
        self.registry = registry
        self.values = values
        self.delays = delays or {}
        self.errors = errors or {}
        self.period_override = period_override
        self.collected_at = collected_at
        self.calls = []
        self.cancelled = []

    @property
    def name(self) -> str:
        return f"fake_{self.category.value}"

    async def get_sample(self, metric_name, period):
        self.calls.append(metric_name)
        try:
            await asyncio.sleep(self.delays.get(metric_name, 0))
        except asyncio.CancelledError:
            self.cancelled.append(metric_name)
            raise

        if metric_name in self.errors:
            raise self.errors[metric_name]
        if metric_name not in self.values:
            raise KeyError(metric_name)

        return MeasurementSample(
            metric=self.registry.get(self.category, metric_name),
            period=self.period_override or period,
            value=self.values[metric_name],
            collected_at=self.collected_at,
        )


@pytest.fixture
def registry() -> MetricRegistry:
    """One metric per category; page load time is lower-is-better."""
    return MetricRegistry({
        MetricCategory.USER_SUCCESS: [
            MetricDefinition("taskCompletionRate", 95, MetricUnit.PERCENT, MetricFrequency.MONTHLY),
        ],
        MetricCategory.CONTENT_QUALITY: [
            MetricDefinition("accuracyRate", 98, MetricUnit.PERCENT, MetricFrequency.MONTHLY),
        ],
        MetricCategory.OPERATIONAL_EXCELLENCE: [
            MetricDefinition("pageLoadTime", 2, MetricUnit.SECONDS, MetricFrequency.REALTIME,
                             higher_is_better=False),
        ],
        MetricCategory.BUSINESS_IMPACT: [
            MetricDefinition("featureAdoptionRate", 60, MetricUnit.PERCENT, MetricFrequency.MONTHLY),
        ],
    })


@pytest.fixture
def on_target_values() -> Dict[MetricCategory, Dict[str, float]]:
    return {
        MetricCategory.USER_SUCCESS: {'taskCompletionRate': 95},
        MetricCategory.CONTENT_QUALITY: {'accuracyRate': 98},
        MetricCategory.OPERATIONAL_EXCELLENCE: {'pageLoadTime': 2},
        MetricCategory.BUSINESS_IMPACT: {'featureAdoptionRate': 60},
    }


@pytest.fixture
def make_providers():
    """Factory building one FakeProvider per category from a value table."""

    def _make(registry, values, **kwargs):
        return {
            category: FakeProvider(category, registry, dict(values.get(category, {})), **kwargs)
            for category in MetricCategory
        }

    return _make
