"""Metric definitions, reporting periods and the metric registry."""

from .base import (
    MeasurementSample,
    MetricCategory,
    MetricDefinition,
    MetricFrequency,
    MetricUnit,
    PeriodWindow,
    ReportingPeriod,
    to_utc,
)
from .catalog import DEFAULT_METRICS, MetricRegistry, build_registry

__all__ = [
    'MeasurementSample',
    'MetricCategory',
    'MetricDefinition',
    'MetricFrequency',
    'MetricUnit',
    'PeriodWindow',
    'ReportingPeriod',
    'MetricRegistry',
    'DEFAULT_METRICS',
    'build_registry',
    'to_utc',
]
