"""Measurement providers and sample collection."""

from .base import MeasurementProvider
from .collector import SampleCollector
from .static import (
    MeasurementRecord,
    StaticMeasurementProvider,
    build_static_providers,
    load_measurements,
)

__all__ = [
    'MeasurementProvider',
    'SampleCollector',
    'MeasurementRecord',
    'StaticMeasurementProvider',
    'build_static_providers',
    'load_measurements',
]
