"""Metrics aggregation and scoring."""

from .aggregation import LEAD_TIME_DAYS, MetricsAggregator
from .types import (
    ActionItem,
    CategorySummary,
    ComplianceStatus,
    GovernanceReport,
    MetricResult,
    Priority,
    RiskLevel,
)

__all__ = [
    'MetricsAggregator',
    'LEAD_TIME_DAYS',
    'ActionItem',
    'CategorySummary',
    'ComplianceStatus',
    'GovernanceReport',
    'MetricResult',
    'Priority',
    'RiskLevel',
]
