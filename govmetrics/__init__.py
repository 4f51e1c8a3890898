"""
Governance metrics and reporting aggregator.

Collects periodic measurements for the four governance categories:
- User success: task completion, time to value, satisfaction
- Content quality: accuracy, freshness, link and style compliance
- Operational excellence: uptime, performance, review cadence
- Business impact: cost reduction, adoption, ROI

and turns them into a scored, immutable governance report with
prioritised action items and a Markdown rendering.
"""

from .definitions import MetricCategory, MetricDefinition, MeasurementSample, ReportingPeriod
from .errors import (
    GovernanceReportError,
    IncompleteDataError,
    InconsistentPeriodError,
    ProviderTimeoutError,
)
from .metrics import GovernanceReport, MetricsAggregator
from .reporting import format_report

__all__ = [
    'MetricCategory',
    'MetricDefinition',
    'MeasurementSample',
    'ReportingPeriod',
    'GovernanceReportError',
    'IncompleteDataError',
    'InconsistentPeriodError',
    'ProviderTimeoutError',
    'GovernanceReport',
    'MetricsAggregator',
    'format_report',
]
