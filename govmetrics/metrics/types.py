"""Type definitions for governance reports."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Tuple

from govmetrics.definitions import (
    MeasurementSample,
    MetricCategory,
    MetricDefinition,
    PeriodWindow,
    ReportingPeriod,
)


class Priority(Enum):
    """Urgency of an action item."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    Priority.LOW: 0,
    Priority.MEDIUM: 1,
    Priority.HIGH: 2,
    Priority.CRITICAL: 3,
}


class ComplianceStatus(Enum):
    """Compliance status derived from the overall health score."""
    COMPLIANT = "COMPLIANT"
    AT_RISK = "AT_RISK"
    NON_COMPLIANT = "NON_COMPLIANT"


class RiskLevel(Enum):
    """Risk level derived from the most urgent action item."""
    LOW = "LOW"
    MODERATE = "MODERATE"
    ELEVATED = "ELEVATED"
    CRITICAL = "CRITICAL"


@dataclass(frozen=True)
class MetricResult:
    """A sampled metric and its health contribution."""
    definition: MetricDefinition
    sample: MeasurementSample
    contribution: float  # 0-1

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def value(self) -> float:
        return self.sample.value

    @property
    def shortfall(self) -> float:
        return 1.0 - self.contribution


@dataclass(frozen=True)
class CategorySummary:
    """Summary of one category: score and the per-metric results behind it."""
    category: MetricCategory
    score: float  # 0-100
    results: Tuple[MetricResult, ...] = ()


@dataclass(frozen=True)
class ActionItem:
    """Remediation task derived from an underperforming metric."""
    description: str
    priority: Priority
    due_date: date
    metric_name: str
    category: MetricCategory
    contribution: float

    def sort_key(self) -> Tuple[int, str, int]:
        """Descending priority, then ascending metric name, then category order."""
        return (-self.priority.rank, self.metric_name, _CATEGORY_ORDER[self.category])

    def to_dict(self) -> Dict[str, Any]:
        return {
            'description': self.description,
            'priority': self.priority.value,
            'due_date': self.due_date.isoformat(),
            'metric': self.metric_name,
            'category': self.category.value,
            'contribution': self.contribution,
        }


_CATEGORY_ORDER = {category: index for index, category in enumerate(MetricCategory)}


@dataclass(frozen=True)
class GovernanceReport:
    """Governance health for one reporting period.

    Built fresh by every report run and never modified afterwards.
    """

    period: ReportingPeriod
    window: PeriodWindow
    generated_at: datetime

    # One summary per category, in canonical category order
    categories: Tuple[CategorySummary, ...]

    # Overall metrics
    health_score: float  # 0-100, unweighted mean of the category scores
    compliance_status: ComplianceStatus

    # Sorted by descending priority, then metric name
    action_items: Tuple[ActionItem, ...] = ()

    def category(self, category: MetricCategory) -> CategorySummary:
        for summary in self.categories:
            if summary.category is category:
                return summary
        raise KeyError(category)

    @property
    def category_scores(self) -> Dict[MetricCategory, float]:
        return {summary.category: summary.score for summary in self.categories}

    @property
    def priority_counts(self) -> Dict[Priority, int]:
        counts = {priority: 0 for priority in sorted(Priority, key=lambda p: -p.rank)}
        for item in self.action_items:
            counts[item.priority] += 1
        return counts

    @property
    def risk_level(self) -> RiskLevel:
        counts = self.priority_counts
        if counts[Priority.CRITICAL]:
            return RiskLevel.CRITICAL
        if counts[Priority.HIGH]:
            return RiskLevel.ELEVATED
        if self.action_items:
            return RiskLevel.MODERATE
        return RiskLevel.LOW

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'period': self.period.value,
            'window': {
                'start': self.window.start.isoformat(),
                'end': self.window.end.isoformat(),
            },
            'generated_at': self.generated_at.isoformat(),
            'health_score': self.health_score,
            'compliance_status': self.compliance_status.value,
            'risk_level': self.risk_level.value,
            'category_scores': {
                summary.category.value: summary.score for summary in self.categories
            },
            'metrics': {
                summary.category.value: {
                    result.name: {
                        'value': result.value,
                        'target': result.definition.target,
                        'unit': result.definition.unit.value,
                        'contribution': result.contribution,
                        'collected_at': result.sample.collected_at.isoformat(),
                    }
                    for result in summary.results
                }
                for summary in self.categories
            },
            'action_items': [item.to_dict() for item in self.action_items],
        }

    def get_summary_string(self) -> str:
        """Get human-readable summary."""
        lines = [
            '=' * 60,
            f"Governance Summary ({self.period.value}, {self.window})",
            '=' * 60,
            f"Compliance Status: {self.compliance_status.value}",
            f"Health Score: {self.health_score:.1f}/100",
            "",
            "Category Scores:",
        ]
        for summary in self.categories:
            label = f"{summary.category.title}:"
            lines.append(f"  {label:<24}{summary.score:.1f}/100")
        lines += [
            "",
            f"Action Items: {len(self.action_items)} (risk: {self.risk_level.value})",
            '=' * 60,
        ]
        return "\n".join(lines)
