"""Metrics aggregation logic."""

import math
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Mapping, Optional, Tuple

from govmetrics.definitions import (
    MeasurementSample,
    MetricCategory,
    MetricDefinition,
    MetricRegistry,
    ReportingPeriod,
    build_registry,
)
from govmetrics.errors import IncompleteDataError, InconsistentPeriodError
from govmetrics.providers import MeasurementProvider, SampleCollector
from .types import (
    ActionItem,
    CategorySummary,
    ComplianceStatus,
    GovernanceReport,
    MetricResult,
    Priority,
)

# Days from sample collection until an action item is due. Fixed policy.
LEAD_TIME_DAYS = {
    Priority.CRITICAL: 2,
    Priority.HIGH: 7,
    Priority.MEDIUM: 14,
    Priority.LOW: 30,
}


class MetricsAggregator:
    """Aggregates measurement samples into a governance report."""

    def __init__(
        self,
        registry: Optional[MetricRegistry] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        """Initialize aggregator with configuration.

        Args:
            registry: Metrics every report must cover (defaults to the
                ``metrics`` config section, then the built-in catalogue)
            config: Configuration dictionary (see govmetrics.config)
        """
        self.config = config or {}
        self.registry = registry or build_registry(self.config)
        self.collector = SampleCollector(self.registry, self.config)

        scoring_config = self.config.get('scoring', {})

        # Metrics contributing less than this get an action item
        self.ACTION_THRESHOLD = scoring_config.get('action_threshold', 0.9)

        # Shortfall bounds: below "low" is low, up to "medium" and "high" (inclusive)
        # are medium and high, anything above is critical
        bands_config = scoring_config.get('priority_bands', {})
        self.PRIORITY_BANDS = {
            Priority.LOW: bands_config.get('low', 0.10),
            Priority.MEDIUM: bands_config.get('medium', 0.25),
            Priority.HIGH: bands_config.get('high', 0.50),
        }

        compliance_config = scoring_config.get('compliance_thresholds', {})
        self.COMPLIANCE_THRESHOLDS = {
            ComplianceStatus.COMPLIANT: compliance_config.get('compliant', 90),
            ComplianceStatus.AT_RISK: compliance_config.get('at_risk', 75),
        }

    async def generate_report(
        self,
        period: ReportingPeriod,
        providers: Mapping[MetricCategory, MeasurementProvider],
        anchor: Optional[date] = None,
        timeout: Optional[float] = None,
        generated_at: Optional[datetime] = None,
    ) -> GovernanceReport:
        """Collect samples from the providers and build the report.

        Args:
            period: Reporting period to generate
            providers: One measurement provider per category
            anchor: Any date inside the reporting window
            timeout: Seconds allowed per provider call
            generated_at: Report timestamp

        Returns:
            Complete GovernanceReport

        Raises:
            IncompleteDataError: a registered metric has no sample
            ProviderTimeoutError: a provider call exceeded ``timeout``
            InconsistentPeriodError: a provider answered for another metric,
                period or window, or a metric is sampled less often than ``period``
        """
        # Fail before calling any provider when the period cannot be reported
        self._check_frequencies(period)
        samples = await self.collector.collect(period, providers, timeout=timeout)
        return self.aggregate(period, samples, anchor=anchor, generated_at=generated_at)

    def aggregate(
        self,
        period: ReportingPeriod,
        samples: Mapping[MetricCategory, Mapping[str, MeasurementSample]],
        anchor: Optional[date] = None,
        generated_at: Optional[datetime] = None,
    ) -> GovernanceReport:
        """Score collected samples.

        Args:
            period: Reporting period the samples must belong to
            samples: {category: {metric_name: sample}}
            anchor: Any date inside the reporting window. Defaults to the
                (UTC) date of the latest sample collection time.
            generated_at: Report timestamp. Defaults to the latest sample
                collection time, so the report depends on its inputs only.

        Returns:
            GovernanceReport with category scores, health score and action items

        Raises:
            IncompleteDataError: a registered metric has no sample
            InconsistentPeriodError: a sample belongs to another metric, period
                or window, or a metric is sampled less often than ``period``
        """
        self._check_frequencies(period)

        checked: List[Tuple[MetricCategory, MetricDefinition, MeasurementSample]] = []
        for category in MetricCategory:
            category_samples = samples.get(category, {})
            for name, definition in self.registry.metrics(category).items():
                sample = category_samples.get(name)
                if sample is None:
                    raise IncompleteDataError(category, name, period)
                self._check_sample(category, definition, sample, period)
                checked.append((category, definition, sample))

        latest_collection = max(sample.collected_at for _, _, sample in checked)
        if generated_at is None:
            generated_at = latest_collection
        if anchor is None:
            anchor = latest_collection.date()
        window = period.window(anchor)

        results: Dict[MetricCategory, List[MetricResult]] = {category: [] for category in MetricCategory}
        action_items: List[ActionItem] = []

        for category, definition, sample in checked:
            if not window.contains(sample.collected_at):
                raise InconsistentPeriodError(
                    category,
                    definition.name,
                    expected=period,
                    actual=sample.period,
                    reason=(
                        f"Sample for {category.value}.{definition.name} was collected "
                        f"{sample.collected_at.isoformat()}, outside the {period.value} window {window}"
                    ),
                )

            result = MetricResult(
                definition=definition,
                sample=sample,
                contribution=definition.contribution(sample.value),
            )
            results[category].append(result)

            item = self._derive_action_item(category, result)
            if item is not None:
                action_items.append(item)

        summaries: List[CategorySummary] = []
        for category, category_results in results.items():
            # Sum then divide: independent of the order samples arrived in
            score = math.fsum(r.contribution for r in category_results) / len(category_results) * 100
            summaries.append(CategorySummary(category=category, score=score, results=tuple(category_results)))

        health_score = math.fsum(s.score for s in summaries) / len(summaries)
        action_items.sort(key=ActionItem.sort_key)

        return GovernanceReport(
            period=period,
            window=window,
            generated_at=generated_at,
            categories=tuple(summaries),
            health_score=health_score,
            compliance_status=self._determine_compliance(health_score),
            action_items=tuple(action_items),
        )

    def _check_frequencies(self, period: ReportingPeriod) -> None:
        """Reject reports for a period finer than some metric's sampling frequency."""
        for category, definition in self.registry:
            if not definition.sampled_within(period):
                raise InconsistentPeriodError(
                    category,
                    definition.name,
                    expected=period,
                    actual=definition.frequency,
                    reason=(
                        f"{category.value}.{definition.name} is sampled {definition.frequency.value} "
                        f"and has no value for a {period.value} period"
                    ),
                )

    def _check_sample(
        self,
        category: MetricCategory,
        definition: MetricDefinition,
        sample: MeasurementSample,
        period: ReportingPeriod,
    ) -> None:
        if sample.metric.name != definition.name:
            raise InconsistentPeriodError(
                category,
                definition.name,
                expected=period,
                actual=sample.period,
                reason=(
                    f"Requested {category.value}.{definition.name} "
                    f"but received a sample for {sample.metric.name}"
                ),
            )
        if sample.period is not period:
            raise InconsistentPeriodError(category, definition.name, expected=period, actual=sample.period)

    def _derive_action_item(self, category: MetricCategory, result: MetricResult) -> Optional[ActionItem]:
        """Return an action item if the metric is below the action threshold."""
        if result.contribution >= self.ACTION_THRESHOLD:
            return None

        definition = result.definition
        priority = self.priority_for_shortfall(result.shortfall)
        verb = "Raise" if definition.higher_is_better else "Reduce"
        description = (
            f"{verb} {definition.label} from {result.value:g} toward target "
            f"{definition.target:g} {definition.unit.value} "
            f"({result.contribution:.1%} of target)"
        )

        return ActionItem(
            description=description,
            priority=priority,
            due_date=result.sample.collected_at.date() + timedelta(days=LEAD_TIME_DAYS[priority]),
            metric_name=definition.name,
            category=category,
            contribution=result.contribution,
        )

    def priority_for_shortfall(self, shortfall: float) -> Priority:
        """Map a shortfall (1 - contribution) to an action item priority."""
        if shortfall < self.PRIORITY_BANDS[Priority.LOW]:
            return Priority.LOW
        if shortfall <= self.PRIORITY_BANDS[Priority.MEDIUM]:
            return Priority.MEDIUM
        if shortfall <= self.PRIORITY_BANDS[Priority.HIGH]:
            return Priority.HIGH
        return Priority.CRITICAL

    def _determine_compliance(self, health_score: float) -> ComplianceStatus:
        """Determine compliance status based on the overall health score."""
        if health_score >= self.COMPLIANCE_THRESHOLDS[ComplianceStatus.COMPLIANT]:
            return ComplianceStatus.COMPLIANT
        elif health_score >= self.COMPLIANCE_THRESHOLDS[ComplianceStatus.AT_RISK]:
            return ComplianceStatus.AT_RISK
        else:
            return ComplianceStatus.NON_COMPLIANT
