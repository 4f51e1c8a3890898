"""Report runner: generate, render and publish a governance report."""

from datetime import date, datetime
from typing import List, Mapping, Optional, Sequence, Tuple

from loguru import logger

from govmetrics.definitions import MetricCategory, ReportingPeriod
from govmetrics.metrics import GovernanceReport, MetricsAggregator
from govmetrics.providers import MeasurementProvider
from .formatter import format_report
from .sinks import ReportSink


class ReportRunner:
    """Runs one report generation end to end.

    Generation failures propagate to the caller untouched and no sink is
    called; the caller decides whether to retry the whole run.
    """

    def __init__(self, aggregator: MetricsAggregator, sinks: Optional[Sequence[ReportSink]] = None):
        self.aggregator = aggregator
        self.sinks: List[ReportSink] = list(sinks or [])

    async def run(
        self,
        period: ReportingPeriod,
        providers: Mapping[MetricCategory, MeasurementProvider],
        anchor: Optional[date] = None,
        timeout: Optional[float] = None,
        generated_at: Optional[datetime] = None,
    ) -> Tuple[GovernanceReport, str]:
        """Generate the report for ``period`` and hand it to every sink.

        Returns:
            (report, rendered document)
        """
        logger.info(f"Generating {period.value} governance report...")
        report = await self.aggregator.generate_report(
            period,
            providers,
            anchor=anchor,
            timeout=timeout,
            generated_at=generated_at,
        )
        document = format_report(report)

        for sink in self.sinks:
            await sink.publish(document, report)

        logger.info(
            f"Report complete: health {report.health_score:.1f}/100, "
            f"{len(report.action_items)} action item(s)"
        )
        return report, document
