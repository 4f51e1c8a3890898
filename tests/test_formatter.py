"""Tests for Markdown report rendering."""

import copy

import pytest

from govmetrics.definitions import MetricCategory, ReportingPeriod
from govmetrics.metrics import MetricsAggregator
from govmetrics.reporting import format_report


@pytest.fixture
def underperforming_values(on_target_values):
    values = copy.deepcopy(on_target_values)
    values[MetricCategory.USER_SUCCESS]['taskCompletionRate'] = 80
    values[MetricCategory.BUSINESS_IMPACT]['featureAdoptionRate'] = 30
    return values


class TestFormatReport:
    """Tests for format_report."""

    @pytest.mark.asyncio
    async def test_sections_in_order(self, registry, underperforming_values, make_providers):
        report = await MetricsAggregator(registry).generate_report(
            ReportingPeriod.MONTHLY, make_providers(registry, underperforming_values)
        )
        document = format_report(report)

        headings = [line for line in document.splitlines() if line.startswith('#')]
        assert headings == [
            "# Governance Report: Monthly",
            "## Executive Summary",
            "## User Success (84.2/100)",
            "## Content Quality (100.0/100)",
            "## Operational Excellence (100.0/100)",
            "## Business Impact (50.0/100)",
            "## Compliance Status",
            "## Risk Assessment",
            "## Action Items",
        ]

    @pytest.mark.asyncio
    async def test_metric_and_action_lines(self, registry, underperforming_values, make_providers):
        report = await MetricsAggregator(registry).generate_report(
            ReportingPeriod.MONTHLY, make_providers(registry, underperforming_values)
        )
        document = format_report(report)

        assert "- **Task Completion Rate**: 80 percent (target 95, 84.2%)" in document
        assert "- **Page Load Time**: 2 seconds (target 2, 100.0%)" in document
        assert "- **Period**: monthly (2026-09-01 to 2026-09-30)" in document

        action_lines = [line for line in document.splitlines() if line[:1].isdigit()]
        assert len(action_lines) == 2
        assert action_lines[0].startswith("1. Raise Feature Adoption Rate")
        assert action_lines[0].endswith("(Priority: high, Due: 2026-10-07)")
        assert action_lines[1].startswith("2. Raise Task Completion Rate")
        assert action_lines[1].endswith("(Priority: medium, Due: 2026-10-14)")

    @pytest.mark.asyncio
    async def test_risk_assessment_counts(self, registry, underperforming_values, make_providers):
        report = await MetricsAggregator(registry).generate_report(
            ReportingPeriod.MONTHLY, make_providers(registry, underperforming_values)
        )
        document = format_report(report)

        assert "- **Risk Level**: ELEVATED" in document
        assert "- **Critical Priority Items**: 0" in document
        assert "- **High Priority Items**: 1" in document
        assert "- **Medium Priority Items**: 1" in document
        assert "- **Compliance Status**: AT_RISK" in document

    @pytest.mark.asyncio
    async def test_no_action_items(self, registry, on_target_values, make_providers):
        report = await MetricsAggregator(registry).generate_report(
            ReportingPeriod.MONTHLY, make_providers(registry, on_target_values)
        )
        document = format_report(report)

        assert document.rstrip().endswith("No action items.")
        assert "- **Compliance Status**: COMPLIANT" in document

    @pytest.mark.asyncio
    async def test_rendering_is_pure(self, registry, underperforming_values, make_providers):
        """Rendering the same report twice gives identical text."""
        report = await MetricsAggregator(registry).generate_report(
            ReportingPeriod.MONTHLY, make_providers(registry, underperforming_values)
        )

        assert format_report(report) == format_report(report)
