"""Rendering of governance reports into Markdown documents.

Rendering is a pure function of the report: no clock reads and no
randomness, so identical reports always produce identical text and report
documents can be diffed between runs.
"""

from typing import List

from govmetrics.metrics import ComplianceStatus, GovernanceReport, MetricResult

_COMPLIANCE_NOTES = {
    ComplianceStatus.COMPLIANT: "Governance health meets the compliance threshold.",
    ComplianceStatus.AT_RISK: "Governance health is below target; remediation is required to stay compliant.",
    ComplianceStatus.NON_COMPLIANT: "Governance health is below the minimum compliance threshold.",
}


def format_report(report: GovernanceReport) -> str:
    """Render ``report`` as a Markdown document."""
    lines: List[str] = [
        f"# Governance Report: {report.period.value.title()}",
        "",
        f"- **Period**: {report.period.value} ({report.window})",
        f"- **Generated**: {report.generated_at.isoformat()}",
        "",
        "## Executive Summary",
        "",
        f"- **Overall Health Score**: {report.health_score:.1f}/100",
        f"- **Compliance Status**: {report.compliance_status.value}",
        f"- **Risk Level**: {report.risk_level.value}",
        f"- **Action Items**: {len(report.action_items)}",
        "",
    ]

    for summary in report.categories:
        lines.append(f"## {summary.category.title} ({summary.score:.1f}/100)")
        lines.append("")
        lines.extend(_metric_line(result) for result in summary.results)
        lines.append("")

    lines += [
        "## Compliance Status",
        "",
        f"- **Status**: {report.compliance_status.value}",
        f"- {_COMPLIANCE_NOTES[report.compliance_status]}",
        "",
        "## Risk Assessment",
        "",
        f"- **Risk Level**: {report.risk_level.value}",
    ]
    for priority, count in report.priority_counts.items():
        lines.append(f"- **{priority.value.title()} Priority Items**: {count}")
    lines += ["", "## Action Items", ""]

    if report.action_items:
        for index, item in enumerate(report.action_items, start=1):
            lines.append(
                f"{index}. {item.description} "
                f"(Priority: {item.priority.value}, Due: {item.due_date.isoformat()})"
            )
    else:
        lines.append("No action items.")

    return "\n".join(lines) + "\n"


def _metric_line(result: MetricResult) -> str:
    definition = result.definition
    return (
        f"- **{definition.label}**: {result.value:g} {definition.unit.value} "
        f"(target {definition.target:g}, {result.contribution:.1%})"
    )
