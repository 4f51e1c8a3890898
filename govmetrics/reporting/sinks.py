"""Report sinks: destinations for finished governance reports."""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Union

from loguru import logger

from govmetrics.metrics import GovernanceReport


class ReportSink(ABC):
    """Receives a rendered document together with the structured report.

    Sinks are only called after a report has been generated and rendered
    successfully.
    """

    @abstractmethod
    async def publish(self, document: str, report: GovernanceReport) -> None:
        pass


class FileReportSink(ReportSink):
    """Writes the Markdown document and a JSON rendition to a directory."""

    def __init__(self, output_dir: Union[str, Path] = "output"):
        self.output_dir = Path(output_dir)
        self.written: List[Path] = []

    def base_name(self, report: GovernanceReport) -> str:
        return f"governance_report_{report.period.value}_{report.window.start.isoformat()}"

    async def publish(self, document: str, report: GovernanceReport) -> None:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        base_name = self.base_name(report)

        markdown_path = self.output_dir / f"{base_name}.md"
        markdown_path.write_text(document, encoding="utf-8")

        json_path = self.output_dir / f"{base_name}.json"
        json_path.write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")

        self.written = [markdown_path, json_path]
        logger.info(f"Governance report written to {markdown_path}")


class LogReportSink(ReportSink):
    """Logs the report summary."""

    async def publish(self, document: str, report: GovernanceReport) -> None:
        logger.info(
            f"Governance report {report.period.value} ({report.window}): "
            f"health {report.health_score:.1f}/100, {report.compliance_status.value}, "
            f"{len(report.action_items)} action item(s)"
        )
