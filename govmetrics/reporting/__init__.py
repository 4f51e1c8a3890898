"""Report rendering, sinks and the end-to-end report runner."""

from .formatter import format_report
from .runner import ReportRunner
from .sinks import FileReportSink, LogReportSink, ReportSink

__all__ = [
    'format_report',
    'ReportRunner',
    'ReportSink',
    'FileReportSink',
    'LogReportSink',
]
