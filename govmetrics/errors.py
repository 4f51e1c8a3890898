"""Exceptions raised while producing a governance report.

Every failure aborts the whole report generation. The aggregator never
returns a partial report and never retries; retry policy belongs to the
caller.
"""

from typing import Any, Optional


class GovernanceReportError(Exception):
    """Base class for all governance reporting errors."""


class IncompleteDataError(GovernanceReportError):
    """Raised when a registered metric has no sample for the requested period."""

    def __init__(
        self,
        category: Any,
        metric: str,
        period: Any,
        reason: Optional[str] = None,
    ):
        self.category = category
        self.metric = metric
        self.period = period
        self.reason = reason

        msg = f"Missing sample for {_label(category)}.{metric} ({_label(period)})"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class ProviderTimeoutError(IncompleteDataError):
    """Raised when a provider does not answer within the caller's timeout."""

    def __init__(self, category: Any, metric: str, period: Any, timeout: float):
        self.timeout = timeout
        super().__init__(
            category, metric, period, reason=f"provider timed out after {timeout:g}s"
        )


class InconsistentPeriodError(GovernanceReportError):
    """Raised when a sample does not belong to the metric and period requested.

    That includes a sample collected outside the report window and a metric
    sampled less often than the report period. Also covers duplicate samples
    for the same metric in one period window: duplicates are never merged.
    """

    def __init__(
        self,
        category: Any,
        metric: str,
        expected: Any,
        actual: Any,
        reason: Optional[str] = None,
    ):
        self.category = category
        self.metric = metric
        self.expected = expected
        self.actual = actual

        msg = reason or (
            f"Sample for {_label(category)}.{metric} has period "
            f"{_label(actual)}, expected {_label(expected)}"
        )
        super().__init__(msg)


class ConfigurationError(GovernanceReportError):
    """Raised when a config or measurements file cannot be used."""


class MeasurementNotFoundError(LookupError):
    """Raised by the static provider when it holds no value for a metric.

    This is a provider-side error; the aggregator maps it to
    IncompleteDataError.
    """

    def __init__(self, metric: str, period: Any, window: Any = None):
        self.metric = metric
        self.period = period
        self.window = window

        msg = f"No measurement for {metric} ({_label(period)})"
        if window is not None:
            msg += f" in window {window}"
        super().__init__(msg)


def _label(value: Any) -> str:
    return str(getattr(value, "value", value)) if value is not None else "unknown"
