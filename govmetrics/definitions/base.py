"""Core types for governance metrics.

This module defines what is measured and what a measurement looks like:

1. MetricCategory: the closed set of four governance categories
   - USER_SUCCESS, CONTENT_QUALITY, OPERATIONAL_EXCELLENCE, BUSINESS_IMPACT
   - Declaration order is the canonical order used in every report

2. MetricDefinition: what "on target" means for a single metric
   - Target value, unit and sampling frequency
   - Orientation (higher-is-better or lower-is-better), fixed per metric

3. ReportingPeriod / PeriodWindow: calendar buckets for measurements
   - Deterministic start/end boundaries for any anchor date

4. MeasurementSample: one value for one metric in one period
   - Produced by a measurement provider, never mutated afterwards

All types are immutable so they can be shared freely between concurrent
provider calls and report runs.
"""

import math
import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Optional


class MetricCategory(Enum):
    """Governance category a metric belongs to."""

    USER_SUCCESS = "userSuccess"
    CONTENT_QUALITY = "contentQuality"
    OPERATIONAL_EXCELLENCE = "operationalExcellence"
    BUSINESS_IMPACT = "businessImpact"

    @property
    def title(self) -> str:
        return _humanize(self.value)


class MetricUnit(Enum):
    """Unit a metric value is expressed in."""

    PERCENT = "percent"
    SECONDS = "seconds"
    SCORE = "score"
    COUNT = "count"


class MetricFrequency(Enum):
    """How often a metric is sampled."""

    REALTIME = "realtime"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"

    @property
    def granularity(self) -> int:
        return _GRANULARITY[self.value]


@dataclass(frozen=True)
class PeriodWindow:
    """Calendar window of a reporting period. Both bounds are inclusive."""

    start: date
    end: date

    def contains(self, moment: date) -> bool:
        if isinstance(moment, datetime):
            moment = moment.date()
        return self.start <= moment <= self.end

    def __str__(self) -> str:
        return f"{self.start.isoformat()} to {self.end.isoformat()}"


class ReportingPeriod(Enum):
    """Calendar bucket a report covers."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"

    def window(self, anchor: date) -> PeriodWindow:
        """Return the window of this period that contains ``anchor``.

        Weeks are ISO weeks (Monday to Sunday), quarters start in January,
        April, July and October.
        """
        if isinstance(anchor, datetime):
            anchor = anchor.date()

        if self is ReportingPeriod.DAILY:
            return PeriodWindow(anchor, anchor)
        if self is ReportingPeriod.WEEKLY:
            start = anchor - timedelta(days=anchor.weekday())
            return PeriodWindow(start, start + timedelta(days=6))
        if self is ReportingPeriod.MONTHLY:
            start = anchor.replace(day=1)
            return PeriodWindow(start, _month_end(start.year, start.month))

        first_month = 3 * ((anchor.month - 1) // 3) + 1
        start = date(anchor.year, first_month, 1)
        return PeriodWindow(start, _month_end(anchor.year, first_month + 2))

    @property
    def granularity(self) -> int:
        return _GRANULARITY[self.value]


@dataclass(frozen=True)
class MetricDefinition:
    """Definition of a governance metric and its target.

    Attributes:
        name: Identifier, unique within its category (camelCase, e.g. "taskCompletionRate")
        target: Value that counts as fully on target (must be positive)
        unit: Unit the value is expressed in
        frequency: How often the metric is sampled
        higher_is_better: Orientation; False for metrics like time-to-value
        label: Human-readable name used in rendered reports
        description: Optional free text
    """

    name: str
    target: float
    unit: MetricUnit
    frequency: MetricFrequency
    higher_is_better: bool = True
    label: str = ""
    description: str = ""

    def __post_init__(self):
        if not self.name:
            raise ValueError("Metric name must not be empty")
        if not math.isfinite(self.target) or self.target <= 0:
            raise ValueError(f"Metric {self.name}: target must be a positive number, got {self.target}")
        if not self.label:
            object.__setattr__(self, "label", _humanize(self.name))

    def contribution(self, value: float) -> float:
        """Normalized 0-1 measure of how close ``value`` is to target."""
        if self.higher_is_better:
            return min(1.0, value / self.target)
        if value == 0:
            return 1.0
        return min(1.0, self.target / value)

    def sampled_within(self, period: ReportingPeriod) -> bool:
        """Whether a sample of this metric can exist for every ``period`` window.

        A metric belongs in a report only if it is sampled at least as often
        as the report period: a quarterly survey has no monthly value.
        """
        return self.frequency.granularity <= period.granularity


@dataclass(frozen=True)
class MeasurementSample:
    """A single measured value for one metric in one reporting period.

    ``collected_at`` is stored in UTC; naive timestamps are read as UTC.
    """

    metric: MetricDefinition
    period: ReportingPeriod
    value: float
    collected_at: datetime
    source: Optional[str] = field(default=None, compare=False)  # provider name, informational only

    def __post_init__(self):
        if not math.isfinite(self.value) or self.value < 0:
            raise ValueError(
                f"Metric {self.metric.name}: value must be a finite non-negative number, got {self.value}"
            )
        object.__setattr__(self, "collected_at", to_utc(self.collected_at))


def to_utc(moment: datetime) -> datetime:
    """Return ``moment`` in UTC. Naive timestamps are taken to be UTC already."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _month_end(year: int, month: int) -> date:
    if month == 12:
        return date(year, 12, 31)
    return date(year, month + 1, 1) - timedelta(days=1)


# Coarseness of sampling frequencies and reporting periods on one scale
_GRANULARITY = {
    "realtime": 0,
    "daily": 1,
    "weekly": 2,
    "monthly": 3,
    "quarterly": 4,
}


def _humanize(name: str) -> str:
    words = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", " ", name)
    return words[:1].upper() + words[1:]
