"""Static measurement provider backed by recorded values.

Values usually come from a measurements file exported by the analytics,
survey and monitoring systems::

    measurements:
      - category: userSuccess
        metric: taskCompletionRate
        period: monthly
        value: 80
        collected_at: 2026-09-30T18:00:00+00:00
"""

from datetime import date, datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from loguru import logger
from pydantic import BaseModel, ValidationError, field_validator

from govmetrics.config import read_structured_file
from govmetrics.definitions import MeasurementSample, MetricCategory, MetricRegistry, ReportingPeriod, to_utc
from govmetrics.errors import ConfigurationError, InconsistentPeriodError, MeasurementNotFoundError
from .base import MeasurementProvider


# (metric name, period, window start) -> (value, collected_at)
MeasurementTable = Dict[Tuple[str, ReportingPeriod, date], Tuple[float, datetime]]


class MeasurementRecord(BaseModel):
    """One recorded measurement as it appears in a measurements file."""
    category: MetricCategory
    metric: str
    period: ReportingPeriod
    value: float
    collected_at: datetime

    @field_validator('collected_at')
    @classmethod
    def normalize_collected_at(cls, value: datetime) -> datetime:
        return to_utc(value)

    @property
    def window_start(self) -> date:
        """Start of the period window the record was collected in."""
        return self.period.window(self.collected_at).start


class MeasurementFile(BaseModel):
    measurements: List[MeasurementRecord] = []


class StaticMeasurementProvider(MeasurementProvider):
    """Serves samples for one category from an in-memory table.

    The table may hold several windows of the same period (e.g. September
    and October monthly exports). ``anchor`` selects which window answers
    a request.
    """

    def __init__(
        self,
        category: MetricCategory,
        registry: MetricRegistry,
        values: MeasurementTable,
        anchor: Optional[date] = None,
        name: str = "",
    ):
        super().__init__()
        self.category = category
        self.registry = registry
        self.anchor = anchor
        self._values = dict(values)
        self._name = name or f"static_{category.value}"

    @property
    def name(self) -> str:
        return self._name

    async def get_sample(self, metric_name: str, period: ReportingPeriod) -> MeasurementSample:
        if self.anchor is None:
            raise MeasurementNotFoundError(metric_name, period)

        window = period.window(self.anchor)
        try:
            value, collected_at = self._values[(metric_name, period, window.start)]
        except KeyError:
            raise MeasurementNotFoundError(metric_name, period, window) from None

        return MeasurementSample(
            metric=self.registry.get(self.category, metric_name),
            period=period,
            value=value,
            collected_at=collected_at,
            source=self.name,
        )


def load_measurements(path: Union[str, Path]) -> List[MeasurementRecord]:
    """Read and validate a measurements file (YAML, JSON or TOML).

    Raises:
        ConfigurationError: if the file is unreadable or fails validation
    """
    data = read_structured_file(path) or {}
    if isinstance(data, list):
        data = {'measurements': data}
    try:
        return MeasurementFile(**data).measurements
    except (TypeError, ValidationError) as e:
        raise ConfigurationError(f"Invalid measurements file {path}: {e}") from e


def build_static_providers(
    records: Iterable[MeasurementRecord],
    registry: MetricRegistry,
    anchor: Optional[date] = None,
) -> Dict[MetricCategory, StaticMeasurementProvider]:
    """Group records into one provider per category.

    Records are keyed by metric, period and the period window their
    ``collected_at`` falls in. Records for metrics that are not registered
    are skipped. A second record for the same metric in the same window is a
    data error, never merged.

    Args:
        records: Validated measurement records
        registry: Registered metrics
        anchor: Date selecting the window served to the aggregator. Defaults
            to the date of the most recent registered record.

    Raises:
        InconsistentPeriodError: on duplicate records
    """
    tables: Dict[MetricCategory, MeasurementTable] = {category: {} for category in MetricCategory}
    latest: Optional[datetime] = None

    for record in records:
        if record.metric not in registry.metrics(record.category):
            logger.warning(
                f"Skipping measurement for unregistered metric {record.category.value}.{record.metric}"
            )
            continue

        key = (record.metric, record.period, record.window_start)
        table = tables[record.category]
        if key in table:
            raise InconsistentPeriodError(
                record.category,
                record.metric,
                expected=record.period,
                actual=record.period,
                reason=(
                    f"Duplicate samples for {record.category.value}.{record.metric} "
                    f"in {record.period.value} window {record.period.window(record.collected_at)}"
                ),
            )
        table[key] = (record.value, record.collected_at)

        if latest is None or record.collected_at > latest:
            latest = record.collected_at

    if anchor is None and latest is not None:
        anchor = latest.date()

    return {
        category: StaticMeasurementProvider(category, registry, table, anchor=anchor)
        for category, table in tables.items()
    }
