"""Metric registry and the default governance metric catalogue."""

from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from govmetrics.errors import ConfigurationError
from .base import MetricCategory, MetricDefinition, MetricFrequency, MetricUnit


class MetricRegistry:
    """Registered metric definitions, grouped by category.

    The registry is immutable once built. Within a category, metrics keep
    their registration order and names must be unique. Every category must
    own at least one metric, otherwise its summary score is undefined.
    """

    def __init__(self, metrics: Mapping[MetricCategory, List[MetricDefinition]]):
        categories: Dict[MetricCategory, Mapping[str, MetricDefinition]] = {}

        for category in MetricCategory:
            definitions: Dict[str, MetricDefinition] = {}
            for definition in metrics.get(category, []):
                if definition.name in definitions:
                    raise ValueError(
                        f"Duplicate metric '{definition.name}' in category {category.value}"
                    )
                definitions[definition.name] = definition
            if not definitions:
                raise ValueError(f"Category {category.value} has no registered metrics")
            categories[category] = MappingProxyType(definitions)

        self._categories = MappingProxyType(categories)

    def metrics(self, category: MetricCategory) -> Mapping[str, MetricDefinition]:
        """Return the name -> definition mapping for one category."""
        return self._categories[category]

    def get(self, category: MetricCategory, name: str) -> MetricDefinition:
        try:
            return self._categories[category][name]
        except KeyError:
            raise KeyError(f"Unknown metric {category.value}.{name}") from None

    def __iter__(self) -> Iterator[Tuple[MetricCategory, MetricDefinition]]:
        """Iterate (category, definition) pairs in canonical order."""
        for category, definitions in self._categories.items():
            for definition in definitions.values():
                yield category, definition

    def __len__(self) -> int:
        return sum(len(definitions) for definitions in self._categories.values())

    def __repr__(self) -> str:
        counts = ", ".join(
            f"{category.value}={len(definitions)}"
            for category, definitions in self._categories.items()
        )
        return f"MetricRegistry({counts})"

    @classmethod
    def from_config(cls, config: Mapping[str, List[Dict[str, Any]]]) -> "MetricRegistry":
        """Build a registry from the ``metrics`` config section.

        Expected shape::

            userSuccess:
              - name: taskCompletionRate
                target: 95
                unit: percent
                frequency: monthly
                higher_is_better: true
        """
        metrics: Dict[MetricCategory, List[MetricDefinition]] = {}
        try:
            for category_key, entries in config.items():
                category = MetricCategory(category_key)
                metrics[category] = [
                    MetricDefinition(
                        name=entry["name"],
                        target=float(entry["target"]),
                        unit=MetricUnit(entry["unit"]),
                        frequency=MetricFrequency(entry["frequency"]),
                        higher_is_better=bool(entry.get("higher_is_better", True)),
                        label=entry.get("label", ""),
                        description=entry.get("description", ""),
                    )
                    for entry in entries or []
                ]
            return cls(metrics)
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid metrics configuration: {e}") from e


def _metric(
    name: str,
    target: float,
    unit: MetricUnit,
    frequency: MetricFrequency,
    higher_is_better: bool = True,
    label: str = "",
    description: str = "",
) -> MetricDefinition:
    return MetricDefinition(
        name=name,
        target=target,
        unit=unit,
        frequency=frequency,
        higher_is_better=higher_is_better,
        label=label,
        description=description,
    )


# Governance KPI targets
DEFAULT_METRICS: Dict[MetricCategory, List[MetricDefinition]] = {
    MetricCategory.USER_SUCCESS: [
        _metric("taskCompletionRate", 95, MetricUnit.PERCENT, MetricFrequency.MONTHLY,
                description="Share of users completing documented tasks"),
        _metric("timeToValue", 300, MetricUnit.SECONDS, MetricFrequency.MONTHLY,
                higher_is_better=False,
                description="Median time from landing to first successful outcome"),
        _metric("userSatisfaction", 4.5, MetricUnit.SCORE, MetricFrequency.QUARTERLY,
                description="Average documentation satisfaction survey score (1-5)"),
        _metric("supportTicketVolume", 50, MetricUnit.COUNT, MetricFrequency.WEEKLY,
                higher_is_better=False,
                description="Documentation-related support tickets"),
    ],
    MetricCategory.CONTENT_QUALITY: [
        _metric("accuracyRate", 98, MetricUnit.PERCENT, MetricFrequency.MONTHLY,
                description="Share of audited pages without factual errors"),
        _metric("freshnessRate", 90, MetricUnit.PERCENT, MetricFrequency.MONTHLY,
                description="Share of pages reviewed within their review window"),
        _metric("brokenLinkCount", 5, MetricUnit.COUNT, MetricFrequency.WEEKLY,
                higher_is_better=False),
        _metric("styleComplianceRate", 95, MetricUnit.PERCENT, MetricFrequency.MONTHLY),
    ],
    MetricCategory.OPERATIONAL_EXCELLENCE: [
        _metric("uptime", 99.9, MetricUnit.PERCENT, MetricFrequency.REALTIME),
        _metric("pageLoadTime", 2, MetricUnit.SECONDS, MetricFrequency.REALTIME,
                higher_is_better=False),
        _metric("publishCycleTime", 86400, MetricUnit.SECONDS, MetricFrequency.WEEKLY,
                higher_is_better=False,
                description="Time from approved change to published page"),
        _metric("reviewCompletionRate", 95, MetricUnit.PERCENT, MetricFrequency.WEEKLY),
    ],
    MetricCategory.BUSINESS_IMPACT: [
        _metric("supportCostReduction", 25, MetricUnit.PERCENT, MetricFrequency.QUARTERLY),
        _metric("featureAdoptionRate", 60, MetricUnit.PERCENT, MetricFrequency.MONTHLY),
        _metric("contentRoi", 3, MetricUnit.SCORE, MetricFrequency.QUARTERLY,
                label="Content ROI"),
        _metric("selfServiceRate", 80, MetricUnit.PERCENT, MetricFrequency.MONTHLY,
                description="Share of questions resolved without contacting support"),
    ],
}


def build_registry(config: Optional[Dict[str, Any]] = None) -> MetricRegistry:
    """Return the registry from the ``metrics`` config section, or the defaults."""
    metrics_config = (config or {}).get("metrics")
    if metrics_config:
        return MetricRegistry.from_config(metrics_config)
    return MetricRegistry(DEFAULT_METRICS)
