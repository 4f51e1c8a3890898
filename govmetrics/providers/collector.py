"""Sample collection: fans provider requests out and gathers the results."""

import asyncio
from typing import Any, Dict, List, Mapping, Optional, Union

from loguru import logger

from govmetrics.definitions import MeasurementSample, MetricCategory, MetricDefinition, MetricRegistry, ReportingPeriod
from govmetrics.errors import GovernanceReportError, IncompleteDataError, ProviderTimeoutError
from .base import MeasurementProvider

CollectedSamples = Dict[MetricCategory, Dict[str, MeasurementSample]]


class SampleCollector:
    """Requests one sample per registered metric from the category providers.

    Requests are independent of each other. With ``parallel`` enabled they are
    issued concurrently (bounded by ``max_concurrent_calls``); otherwise they
    are awaited one by one in registry order. Either way every request
    completes or fails before anything is returned, and a failure always
    surfaces as the first failing metric in registry order so that errors
    are as reproducible as reports.
    """

    def __init__(self, registry: MetricRegistry, config: Optional[Dict[str, Any]] = None):
        """Initialize collector.

        Args:
            registry: Metrics that must be sampled
            config: Full configuration dictionary; reads the ``collection`` section
        """
        self.registry = registry
        self.config = config or {}

    def _get_collection_config(self, key: str, default: Any = None) -> Any:
        return self.config.get('collection', {}).get(key, default)

    async def collect(
        self,
        period: ReportingPeriod,
        providers: Mapping[MetricCategory, MeasurementProvider],
        timeout: Optional[float] = None,
    ) -> CollectedSamples:
        """Collect every registered metric for ``period``.

        Args:
            period: Reporting period requested from every provider
            providers: One provider per category
            timeout: Seconds allowed per provider call (None waits forever)

        Returns:
            {category: {metric_name: sample}} for all registered metrics

        Raises:
            IncompleteDataError: a metric has no sample (ProviderTimeoutError on timeout)
        """
        if timeout is None:
            timeout = self._get_collection_config('timeout_sec')
        parallel = self._get_collection_config('parallel', True)
        requests = list(self.registry)

        logger.info(
            f"Collecting {len(requests)} {period.value} samples "
            f"({'parallel' if parallel else 'sequential'})"
        )

        if parallel:
            max_concurrent = self._get_collection_config('max_concurrent_calls', 8)
            semaphore = asyncio.Semaphore(max_concurrent)

            async def bounded_request(category: MetricCategory, definition: MetricDefinition) -> MeasurementSample:
                async with semaphore:
                    return await self._request(providers.get(category), category, definition, period, timeout)

            # Cancelling the caller cancels every pending request
            results: List[Union[MeasurementSample, BaseException]] = await asyncio.gather(*[
                bounded_request(category, definition)
                for category, definition in requests
            ], return_exceptions=True)
        else:
            results = []
            for category, definition in requests:
                sample = await self._request(providers.get(category), category, definition, period, timeout)
                results.append(sample)

        collected: CollectedSamples = {category: {} for category in MetricCategory}
        for (category, definition), result in zip(requests, results):
            if isinstance(result, BaseException):
                raise result
            collected[category][definition.name] = result

        logger.info(f"Collected {len(requests)} samples for {period.value} period")
        return collected

    async def _request(
        self,
        provider: Optional[MeasurementProvider],
        category: MetricCategory,
        definition: MetricDefinition,
        period: ReportingPeriod,
        timeout: Optional[float],
    ) -> MeasurementSample:
        if provider is None:
            raise IncompleteDataError(
                category, definition.name, period, reason="no provider for category"
            )

        try:
            sample = await asyncio.wait_for(provider.get_sample(definition.name, period), timeout)
        except asyncio.TimeoutError as e:
            if timeout is None:
                raise IncompleteDataError(
                    category, definition.name, period, reason=f"{provider.name}: {e!r}"
                ) from e
            raise ProviderTimeoutError(category, definition.name, period, timeout) from e
        except GovernanceReportError:
            raise
        except Exception as e:
            raise IncompleteDataError(
                category, definition.name, period, reason=f"{provider.name}: {type(e).__name__}: {e}"
            ) from e

        if sample is None:
            raise IncompleteDataError(
                category, definition.name, period, reason=f"{provider.name} returned no sample"
            )
        return sample
