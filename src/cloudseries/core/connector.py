"""Connector resolving metric targets into dense series.

A target such as ``instance.web-1.CPUUtilization.*`` is matched against the
schema, each leaf it reaches is fetched from the remote source
concurrently, and the returned datapoints are bucketed into fixed-interval
series.
"""

import asyncio
import logging
from dataclasses import dataclass, field

from cloudseries.core.config import ConnectorConfig
from cloudseries.core.errors import LeafFailure, LoadError
from cloudseries.core.finder import ResolvedSpec, TreeFinder
from cloudseries.core.models import MatchResult, Series, TimeWindow
from cloudseries.core.paths import name_to_path, path_to_name
from cloudseries.core.ports import IdentifierResolverPort, MetricFetcherPort
from cloudseries.core.resample import bucket

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Outcome of loading a target.

    Attributes:
        series: Series for every leaf that loaded, in leaf order.
        unresolved: Names of leaves skipped because their dimension value
            could not be resolved to an identifier.
        failures: Leaves whose fetch or name lookup raised.
    """

    series: list[Series] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)
    failures: list[LeafFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass(frozen=True)
class _Unresolved:
    name: str


def series_name(spec: ResolvedSpec, dimension_value: str) -> str:
    """Name a series after its namespace key, dimension, metric and statistic."""
    return path_to_name(
        (spec.key, dimension_value, spec.metric_name, spec.statistic.value)
    )


def needs_resolution(spec: ResolvedSpec, dimension_value: str) -> bool:
    """Return True if the dimension value is a name rather than an identifier."""
    prefix = spec.identifier_prefix
    return prefix is not None and not dimension_value.startswith(prefix)


class CloudWatchConnector:
    """Resolves targets against a schema and loads them from a metric source.

    Example:
        ```python
        finder = TreeFinder(build_schema())
        connector = CloudWatchConnector(finder, fetcher, resolver)
        series = await connector.load(
            "instance.i-0123.CPUUtilization.Average",
            TimeWindow(start=1700000000, end=1700003600),
        )
        ```
    """

    def __init__(
        self,
        finder: TreeFinder,
        fetcher: MetricFetcherPort,
        resolver: IdentifierResolverPort | None = None,
        config: ConnectorConfig | None = None,
    ) -> None:
        """Initialize the connector.

        Args:
            finder: Finder over the metric schema.
            fetcher: Source of raw datapoints.
            resolver: Translates names to identifiers. Without one, dimension
                values are passed to the fetcher unchanged.
            config: Step, concurrency and failure policy.
        """
        self.finder = finder
        self.fetcher = fetcher
        self.resolver = resolver
        self.config = config or ConnectorConfig()

    def query(self, pattern: str) -> list[MatchResult]:
        """Enumerate schema paths matching a discovery pattern."""
        return self.finder.query(pattern)

    async def load(self, target: str, window: TimeWindow) -> list[Series]:
        """Load the series a target resolves to.

        Leaves whose dimension value cannot be resolved are skipped. Failed
        leaves are logged and skipped, unless ``config.raise_on_failure``
        is set.

        Raises:
            LoadError: If a leaf failed and the config asks to raise.
        """
        result = await self.load_result(target, window)
        if result.failures and self.config.raise_on_failure:
            raise LoadError(target, result.failures)
        return result.series

    async def load_result(self, target: str, window: TimeWindow) -> LoadResult:
        """Load a target, reporting skipped and failed leaves separately."""
        path = name_to_path(target)
        result = LoadResult()
        if len(path) < 2:
            return result
        dimension_value = path[1]

        leaves = [match for match in self.finder.find(target) if match.is_leaf]
        if not leaves:
            logger.debug("No schema match", extra={"target": target})
            return result

        semaphore = asyncio.Semaphore(self.config.max_concurrency)

        async def run(leaf: MatchResult) -> Series | _Unresolved | LeafFailure:
            async with semaphore:
                return await self._load_leaf(leaf, dimension_value, window)

        outcomes = await asyncio.gather(*(run(leaf) for leaf in leaves))
        for outcome in outcomes:
            if isinstance(outcome, Series):
                result.series.append(outcome)
            elif isinstance(outcome, _Unresolved):
                result.unresolved.append(outcome.name)
            else:
                result.failures.append(outcome)
        return result

    async def _load_leaf(
        self, leaf: MatchResult, dimension_value: str, window: TimeWindow
    ) -> Series | _Unresolved | LeafFailure:
        spec = self.finder.traverse(leaf.path)
        if spec is None:
            # find() only yields paths that traverse() can walk
            raise RuntimeError(f"Leaf {leaf.name!r} does not resolve")
        name = series_name(spec, dimension_value)
        step = self.config.step

        try:
            identifier = await self._resolve(spec, dimension_value)
            if identifier is None:
                logger.info(
                    "Dimension value did not resolve",
                    extra={
                        "series": name,
                        "dimension_name": spec.dimension_name,
                        "dimension_value": dimension_value,
                    },
                )
                return _Unresolved(name)
            datapoints = await self.fetcher.fetch(
                spec.namespace,
                spec.dimension_name,
                identifier,
                spec.metric_name,
                spec.statistic.value,
                window.start,
                window.end,
                step,
            )
        except Exception as e:
            logger.warning(
                "Failed to load series",
                exc_info=True,
                extra={"series": name, "namespace": spec.namespace},
            )
            return LeafFailure(name=name, error=e)

        return Series(
            name=name,
            step=step,
            start=window.start,
            end=window.end,
            values=bucket(window, step, datapoints, spec.select),
        )

    async def _resolve(self, spec: ResolvedSpec, dimension_value: str) -> str | None:
        if self.resolver is None or not needs_resolution(spec, dimension_value):
            return dimension_value
        return await self.resolver.resolve_identifier(
            dimension_value, spec.dimension_name
        )
