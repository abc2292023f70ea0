"""In-memory adapters for the fetch and name lookup ports."""

from collections.abc import Iterable, Mapping, Sequence

from cloudseries.core.models import Datapoint

# (namespace, dimension_name, dimension_value, metric_name)
MetricKey = tuple[str, str, str, str]


class InMemoryMetricFetcher:
    """In-memory implementation of MetricFetcherPort.

    Serves datapoints from a dict keyed by namespace, dimension and
    metric. Suitable for testing and local development where no remote
    source is available. Every call is recorded in ``calls``.
    """

    def __init__(
        self, datapoints: Mapping[MetricKey, Iterable[Datapoint]] | None = None
    ) -> None:
        self._datapoints: dict[MetricKey, list[Datapoint]] = {
            key: list(points) for key, points in (datapoints or {}).items()
        }
        self.calls: list[dict[str, str | int]] = []

    def add(
        self,
        namespace: str,
        dimension_name: str,
        dimension_value: str,
        metric_name: str,
        datapoints: Iterable[Datapoint],
    ) -> None:
        """Append datapoints served for one metric of one resource."""
        key = (namespace, dimension_name, dimension_value, metric_name)
        self._datapoints.setdefault(key, []).extend(datapoints)

    async def fetch(
        self,
        namespace: str,
        dimension_name: str,
        dimension_value: str,
        metric_name: str,
        statistic: str,
        start: int,
        end: int,
        step: int,
    ) -> Sequence[Datapoint]:
        """Return stored datapoints with start <= timestamp < end."""
        self.calls.append(
            {
                "namespace": namespace,
                "dimension_name": dimension_name,
                "dimension_value": dimension_value,
                "metric_name": metric_name,
                "statistic": statistic,
                "start": start,
                "end": end,
                "step": step,
            }
        )
        key = (namespace, dimension_name, dimension_value, metric_name)
        return [
            dp for dp in self._datapoints.get(key, []) if start <= dp.timestamp < end
        ]


class StaticIdentifierResolver:
    """In-memory implementation of IdentifierResolverPort.

    Looks names up in a fixed mapping of dimension name to
    ``{name: identifier}``.
    """

    def __init__(self, identifiers: Mapping[str, Mapping[str, str]]) -> None:
        self._identifiers = {dim: dict(names) for dim, names in identifiers.items()}
        self.calls: list[tuple[str, str]] = []

    async def resolve_identifier(self, name: str, dimension_name: str) -> str | None:
        """Return the identifier registered for ``name``, if any."""
        self.calls.append((name, dimension_name))
        return self._identifiers.get(dimension_name, {}).get(name)
