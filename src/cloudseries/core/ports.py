"""Port interfaces for remote collaborators.

The connector depends only on these protocols. Concrete adapters live in
``cloudseries.adapters``.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from cloudseries.core.models import Datapoint, MatchResult, Series, TimeWindow


@runtime_checkable
class MetricFetcherPort(Protocol):
    """Port for fetching raw datapoints from a remote metric source."""

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
        """Fetch datapoints for one metric statistic of one resource.

        Args:
            namespace: Remote namespace (e.g., "AWS/EC2").
            dimension_name: Dimension identifying the resource.
            dimension_value: Canonical identifier of the resource.
            metric_name: Metric to fetch.
            statistic: Statistic name as the remote API spells it.
            start: Window start in Unix seconds.
            end: Window end in Unix seconds.
            step: Aggregation period in seconds.

        Returns:
            Datapoints in whatever order the source returns them.
        """
        ...


@runtime_checkable
class IdentifierResolverPort(Protocol):
    """Port for translating human-readable names to canonical identifiers."""

    async def resolve_identifier(self, name: str, dimension_name: str) -> str | None:
        """Return the identifier named ``name``, or None if there is none."""
        ...


@runtime_checkable
class ConnectorPort(Protocol):
    """Query surface consumed by callers such as the HTTP router."""

    def query(self, pattern: str) -> list[MatchResult]:
        """Enumerate schema paths matching a discovery pattern."""
        ...

    async def load(self, target: str, window: TimeWindow) -> list[Series]:
        """Load the series a target resolves to over a window."""
        ...
