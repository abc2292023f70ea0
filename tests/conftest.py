"""Shared test fixtures for all test modules."""

import pytest

from cloudseries.adapters.storage.in_memory import (
    InMemoryMetricFetcher,
    StaticIdentifierResolver,
)
from cloudseries.core.connector import CloudWatchConnector
from cloudseries.core.finder import TreeFinder
from cloudseries.core.models import Datapoint, TimeWindow
from cloudseries.core.schema import SchemaNode, build_schema


@pytest.fixture(scope="session")
def schema() -> SchemaNode:
    """Default schema tree, built once like the application does."""
    return build_schema()


@pytest.fixture
def finder(schema: SchemaNode) -> TreeFinder:
    """Finder over the default schema."""
    return TreeFinder(schema)


@pytest.fixture
def window() -> TimeWindow:
    """A ten minute window starting at zero (two 300 second buckets)."""
    return TimeWindow(start=0, end=600)


@pytest.fixture
def fetcher() -> InMemoryMetricFetcher:
    """Fetcher serving CPU datapoints for one instance."""
    fetcher = InMemoryMetricFetcher()
    fetcher.add(
        "AWS/EC2",
        "InstanceId",
        "i-0123",
        "CPUUtilization",
        [
            Datapoint(timestamp=0, average=10.0, maximum=20.0, sum=30.0),
            Datapoint(timestamp=300, average=40.0, maximum=50.0, sum=60.0),
        ],
    )
    return fetcher


@pytest.fixture
def resolver() -> StaticIdentifierResolver:
    """Resolver knowing a single named instance."""
    return StaticIdentifierResolver({"InstanceId": {"web-1": "i-0123"}})


@pytest.fixture
def connector(
    finder: TreeFinder,
    fetcher: InMemoryMetricFetcher,
    resolver: StaticIdentifierResolver,
) -> CloudWatchConnector:
    """Connector wired to in-memory collaborators."""
    return CloudWatchConnector(finder, fetcher, resolver)
