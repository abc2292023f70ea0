"""Core domain: schema, matching, bucketing and the connector."""

from cloudseries.core.config import ConnectorConfig
from cloudseries.core.connector import CloudWatchConnector, LoadResult
from cloudseries.core.errors import (
    CloudSeriesError,
    CollaboratorError,
    LeafFailure,
    LoadError,
)
from cloudseries.core.finder import ResolvedSpec, TreeFinder
from cloudseries.core.models import Datapoint, MatchResult, Series, TimeWindow
from cloudseries.core.resample import bucket
from cloudseries.core.schema import NamespaceDeclaration, SchemaNode, build_schema
from cloudseries.core.statistics import Statistic

__all__ = [
    "CloudSeriesError",
    "CloudWatchConnector",
    "CollaboratorError",
    "ConnectorConfig",
    "Datapoint",
    "LeafFailure",
    "LoadError",
    "LoadResult",
    "MatchResult",
    "NamespaceDeclaration",
    "ResolvedSpec",
    "SchemaNode",
    "Series",
    "Statistic",
    "TimeWindow",
    "TreeFinder",
    "bucket",
    "build_schema",
]
