"""Resolve dot-delimited metric paths and resample remote datapoints."""

from cloudseries.core import (
    CloudSeriesError,
    CloudWatchConnector,
    CollaboratorError,
    ConnectorConfig,
    Datapoint,
    LeafFailure,
    LoadError,
    LoadResult,
    MatchResult,
    NamespaceDeclaration,
    ResolvedSpec,
    SchemaNode,
    Series,
    Statistic,
    TimeWindow,
    TreeFinder,
    bucket,
    build_schema,
)

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
