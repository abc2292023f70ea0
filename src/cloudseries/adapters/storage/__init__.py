"""Adapters implementing the core ports without a remote service."""

from cloudseries.adapters.storage.in_memory import (
    InMemoryMetricFetcher,
    StaticIdentifierResolver,
)

__all__ = [
    "InMemoryMetricFetcher",
    "StaticIdentifierResolver",
]
