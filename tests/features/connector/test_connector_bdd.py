"""BDD tests for loading series through the connector."""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from cloudseries.adapters.storage.in_memory import (
    InMemoryMetricFetcher,
    StaticIdentifierResolver,
)
from cloudseries.core.connector import CloudWatchConnector, LoadResult
from cloudseries.core.errors import CollaboratorError
from cloudseries.core.finder import TreeFinder
from cloudseries.core.models import Datapoint, TimeWindow
from cloudseries.core.schema import build_schema

scenarios("load_series.feature")

pytestmark = [pytest.mark.tier(1)]


class ScenarioFetcher(InMemoryMetricFetcher):
    """In-memory fetcher that can be told to fail for some statistics."""

    def __init__(self) -> None:
        super().__init__()
        self.failing: set[str] = set()

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
        if statistic in self.failing:
            raise CollaboratorError(f"{statistic} unavailable")
        return await super().fetch(
            namespace,
            dimension_name,
            dimension_value,
            metric_name,
            statistic,
            start,
            end,
            step,
        )


@dataclass
class ConnectorScenarioContext:
    """Shared state between steps in a connector scenario."""

    finder: TreeFinder | None = None
    fetcher: ScenarioFetcher = field(default_factory=ScenarioFetcher)
    identifiers: dict[str, str] = field(default_factory=dict)
    result: LoadResult | None = None

    def connector(self) -> CloudWatchConnector:
        assert self.finder is not None
        resolver = StaticIdentifierResolver({"InstanceId": self.identifiers})
        return CloudWatchConnector(self.finder, self.fetcher, resolver)


@pytest.fixture
def ctx() -> ConnectorScenarioContext:
    """Fresh scenario context for each test."""
    return ConnectorScenarioContext()


def _parse_values(text: str) -> list[float | None]:
    return [None if v == "-" else float(v) for v in text.split(",")]


# === Given ===
@given("the default metric schema")
def step_default_schema(ctx: ConnectorScenarioContext) -> None:
    ctx.finder = TreeFinder(build_schema())


@given(parsers.parse('instance "{instance_id}" reports CPUUtilization averages:'))
def step_instance_datapoints(
    ctx: ConnectorScenarioContext, instance_id: str, datatable: list[list[str]]
) -> None:
    _header, *rows = datatable
    ctx.fetcher.add(
        "AWS/EC2",
        "InstanceId",
        instance_id,
        "CPUUtilization",
        [
            Datapoint(timestamp=int(ts), average=float(value), sum=float(value))
            for ts, value in rows
        ],
    )


@given(parsers.parse('the instance named "{name}" has identifier "{identifier}"'))
def step_named_instance(
    ctx: ConnectorScenarioContext, name: str, identifier: str
) -> None:
    ctx.identifiers[name] = identifier


@given(parsers.parse('fetching the "{statistic}" statistic fails'))
def step_failing_statistic(ctx: ConnectorScenarioContext, statistic: str) -> None:
    ctx.fetcher.failing.add(statistic)


# === When ===
@when(parsers.parse('I load "{target}" from {start:d} until {end:d}'))
def step_load(ctx: ConnectorScenarioContext, target: str, start: int, end: int) -> None:
    ctx.result = asyncio.run(
        ctx.connector().load_result(target, TimeWindow(start=start, end=end))
    )


# === Then ===
@then(parsers.parse("I get {count:d} series"))
def step_series_count(ctx: ConnectorScenarioContext, count: int) -> None:
    assert ctx.result is not None
    assert len(ctx.result.series) == count


@then(parsers.parse('series "{name}" has values "{values}"'))
def step_series_values(ctx: ConnectorScenarioContext, name: str, values: str) -> None:
    assert ctx.result is not None
    by_name = {s.name: s.values for s in ctx.result.series}
    assert by_name[name] == _parse_values(values)


@then(parsers.parse("{count:d} leaf is unresolved"))
def step_unresolved_count(ctx: ConnectorScenarioContext, count: int) -> None:
    assert ctx.result is not None
    assert len(ctx.result.unresolved) == count


@then(parsers.parse('leaf "{name}" failed'))
def step_leaf_failed(ctx: ConnectorScenarioContext, name: str) -> None:
    assert ctx.result is not None
    assert [f.name for f in ctx.result.failures] == [name]
