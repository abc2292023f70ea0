"""Tests for the Statistic enumeration."""

import pytest

from cloudseries.core.models import Datapoint
from cloudseries.core.statistics import Statistic

DATAPOINT = Datapoint(
    timestamp=0, sum=10.0, minimum=1.0, maximum=9.0, average=5.0, sample_count=2.0
)


@pytest.mark.core
@pytest.mark.parametrize(
    ("statistic", "expected"),
    [
        (Statistic.SUM, 10.0),
        (Statistic.MINIMUM, 1.0),
        (Statistic.MAXIMUM, 9.0),
        (Statistic.AVERAGE, 5.0),
        (Statistic.SAMPLE_COUNT, 2.0),
    ],
)
def test_select_reads_matching_field(statistic: Statistic, expected: float) -> None:
    """Each statistic selects its own field of the datapoint."""
    assert statistic.select(DATAPOINT) == expected


@pytest.mark.core
def test_select_missing_field_returns_none() -> None:
    """Statistics that were not requested are None on the datapoint."""
    assert Statistic.MAXIMUM.select(Datapoint(timestamp=0, average=1.0)) is None


@pytest.mark.core
def test_values_match_remote_names() -> None:
    """Enum values are the names the remote API uses."""
    assert [s.value for s in Statistic] == [
        "Sum",
        "Maximum",
        "Minimum",
        "SampleCount",
        "Average",
    ]
    assert str(Statistic.SAMPLE_COUNT) == "SampleCount"
    assert Statistic("Average") is Statistic.AVERAGE
