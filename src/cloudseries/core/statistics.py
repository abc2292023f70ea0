"""Statistics computable from a raw datapoint."""

from enum import Enum

from cloudseries.core.models import Datapoint


class Statistic(Enum):
    """Aggregation the remote source applies within one period.

    Values are the names the remote API uses.
    """

    SUM = "Sum"
    MAXIMUM = "Maximum"
    MINIMUM = "Minimum"
    SAMPLE_COUNT = "SampleCount"
    AVERAGE = "Average"

    def select(self, datapoint: Datapoint) -> float | None:
        """Return the field of ``datapoint`` holding this statistic."""
        if self is Statistic.SUM:
            return datapoint.sum
        if self is Statistic.MAXIMUM:
            return datapoint.maximum
        if self is Statistic.MINIMUM:
            return datapoint.minimum
        if self is Statistic.SAMPLE_COUNT:
            return datapoint.sample_count
        return datapoint.average

    def __str__(self) -> str:
        return self.value
