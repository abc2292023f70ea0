"""Bucketing of sparse datapoints into fixed-interval series."""

from collections.abc import Callable, Iterable

from cloudseries.core.models import Datapoint, TimeWindow


def bucket_count(window: TimeWindow, step: int) -> int:
    """Return the number of buckets covering ``window`` at ``step`` width.

    Equals ``ceil((end - start) / step)``, and 0 for an empty window.
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    if window.duration <= 0:
        return 0
    return -(-window.duration // step)


def bucket(
    window: TimeWindow,
    step: int,
    datapoints: Iterable[Datapoint],
    select: Callable[[Datapoint], float | None],
) -> list[float | None]:
    """Map datapoints onto a fixed-width array spanning the window.

    Args:
        window: Requested time window.
        step: Bucket width in seconds.
        datapoints: Raw datapoints, in any order.
        select: Extracts the value stored for a datapoint.

    Returns:
        One value per bucket, None where no datapoint landed. When several
        datapoints share a bucket the last one in input order wins.
        Datapoints before ``start`` or past ``start + len * step`` are dropped.

    Raises:
        ValueError: If step is not positive.
    """
    values: list[float | None] = [None] * bucket_count(window, step)
    for datapoint in datapoints:
        index = (datapoint.timestamp - window.start) // step
        if 0 <= index < len(values):
            values[index] = select(datapoint)
    return values
