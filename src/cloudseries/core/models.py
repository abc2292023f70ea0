"""Core domain models for metric series data."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Datapoint:
    """A single raw observation returned by the remote metric source.

    Only the statistics that were requested are populated; the rest
    stay None.

    Attributes:
        timestamp: Unix timestamp in seconds.
        sum: Sum of the samples in the source period.
        minimum: Smallest sample in the source period.
        maximum: Largest sample in the source period.
        average: Mean of the samples in the source period.
        sample_count: Number of samples in the source period.
        unit: Unit reported by the source (e.g., "Percent").
    """

    timestamp: int
    sum: float | None = None
    minimum: float | None = None
    maximum: float | None = None
    average: float | None = None
    sample_count: float | None = None
    unit: str | None = None


@dataclass(frozen=True)
class TimeWindow:
    """A requested time range, in Unix seconds.

    Attributes:
        start: Inclusive start of the window.
        end: Exclusive end of the window.
    """

    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class MatchResult:
    """A schema node reached by matching a path.

    Attributes:
        path: Concrete segments consumed to reach the node.
        is_leaf: True when the node has no children.
    """

    path: tuple[str, ...]
    is_leaf: bool

    @property
    def name(self) -> str:
        return ".".join(self.path)


@dataclass(frozen=True)
class Series:
    """A dense, fixed-interval series.

    Attributes:
        name: Dot-delimited series name.
        step: Bucket width in seconds.
        start: Window start in Unix seconds.
        end: Window end in Unix seconds.
        values: One entry per bucket; None marks a bucket without data.
    """

    name: str
    step: int
    start: int
    end: int
    values: list[float | None] = field(default_factory=list)
