"""Connector configuration."""

from dataclasses import dataclass

# Period requested from the remote source, in seconds
DEFAULT_STEP = 5 * 60

DEFAULT_MAX_CONCURRENCY = 8


@dataclass(frozen=True)
class ConnectorConfig:
    """Settings for a CloudWatchConnector.

    Attributes:
        step: Bucket width and remote period, in seconds.
        max_concurrency: Maximum number of leaves loaded at once.
        raise_on_failure: When True, ``load`` raises LoadError if any leaf
            failed. When False, failed leaves are logged and dropped.
    """

    step: int = DEFAULT_STEP
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    raise_on_failure: bool = False

    def __post_init__(self) -> None:
        if self.step <= 0:
            raise ValueError("step must be positive")
        if self.max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
