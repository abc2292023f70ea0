"""Exception types raised by cloudseries."""

from collections.abc import Sequence
from dataclasses import dataclass


class CloudSeriesError(Exception):
    """Base class for cloudseries errors."""


class CollaboratorError(CloudSeriesError):
    """A remote collaborator (metric fetch or name lookup) failed."""


@dataclass(frozen=True)
class LeafFailure:
    """A leaf whose fetch or name lookup raised.

    Attributes:
        name: Series name the leaf would have produced.
        error: The exception raised while loading it.
    """

    name: str
    error: BaseException


class LoadError(CloudSeriesError):
    """Raised by a strict load when one or more leaves failed."""

    def __init__(self, target: str, failures: Sequence[LeafFailure]) -> None:
        self.target = target
        self.failures = list(failures)
        names = ", ".join(f.name for f in self.failures)
        super().__init__(f"Failed to load {target!r}: {names}")
