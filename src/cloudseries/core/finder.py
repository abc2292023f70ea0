"""Path matching against the schema tree.

Two matching modes are offered. ``query`` is for discovery: it expands
glob segments and reports wildcard positions as ``*``. ``find`` resolves a
concrete target, binding each wildcard position to the supplied segment,
and ``traverse`` folds the attributes along such a path into a spec.
"""

from collections.abc import Iterator, Mapping
from fnmatch import fnmatchcase
from types import MappingProxyType

from cloudseries.core.models import Datapoint, MatchResult
from cloudseries.core.paths import WILDCARD, is_glob, name_to_path
from cloudseries.core.schema import AttributeValue, SchemaNode
from cloudseries.core.statistics import Statistic


class ResolvedSpec(Mapping[str, AttributeValue]):
    """Attributes merged along a path, deeper nodes winning on collision."""

    def __init__(self, attributes: Mapping[str, AttributeValue]) -> None:
        self._attributes = MappingProxyType(dict(attributes))

    def __getitem__(self, key: str) -> AttributeValue:
        return self._attributes[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __repr__(self) -> str:
        return f"ResolvedSpec({dict(self._attributes)!r})"

    def _text(self, key: str) -> str:
        value = self._attributes.get(key)
        if not isinstance(value, str):
            raise KeyError(key)
        return value

    @property
    def key(self) -> str:
        return self._text("key")

    @property
    def namespace(self) -> str:
        return self._text("namespace")

    @property
    def dimension_name(self) -> str:
        return self._text("dimension_name")

    @property
    def metric_name(self) -> str:
        return self._text("metric_name")

    @property
    def identifier_prefix(self) -> str | None:
        value = self._attributes.get("identifier_prefix")
        return value if isinstance(value, str) else None

    @property
    def statistic(self) -> Statistic:
        value = self._attributes.get("statistic")
        if not isinstance(value, Statistic):
            raise KeyError("statistic")
        return value

    def select(self, datapoint: Datapoint) -> float | None:
        """Select this spec's statistic from a raw datapoint."""
        return self.statistic.select(datapoint)


class TreeFinder:
    """Matches dot-delimited paths against a schema tree.

    The tree is never modified, so one finder can serve concurrent
    requests.
    """

    def __init__(self, root: SchemaNode) -> None:
        self._root = root

    @property
    def root(self) -> SchemaNode:
        return self._root

    def query(self, pattern: str) -> list[MatchResult]:
        """Enumerate schema nodes matching a discovery pattern.

        Each segment is matched as a shell-style glob against literal
        child keys. The bare ``*`` token also enters wildcard children and
        is kept as ``*`` in the reported path. A plain segment that names
        no literal child binds to the wildcard child.

        Args:
            pattern: Dot-delimited pattern (e.g., "instance.*").

        Returns:
            Matching nodes sorted by path. Empty when nothing matches.
        """
        matches = [
            MatchResult(path=path, is_leaf=node.is_leaf)
            for path, node in self._expand(name_to_path(pattern), bind_wildcards=False)
        ]
        return sorted(matches, key=lambda m: m.path)

    def find(self, target: str) -> list[MatchResult]:
        """Resolve a target to the schema nodes it reaches.

        A plain segment advances into the literal child of that name, or
        else into the wildcard child, binding the segment as its value.
        Glob segments expand over literal children only.

        Args:
            target: Dot-delimited target
                (e.g., "instance.i-abc123.CPUUtilization.Average").

        Returns:
            One result per node reached, in schema declaration order.
            Empty when any segment cannot be matched.
        """
        return [
            MatchResult(path=path, is_leaf=node.is_leaf)
            for path, node in self._expand(name_to_path(target), bind_wildcards=True)
        ]

    def traverse(self, path: tuple[str, ...] | list[str]) -> ResolvedSpec | None:
        """Merge node attributes along a concrete path.

        Returns:
            The merged spec, or None if the path leaves the tree.
        """
        merged: dict[str, AttributeValue] = dict(self._root.attributes)
        node = self._root
        for segment in path:
            next_node = _step(node, segment)
            if next_node is None:
                return None
            merged.update(next_node.attributes)
            node = next_node
        return ResolvedSpec(merged)

    def _expand(
        self, segments: tuple[str, ...], bind_wildcards: bool
    ) -> list[tuple[tuple[str, ...], SchemaNode]]:
        frontier: list[tuple[tuple[str, ...], SchemaNode]] = [((), self._root)]
        for segment in segments:
            if not segment:
                return []
            next_frontier: list[tuple[tuple[str, ...], SchemaNode]] = []
            for path, node in frontier:
                for key, child in _candidates(node, segment, bind_wildcards):
                    next_frontier.append((path + (key,), child))
            if not next_frontier:
                return []
            frontier = next_frontier
        return frontier


def _step(node: SchemaNode, segment: str) -> SchemaNode | None:
    """Advance one concrete segment: literal child first, wildcard second."""
    if not segment:
        return None
    child = node.children.get(segment)
    if child is not None:
        return child
    return node.wildcard


def _candidates(
    node: SchemaNode, segment: str, bind_wildcards: bool
) -> list[tuple[str, SchemaNode]]:
    if not is_glob(segment):
        child = _step(node, segment)
        return [] if child is None else [(segment, child)]

    found = [
        (key, child)
        for key, child in node.children.items()
        if fnmatchcase(key, segment)
    ]
    # Only discovery reports wildcard positions; a target needs a real value
    if not bind_wildcards and segment == WILDCARD and node.wildcard is not None:
        found.append((WILDCARD, node.wildcard))
    return found
