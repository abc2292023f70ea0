"""Static metric schema tree.

The tree has four levels: namespace key, dimension value (a wildcard
position), metric name and statistic. Each node contributes attributes
that are merged root-to-leaf when a path is resolved.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from cloudseries.core.statistics import Statistic

AttributeValue = str | Statistic | None

INSTANCE_METRICS = (
    "NetworkIn",
    "CPUUtilization",
    "DiskWriteBytes",
    "StatusCheckFailed",
    "DiskReadBytes",
    "StatusCheckFailed_System",
    "StatusCheckFailed_Instance",
    "DiskReadOps",
    "DiskWriteOps",
    "NetworkOut",
)

VOLUME_METRICS = (
    "VolumeIdleTime",
    "VolumeTotalReadTime",
    "VolumeQueueLength",
    "VolumeWriteBytes",
    "VolumeWriteOps",
    "VolumeTotalWriteTime",
    "VolumeReadBytes",
    "VolumeReadOps",
)

ELB_METRICS = (
    "HealthyHostCount",
    "UnHealthyHostCount",
    "RequestCount",
    "Latency",
    "HTTPCode_ELB_4XX",
    "HTTPCode_ELB_5XX",
    "HTTPCode_Backend_2XX",
    "HTTPCode_Backend_3XX",
    "HTTPCode_Backend_4XX",
    "HTTPCode_Backend_5XX",
    "BackendConnectionErrors",
    "SurgeQueueLength",
    "SpilloverCount",
)


@dataclass(frozen=True)
class SchemaNode:
    """A node in the schema tree.

    Attributes:
        attributes: Fields this node contributes to a resolved spec.
        children: Child nodes keyed by literal path segment.
        wildcard: Child matching any single non-empty segment, if any.
    """

    attributes: Mapping[str, AttributeValue] = field(default_factory=dict)
    children: Mapping[str, "SchemaNode"] = field(default_factory=dict)
    wildcard: "SchemaNode | None" = None

    def __post_init__(self) -> None:
        # Freeze the mappings so the tree can be shared between tasks
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        object.__setattr__(self, "children", MappingProxyType(dict(self.children)))

    @property
    def is_leaf(self) -> bool:
        return not self.children and self.wildcard is None


@dataclass(frozen=True)
class NamespaceDeclaration:
    """Declarative description of one metric namespace.

    Attributes:
        key: First path segment selecting the namespace (e.g., "instance").
        namespace: Namespace name on the remote source (e.g., "AWS/EC2").
        dimension_name: Dimension bound by the second path segment.
        metrics: Metric names available in the namespace.
        identifier_prefix: Literal prefix of canonical dimension values, or
            None when any value is canonical.
    """

    key: str
    namespace: str
    dimension_name: str
    metrics: tuple[str, ...]
    identifier_prefix: str | None = None


DEFAULT_NAMESPACES = (
    NamespaceDeclaration("instance", "AWS/EC2", "InstanceId", INSTANCE_METRICS, "i-"),
    NamespaceDeclaration("volume", "AWS/EBS", "VolumeId", VOLUME_METRICS, "vol-"),
    NamespaceDeclaration("elb", "AWS/ELB", "LoadBalancerName", ELB_METRICS),
)


def _unique(keys: Iterable[str], what: str) -> list[str]:
    seen: list[str] = []
    for key in keys:
        if not key:
            raise ValueError(f"{what} must not be empty")
        if key in seen:
            raise ValueError(f"Duplicate {what}: {key!r}")
        seen.append(key)
    return seen


def dimension_tree(
    declaration: NamespaceDeclaration,
    statistics: Iterable[Statistic] = Statistic,
) -> SchemaNode:
    """Build the subtree for a single namespace declaration."""
    statistic_nodes = {
        statistic.value: SchemaNode(attributes={"statistic": statistic})
        for statistic in statistics
    }
    metric_nodes = {
        metric: SchemaNode(attributes={"metric_name": metric}, children=statistic_nodes)
        for metric in _unique(declaration.metrics, "metric name")
    }
    dimension = SchemaNode(
        attributes={
            "namespace": declaration.namespace,
            "dimension_name": declaration.dimension_name,
            "identifier_prefix": declaration.identifier_prefix,
        },
        children=metric_nodes,
    )
    return SchemaNode(attributes={"key": declaration.key}, wildcard=dimension)


def build_schema(
    namespaces: Iterable[NamespaceDeclaration] = DEFAULT_NAMESPACES,
    statistics: Iterable[Statistic] = Statistic,
) -> SchemaNode:
    """Build the schema root from namespace declarations.

    Args:
        namespaces: Namespaces to expose, in lookup order.
        statistics: Statistics offered under every metric.

    Returns:
        Root SchemaNode with one literal child per namespace key.

    Raises:
        ValueError: If a namespace key or metric name is empty or repeated.
    """
    declarations = list(namespaces)
    statistics = tuple(statistics)
    _unique((d.key for d in declarations), "namespace key")
    return SchemaNode(
        children={d.key: dimension_tree(d, statistics) for d in declarations}
    )
