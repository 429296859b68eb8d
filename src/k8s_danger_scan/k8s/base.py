"""Normalized Kubernetes resource model and safe accessors for manifest trees."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional

SUPPORTED_KINDS = frozenset(
    {
        "Pod",
        "Deployment",
        "StatefulSet",
        "DaemonSet",
        "Job",
        "CronJob",
        "Service",
        "Role",
        "ClusterRole",
        "RoleBinding",
        "ClusterRoleBinding",
    }
)

ROLE_KINDS = frozenset({"Role", "ClusterRole"})
BINDING_KINDS = frozenset({"RoleBinding", "ClusterRoleBinding"})

# Location of the pod spec below the resource spec, per kind.
POD_SPEC_PATHS: dict[str, tuple[str, ...]] = {
    "Pod": (),
    "Deployment": ("template", "spec"),
    "StatefulSet": ("template", "spec"),
    "DaemonSet": ("template", "spec"),
    "Job": ("template", "spec"),
    "CronJob": ("jobTemplate", "spec", "template", "spec"),
}

_EMPTY: Mapping[str, Any] = MappingProxyType({})


def freeze(value: Any) -> Any:
    """Return a read-only deep copy of a decoded YAML value."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def as_mapping(value: Any) -> Mapping[str, Any]:
    """Return value if it is a mapping, otherwise an empty mapping."""
    if isinstance(value, Mapping):
        return value
    return _EMPTY


def as_sequence(value: Any) -> tuple:
    """Return value as a tuple if it is a list or tuple, otherwise an empty tuple."""
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return ()


def as_str(value: Any) -> Optional[str]:
    """Return value if it is a string, otherwise None."""
    return value if isinstance(value, str) else None


def as_int(value: Any) -> Optional[int]:
    """Return value if it is an integer (booleans excluded), otherwise None."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def as_bool(value: Any) -> Optional[bool]:
    """Return value if it is a boolean, otherwise None."""
    return value if isinstance(value, bool) else None


def is_true(value: Any) -> bool:
    """Return True only for the boolean True."""
    return value is True


def get_path(tree: Any, *keys: str, default: Any = None) -> Any:
    """Get a nested value by key path.

    Args:
        tree: Mapping to traverse.
        *keys: Path of keys to traverse.
        default: Value returned when a key is missing or an intermediate
            value is not a mapping.

    Returns:
        The nested value or default.
    """
    current = tree
    for key in keys:
        if isinstance(current, Mapping) and key in current:
            current = current[key]
        else:
            return default
    return current


@dataclass(frozen=True)
class Metadata:
    """Object metadata of a resource."""

    name: str = ""
    namespace: str = ""
    labels: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    annotations: Mapping[str, str] = field(default_factory=lambda: _EMPTY)


@dataclass(frozen=True)
class PolicyRule:
    """A single rule entry of a Role or ClusterRole."""

    api_groups: tuple[str, ...] = ()
    resources: tuple[str, ...] = ()
    verbs: tuple[str, ...] = ()


@dataclass(frozen=True)
class RoleRef:
    """Role referenced by a RoleBinding or ClusterRoleBinding."""

    api_group: str = ""
    kind: str = ""
    name: str = ""


@dataclass(frozen=True)
class Subject:
    """Subject of a RoleBinding or ClusterRoleBinding."""

    kind: str = ""
    name: str = ""
    namespace: str = ""


@dataclass(frozen=True)
class K8sResource:
    """Represents one decoded Kubernetes manifest document."""

    api_version: str
    kind: str
    metadata: Metadata = field(default_factory=Metadata)
    spec: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    rules: tuple[PolicyRule, ...] = ()
    role_ref: Optional[RoleRef] = None
    subjects: tuple[Subject, ...] = ()
    raw: Mapping[str, Any] = field(default_factory=lambda: _EMPTY, repr=False, compare=False)
    file_path: str = field(default="<string>", compare=False)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    @property
    def is_supported(self) -> bool:
        """Whether rules are evaluated against this kind."""
        return self.kind in SUPPORTED_KINDS

    def get_spec(self, *keys: str, default: Any = None) -> Any:
        """Get nested spec value by key path.

        Args:
            *keys: Path of keys to traverse.
            default: Default value if not found.

        Returns:
            Spec value or default.
        """
        return get_path(self.spec, *keys, default=default)


def is_supported_kind(kind: str) -> bool:
    """Check if rules are evaluated for the given kind."""
    return kind in SUPPORTED_KINDS


def get_pod_spec(resource: K8sResource) -> Optional[Mapping[str, Any]]:
    """Extract the pod spec from a workload resource.

    Returns:
        The pod spec mapping, or None when the kind carries no pod template
        or the template path is missing.
    """
    path = POD_SPEC_PATHS.get(resource.kind)
    if path is None:
        return None

    pod_spec = get_path(resource.spec, *path)
    if not isinstance(pod_spec, Mapping):
        return None
    return pod_spec


def get_containers(pod_spec: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    """Return the container entries of a pod spec that are mappings."""
    return [c for c in as_sequence(pod_spec.get("containers")) if isinstance(c, Mapping)]
