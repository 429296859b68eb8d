"""Conversion of decoded YAML documents into :class:`K8sResource` instances."""

from collections.abc import Mapping
from typing import Any, Optional

from k8s_danger_scan.exceptions import ManifestParseError
from k8s_danger_scan.k8s.base import (
    BINDING_KINDS,
    ROLE_KINDS,
    K8sResource,
    Metadata,
    PolicyRule,
    RoleRef,
    Subject,
    freeze,
)


def _scalar_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list, tuple)):
        return ""
    return str(value)


def _string_map(value: Any) -> Mapping[str, str]:
    if not isinstance(value, Mapping):
        return freeze({})
    return freeze({str(k): _scalar_str(v) for k, v in value.items()})


def _string_list(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(_scalar_str(item) for item in value if not isinstance(item, (Mapping, list)))


class ResourceNormalizer:
    """Normalize decoded manifest documents into resources."""

    def normalize(self, document: Any, file_path: str = "<string>") -> K8sResource:
        """Return the normalized resource for a decoded document.

        Args:
            document: A decoded YAML document.
            file_path: Source path used in error messages.

        Raises:
            ManifestParseError: If the document is not a mapping or one of the
                well-known fields has the wrong shape.
        """
        if not isinstance(document, Mapping):
            raise ManifestParseError(
                f"document must be a mapping, got {type(document).__name__}", file_path
            )

        kind = _scalar_str(document.get("kind"))
        metadata = self._metadata(self._field(document, "metadata", Mapping, file_path))
        spec = self._field(document, "spec", Mapping, file_path)

        rules: tuple[PolicyRule, ...] = ()
        role_ref: Optional[RoleRef] = None
        subjects: tuple[Subject, ...] = ()

        if kind in ROLE_KINDS:
            rules = tuple(
                self._policy_rule(entry)
                for entry in self._field(document, "rules", list, file_path) or []
                if isinstance(entry, Mapping)
            )
        elif kind in BINDING_KINDS:
            ref = self._field(document, "roleRef", Mapping, file_path)
            if ref is not None:
                role_ref = RoleRef(
                    api_group=_scalar_str(ref.get("apiGroup")),
                    kind=_scalar_str(ref.get("kind")),
                    name=_scalar_str(ref.get("name")),
                )
            subjects = tuple(
                Subject(
                    kind=_scalar_str(entry.get("kind")),
                    name=_scalar_str(entry.get("name")),
                    namespace=_scalar_str(entry.get("namespace")),
                )
                for entry in self._field(document, "subjects", list, file_path) or []
                if isinstance(entry, Mapping)
            )

        return K8sResource(
            api_version=_scalar_str(document.get("apiVersion")),
            kind=kind,
            metadata=metadata,
            spec=freeze(spec or {}),
            rules=rules,
            role_ref=role_ref,
            subjects=subjects,
            raw=freeze(document),
            file_path=file_path,
        )

    # ------------------------------------------------------------------
    def _field(self, document: Mapping, key: str, expected: type, file_path: str) -> Any:
        value = document.get(key)
        if value is None:
            return None
        if not isinstance(value, expected):
            shape = "a mapping" if expected is Mapping else "a list"
            raise ManifestParseError(f"field '{key}' must be {shape}", file_path)
        return value

    def _metadata(self, data: Optional[Mapping]) -> Metadata:
        if data is None:
            return Metadata()
        return Metadata(
            name=_scalar_str(data.get("name")),
            namespace=_scalar_str(data.get("namespace")),
            labels=_string_map(data.get("labels")),
            annotations=_string_map(data.get("annotations")),
        )

    def _policy_rule(self, entry: Mapping) -> PolicyRule:
        return PolicyRule(
            api_groups=_string_list(entry.get("apiGroups")),
            resources=_string_list(entry.get("resources")),
            verbs=_string_list(entry.get("verbs")),
        )
