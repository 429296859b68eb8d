"""Kubernetes manifest parsing and resource model."""

from k8s_danger_scan.k8s.base import K8sResource, get_pod_spec, is_supported_kind
from k8s_danger_scan.k8s.manifest import ManifestParser
from k8s_danger_scan.k8s.normalizer import ResourceNormalizer

__all__ = [
    "K8sResource",
    "ManifestParser",
    "ResourceNormalizer",
    "get_pod_spec",
    "is_supported_kind",
]
