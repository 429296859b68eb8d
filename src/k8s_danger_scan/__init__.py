"""k8s-danger-scan - Detect catastrophic Kubernetes misconfigurations in manifests."""

__version__ = "1.0.0"

from k8s_danger_scan.scanner import Scanner, diff_paths, scan_manifest, scan_paths
from k8s_danger_scan.models import ExitCode, Finding, ScanResult, Severity, Summary

__all__ = [
    "__version__",
    "Scanner",
    "scan_paths",
    "scan_manifest",
    "diff_paths",
    "ExitCode",
    "Finding",
    "ScanResult",
    "Severity",
    "Summary",
]
