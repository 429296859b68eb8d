"""Scanner that applies the security rules to Kubernetes resources."""

import logging
from collections.abc import Iterable, Sequence
from os import PathLike
from typing import Optional

from k8s_danger_scan.config import ScanConfig
from k8s_danger_scan.exceptions import NoResourcesError
from k8s_danger_scan.k8s.base import K8sResource
from k8s_danger_scan.k8s.manifest import ManifestParser
from k8s_danger_scan.k8s.rules.registry import RuleRegistry
from k8s_danger_scan.loader import ManifestLoader
from k8s_danger_scan.models import Finding, ScanResult, Severity

logger = logging.getLogger(__name__)


def filter_high_only(findings: Iterable[Finding]) -> list[Finding]:
    """Keep only HIGH severity findings, preserving order."""
    return [f for f in findings if f.severity == Severity.HIGH]


class Scanner:
    """Evaluate rules against resources and compare scans."""

    def __init__(
        self,
        config: Optional[ScanConfig] = None,
        registry: Optional[RuleRegistry] = None,
    ) -> None:
        """Initialize the scanner.

        Args:
            config: Scan options. Defaults to HIGH-only reporting.
            registry: Rules to apply. Defaults to the built-in rules.
        """
        self.config = config or ScanConfig()
        self._registry = registry or RuleRegistry()

    def scan(self, resources: Sequence[K8sResource]) -> ScanResult:
        """Scan resources and return findings.

        Findings are ordered by resource input order, then rule order.
        Unsupported kinds are skipped. Unless ``include_medium`` is set,
        only HIGH findings are kept.
        """
        findings: list[Finding] = []
        rules = self._registry.get_all()
        scanned = 0

        for resource in resources:
            if not resource.is_supported:
                logger.debug("Skipping unsupported kind %r (%s)", resource.kind, resource.name)
                continue

            scanned += 1
            for rule in rules:
                findings.extend(rule.evaluate(resource))

        if not self.config.include_medium:
            findings = filter_high_only(findings)

        logger.debug("Scanned %d resource(s), %d finding(s)", scanned, len(findings))
        return ScanResult(findings=findings, resources_scanned=scanned)

    def diff(
        self,
        old_resources: Sequence[K8sResource],
        new_resources: Sequence[K8sResource],
    ) -> ScanResult:
        """Return only the findings introduced by the new resources.

        Both sides are scanned with the same options, then new findings whose
        identity key also appears in the old scan are dropped.
        """
        old_result = self.scan(old_resources)
        new_result = self.scan(new_resources)

        old_keys = {f.key for f in old_result.findings}
        introduced = [f for f in new_result.findings if f.key not in old_keys]

        logger.debug(
            "Diff: %d old finding(s), %d new finding(s), %d introduced",
            len(old_result.findings),
            len(new_result.findings),
            len(introduced),
        )
        return ScanResult(findings=introduced, resources_scanned=new_result.resources_scanned)


def _require_supported(resources: Iterable[K8sResource]) -> None:
    if not any(resource.is_supported for resource in resources):
        raise NoResourcesError("no Kubernetes resources found in specified paths")


def scan_paths(
    paths: Iterable[str | PathLike[str]],
    include_medium: bool = False,
    config: Optional[ScanConfig] = None,
) -> ScanResult:
    """Scan manifest files or directories.

    Args:
        paths: Files or directories to scan.
        include_medium: Report MEDIUM findings too.
        config: Full scan options; overrides ``include_medium`` when given.

    Returns:
        ScanResult containing the findings.

    Raises:
        ManifestLoadError: If an explicit path is missing or malformed.
        NoResourcesError: If no supported resources were found.
    """
    config = config or ScanConfig(include_medium=include_medium)
    resources = ManifestLoader().load_paths(paths)
    _require_supported(resources)
    return Scanner(config).scan(resources)


def scan_manifest(
    content: str,
    include_medium: bool = False,
    file_path: str = "<string>",
) -> ScanResult:
    """Scan manifest text directly.

    Args:
        content: One or more YAML documents.
        include_medium: Report MEDIUM findings too.
        file_path: Name used in error messages.

    Returns:
        ScanResult containing the findings.
    """
    resources = ManifestParser().parse(content, file_path)
    _require_supported(resources)
    return Scanner(ScanConfig(include_medium=include_medium)).scan(resources)


def diff_paths(
    old_path: str | PathLike[str],
    new_path: str | PathLike[str],
    include_medium: bool = False,
    config: Optional[ScanConfig] = None,
) -> ScanResult:
    """Compare two manifest sets and return newly introduced findings.

    Raises:
        ManifestLoadError: If either side cannot be loaded.
        NoResourcesError: If neither side holds a supported resource.
    """
    config = config or ScanConfig(include_medium=include_medium)
    loader = ManifestLoader()
    old_resources = loader.load_paths([old_path])
    new_resources = loader.load_paths([new_path])
    _require_supported([*old_resources, *new_resources])
    return Scanner(config).diff(old_resources, new_resources)
