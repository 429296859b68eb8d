"""Summary counts and exit codes derived from findings."""

from collections.abc import Iterable

from k8s_danger_scan.models import ExitCode, Finding, Severity, Summary


def summarize(findings: Iterable[Finding]) -> Summary:
    """Calculate summary statistics for findings.

    Resources are counted by distinct (kind, name); namespaces by distinct
    non-empty namespace.
    """
    high = 0
    medium = 0
    resources: set[tuple[str, str]] = set()
    namespaces: set[str] = set()

    for finding in findings:
        if finding.severity == Severity.HIGH:
            high += 1
        elif finding.severity == Severity.MEDIUM:
            medium += 1

        resources.add((finding.kind, finding.name))
        if finding.namespace:
            namespaces.add(finding.namespace)

    return Summary(
        high=high,
        medium=medium,
        resources_affected=len(resources),
        namespaces_affected=len(namespaces),
    )


def exit_code_for(findings: Iterable[Finding]) -> ExitCode:
    """Determine the exit code for findings: HIGH beats MEDIUM beats clean."""
    severities = {finding.severity for finding in findings}

    if Severity.HIGH in severities:
        return ExitCode.HIGH
    if Severity.MEDIUM in severities:
        return ExitCode.MEDIUM
    return ExitCode.OK
