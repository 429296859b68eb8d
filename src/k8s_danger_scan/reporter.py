"""Report generators for scan results."""

import json
from abc import ABC, abstractmethod

from k8s_danger_scan.models import OutputFormat, ScanResult

NO_FINDINGS_MESSAGE = "No security issues found."


class ReportGenerator(ABC):
    """Abstract base class for report generators."""

    @abstractmethod
    def generate(self, result: ScanResult) -> str:
        """Generate a report from scan results.

        Args:
            result: The scan results to report.

        Returns:
            Formatted report as a string, ending with a newline.
        """


class JSONReporter(ReportGenerator):
    """Generate JSON format reports."""

    def __init__(self, indent: int = 2) -> None:
        """Initialize JSON reporter.

        Args:
            indent: JSON indentation level.
        """
        self.indent = indent

    def generate(self, result: ScanResult) -> str:
        """Generate JSON report with ``summary`` and ``findings`` keys."""
        return json.dumps(result.to_dict(), indent=self.indent) + "\n"


class HumanReporter(ReportGenerator):
    """Generate plain-text reports, one block per finding plus a summary."""

    def generate(self, result: ScanResult) -> str:
        if not result.findings:
            return NO_FINDINGS_MESSAGE + "\n"

        lines: list[str] = []
        for i, finding in enumerate(result.findings):
            if i > 0:
                lines.append("")

            lines.append(f"{finding.severity.value} RISK")
            lines.append(f"Resource: {finding.kind}/{finding.name}")
            if finding.namespace:
                lines.append(f"Namespace: {finding.namespace}")
            lines.append(f"Rule: {finding.rule_id}")
            lines.append(f"Reason: {finding.reason}")
            lines.append(f"Impact: {finding.impact}")
            lines.append(f"Fix: {finding.fix}")

        summary = result.summary
        lines.append("")
        lines.append("SUMMARY")
        lines.append(f"High risk: {summary.high}")
        lines.append(f"Medium risk: {summary.medium}")
        lines.append(f"Resources affected: {summary.resources_affected}")
        if summary.namespaces_affected > 0:
            lines.append(f"Namespaces affected: {summary.namespaces_affected}")

        return "\n".join(lines) + "\n"


def create_reporter(format: OutputFormat | str) -> ReportGenerator:
    """Create a reporter for the specified format.

    Args:
        format: Output format ('human' or 'json').

    Returns:
        Appropriate ReportGenerator instance.

    Raises:
        ValueError: If format is not supported.
    """
    if isinstance(format, str):
        try:
            format = OutputFormat(format.lower())
        except ValueError:
            raise ValueError(f"Unsupported format: {format}. Use 'human' or 'json'.") from None

    if format == OutputFormat.JSON:
        return JSONReporter()
    return HumanReporter()
