"""Data models for scan findings and results."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum


class Severity(Enum):
    """Finding severity levels."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"


class OutputFormat(Enum):
    """Report output formats."""

    HUMAN = "human"
    JSON = "json"


class ExitCode(IntEnum):
    """Process exit codes."""

    OK = 0  # No findings
    MEDIUM = 1  # Medium risk only
    HIGH = 2  # At least one high risk
    ERROR = 3  # Error occurred


@dataclass(frozen=True)
class Finding:
    """Represents a single rule violation on a Kubernetes resource."""

    rule_id: str
    severity: Severity
    kind: str
    name: str
    namespace: str
    reason: str
    impact: str
    fix: str

    @property
    def key(self) -> tuple[str, str, str, str]:
        """Identity used when comparing findings across scans."""
        return (self.rule_id, self.kind, self.name, self.namespace)

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "rule_id": self.rule_id,
            "severity": self.severity.value,
            "kind": self.kind,
            "name": self.name,
            "namespace": self.namespace,
            "reason": self.reason,
            "impact": self.impact,
            "fix": self.fix,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Finding":
        """Create from dictionary."""
        return cls(
            rule_id=data["rule_id"],
            severity=Severity(data["severity"]),
            kind=data["kind"],
            name=data["name"],
            namespace=data.get("namespace", ""),
            reason=data["reason"],
            impact=data["impact"],
            fix=data["fix"],
        )


@dataclass(frozen=True)
class Summary:
    """Aggregated counts derived from a list of findings."""

    high: int = 0
    medium: int = 0
    resources_affected: int = 0
    namespaces_affected: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "high": self.high,
            "medium": self.medium,
            "resources_affected": self.resources_affected,
            "namespaces_affected": self.namespaces_affected,
        }


@dataclass
class ScanResult:
    """Ordered findings from a scan or diff run."""

    findings: list[Finding] = field(default_factory=list)
    resources_scanned: int = 0

    @property
    def total_issues(self) -> int:
        """Total number of findings."""
        return len(self.findings)

    @property
    def summary(self) -> Summary:
        """Summary counts for the findings."""
        from k8s_danger_scan.summary import summarize

        return summarize(self.findings)

    @property
    def exit_code(self) -> ExitCode:
        """Exit code implied by the findings."""
        from k8s_danger_scan.summary import exit_code_for

        return exit_code_for(self.findings)

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "summary": self.summary.to_dict(),
            "findings": [f.to_dict() for f in self.findings],
        }
