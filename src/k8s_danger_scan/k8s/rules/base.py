"""Base classes for Kubernetes security rules."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Optional

from k8s_danger_scan.k8s.base import K8sResource, get_pod_spec
from k8s_danger_scan.models import Finding, Severity


class Rule(ABC):
    """Abstract base class for security rules.

    A rule is a pure check of a single resource. It never raises for a
    resource that lacks the structure it looks at; it simply reports nothing.
    Rules that scan a list stop at the first violating element, so each rule
    reports at most one finding per resource.
    """

    # Rule metadata - override in subclasses
    RULE_ID: str = "unknown"
    SEVERITY: Severity = Severity.HIGH
    REASON: str = ""
    IMPACT: str = ""
    FIX: str = ""

    # Resource kinds this rule applies to
    RESOURCE_KINDS: frozenset[str] = frozenset()

    def applies_to(self, resource: K8sResource) -> bool:
        """Check if this rule should be evaluated for the given resource."""
        return resource.kind in self.RESOURCE_KINDS

    def evaluate(self, resource: K8sResource) -> list[Finding]:
        """Evaluate the rule against a resource.

        Args:
            resource: The resource to evaluate.

        Returns:
            Zero or more findings, in detection order.
        """
        if not self.applies_to(resource):
            return []
        return self.check(resource)

    @abstractmethod
    def check(self, resource: K8sResource) -> list[Finding]:
        """Run the rule against a resource it applies to."""

    def _create_finding(
        self,
        resource: K8sResource,
        reason: Optional[str] = None,
        impact: Optional[str] = None,
        fix: Optional[str] = None,
    ) -> Finding:
        """Create a Finding for this rule, copying identity from the resource."""
        return Finding(
            rule_id=self.RULE_ID,
            severity=self.SEVERITY,
            kind=resource.kind,
            name=resource.name,
            namespace=resource.namespace,
            reason=reason or self.REASON,
            impact=impact or self.IMPACT,
            fix=fix or self.FIX,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.RULE_ID!r})"


class PodSpecRule(Rule):
    """Rule evaluated against the pod spec of a workload resource."""

    RESOURCE_KINDS = frozenset(
        {"Pod", "Deployment", "StatefulSet", "DaemonSet", "Job", "CronJob"}
    )

    def check(self, resource: K8sResource) -> list[Finding]:
        pod_spec = get_pod_spec(resource)
        if pod_spec is None:
            return []
        return self.check_pod_spec(resource, pod_spec)

    @abstractmethod
    def check_pod_spec(
        self, resource: K8sResource, pod_spec: Mapping[str, Any]
    ) -> list[Finding]:
        """Run the rule against the extracted pod spec."""
