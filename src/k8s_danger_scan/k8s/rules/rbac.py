"""Kubernetes RBAC security rules."""

from k8s_danger_scan.k8s.base import BINDING_KINDS, ROLE_KINDS, K8sResource
from k8s_danger_scan.k8s.rules.base import Rule
from k8s_danger_scan.models import Finding, Severity


class WildcardRBACRule(Rule):
    """Check that roles don't grant every verb on every resource.

    Only a rule entry with ``*`` in both verbs and resources is flagged.
    """

    RULE_ID = "wildcard-rbac"
    SEVERITY = Severity.HIGH
    REASON = "Grants wildcard permissions (verbs: *, resources: *)"
    IMPACT = "Complete cluster control for any principal with this role"
    FIX = "Specify explicit verbs and resources"
    RESOURCE_KINDS = ROLE_KINDS

    def check(self, resource: K8sResource) -> list[Finding]:
        for rule in resource.rules:
            if "*" in rule.verbs and "*" in rule.resources:
                return [self._create_finding(resource)]
        return []


class DefaultServiceAccountBindingRule(Rule):
    """Check that bindings don't grant permissions to the default service account."""

    RULE_ID = "clusterrolebinding-default-sa"
    SEVERITY = Severity.HIGH
    REASON = "Binds permissions to default service account"
    IMPACT = "All pods without explicit SA inherit these permissions"
    FIX = "Create and use a dedicated ServiceAccount"
    RESOURCE_KINDS = BINDING_KINDS

    def check(self, resource: K8sResource) -> list[Finding]:
        for subject in resource.subjects:
            if subject.kind == "ServiceAccount" and subject.name == "default":
                return [self._create_finding(resource)]
        return []
