"""Kubernetes Service exposure rules."""

from k8s_danger_scan.k8s.base import K8sResource, as_str
from k8s_danger_scan.k8s.rules.base import Rule
from k8s_danger_scan.models import Finding, Severity

# Namespaces where an internet-facing LoadBalancer is always reported.
SENSITIVE_NAMESPACES = frozenset({"kube-system", "prod", "production"})

NODEPORT_JUSTIFIED_ANNOTATION = "danger-scan/nodeport-justified"


class PublicLoadBalancerRule(Rule):
    """Check for LoadBalancer services in sensitive namespaces."""

    RULE_ID = "public-loadbalancer"
    SEVERITY = Severity.HIGH
    IMPACT = "Exposes internal services directly to the internet"
    FIX = "Use ClusterIP with Ingress, or add explicit justification"
    RESOURCE_KINDS = frozenset({"Service"})

    def check(self, resource: K8sResource) -> list[Finding]:
        if resource.namespace not in SENSITIVE_NAMESPACES:
            return []

        if as_str(resource.get_spec("type")) == "LoadBalancer":
            return [
                self._create_finding(
                    resource,
                    reason=f"LoadBalancer service in {resource.namespace} namespace",
                )
            ]
        return []


class NodePortServiceRule(Rule):
    """Check for NodePort services without a justification annotation."""

    RULE_ID = "nodeport-service"
    SEVERITY = Severity.MEDIUM
    REASON = "NodePort service without justification annotation"
    IMPACT = "Bypasses ingress controls and exposes port on all nodes"
    FIX = f"Use ClusterIP/LoadBalancer or add annotation: {NODEPORT_JUSTIFIED_ANNOTATION}"
    RESOURCE_KINDS = frozenset({"Service"})

    def check(self, resource: K8sResource) -> list[Finding]:
        if as_str(resource.get_spec("type")) != "NodePort":
            return []

        # Presence is enough, whatever the value.
        if NODEPORT_JUSTIFIED_ANNOTATION in resource.metadata.annotations:
            return []

        return [self._create_finding(resource)]
