"""Kubernetes security rules."""

from k8s_danger_scan.k8s.rules.base import PodSpecRule, Rule
from k8s_danger_scan.k8s.rules.rbac import DefaultServiceAccountBindingRule, WildcardRBACRule
from k8s_danger_scan.k8s.rules.registry import DEFAULT_RULES, RuleRegistry, get_registry
from k8s_danger_scan.k8s.rules.service import NodePortServiceRule, PublicLoadBalancerRule
from k8s_danger_scan.k8s.rules.workload import (
    DockerSocketMountRule,
    HostNetworkRule,
    HostPathVolumeRule,
    HostPIDIPCRule,
    LatestImageTagRule,
    PrivilegedContainerRule,
    PrivilegeEscalationRule,
    RunsAsRootRule,
)

__all__ = [
    "Rule",
    "PodSpecRule",
    "RuleRegistry",
    "DEFAULT_RULES",
    "get_registry",
    # Workload rules
    "PrivilegedContainerRule",
    "HostPathVolumeRule",
    "DockerSocketMountRule",
    "RunsAsRootRule",
    "PrivilegeEscalationRule",
    "LatestImageTagRule",
    "HostNetworkRule",
    "HostPIDIPCRule",
    # RBAC rules
    "WildcardRBACRule",
    "DefaultServiceAccountBindingRule",
    # Service rules
    "PublicLoadBalancerRule",
    "NodePortServiceRule",
]
