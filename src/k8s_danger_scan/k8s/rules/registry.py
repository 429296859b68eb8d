"""Ordered set of built-in security rules."""

from collections.abc import Iterable
from typing import Optional

from k8s_danger_scan.k8s.rules.base import Rule
from k8s_danger_scan.k8s.rules.rbac import DefaultServiceAccountBindingRule, WildcardRBACRule
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

# Evaluation order is also the default output order.
DEFAULT_RULES: tuple[type[Rule], ...] = (
    PrivilegedContainerRule,
    HostPathVolumeRule,
    DockerSocketMountRule,
    RunsAsRootRule,
    PrivilegeEscalationRule,
    WildcardRBACRule,
    DefaultServiceAccountBindingRule,
    PublicLoadBalancerRule,
    NodePortServiceRule,
    LatestImageTagRule,
    HostNetworkRule,
    HostPIDIPCRule,
)


class RuleRegistry:
    """Read-only, ordered collection of rule instances."""

    def __init__(self, rules: Optional[Iterable[Rule]] = None) -> None:
        """Initialize the registry.

        Args:
            rules: Rule instances in evaluation order. Defaults to the
                built-in rules.
        """
        if rules is None:
            rules = [rule_class() for rule_class in DEFAULT_RULES]
        self._rules: tuple[Rule, ...] = tuple(rules)

        ids = [rule.RULE_ID for rule in self._rules]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate rule IDs in registry: {ids}")

    def get(self, rule_id: str) -> Optional[Rule]:
        """Get a rule by ID."""
        for rule in self._rules:
            if rule.RULE_ID == rule_id:
                return rule
        return None

    def get_all(self) -> list[Rule]:
        """Get all rules in evaluation order."""
        return list(self._rules)

    @property
    def rule_ids(self) -> list[str]:
        return [rule.RULE_ID for rule in self._rules]

    def __len__(self) -> int:
        return len(self._rules)


def get_registry() -> RuleRegistry:
    """Return a registry holding the built-in rules."""
    return RuleRegistry()
