"""Kubernetes workload security rules evaluated against the pod spec."""

from collections.abc import Mapping
from typing import Any

from k8s_danger_scan.k8s.base import (
    K8sResource,
    as_bool,
    as_int,
    as_mapping,
    as_sequence,
    as_str,
    get_containers,
    is_true,
)
from k8s_danger_scan.k8s.rules.base import PodSpecRule
from k8s_danger_scan.models import Finding, Severity

DOCKER_SOCKET_PATH = "/var/run/docker.sock"


def _volumes(pod_spec: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    return [v for v in as_sequence(pod_spec.get("volumes")) if isinstance(v, Mapping)]


class PrivilegedContainerRule(PodSpecRule):
    """Check that containers don't run in privileged mode."""

    RULE_ID = "privileged-container"
    SEVERITY = Severity.HIGH
    REASON = "Container runs in privileged mode"
    IMPACT = "Full host access if container is compromised"
    FIX = "Remove privileged flag or set to false"

    def check_pod_spec(self, resource: K8sResource, pod_spec: Mapping[str, Any]) -> list[Finding]:
        for container in get_containers(pod_spec):
            security = as_mapping(container.get("securityContext"))
            if is_true(security.get("privileged")):
                return [self._create_finding(resource)]
        return []


class HostPathVolumeRule(PodSpecRule):
    """Check that pods don't mount hostPath volumes."""

    RULE_ID = "hostpath-volume"
    SEVERITY = Severity.HIGH
    REASON = "Uses hostPath volume mount"
    IMPACT = "Direct filesystem access enables container escape"
    FIX = "Use PersistentVolumes or emptyDir instead"

    def check_pod_spec(self, resource: K8sResource, pod_spec: Mapping[str, Any]) -> list[Finding]:
        for volume in _volumes(pod_spec):
            if "hostPath" in volume:
                return [self._create_finding(resource)]
        return []


class DockerSocketMountRule(PodSpecRule):
    """Check that the Docker socket is not mounted from the host."""

    RULE_ID = "docker-socket-mount"
    SEVERITY = Severity.HIGH
    REASON = "Mounts Docker socket from host"
    IMPACT = "Grants root-equivalent access to the node"
    FIX = "Remove Docker socket mount"

    def check_pod_spec(self, resource: K8sResource, pod_spec: Mapping[str, Any]) -> list[Finding]:
        for volume in _volumes(pod_spec):
            path = as_str(as_mapping(volume.get("hostPath")).get("path"))
            if path is not None and DOCKER_SOCKET_PATH in path:
                return [self._create_finding(resource)]
        return []


class RunsAsRootRule(PodSpecRule):
    """Check that containers don't run as root.

    Container-level ``runAsNonRoot`` and ``runAsUser`` override the pod-level
    values field by field. A container is flagged unless ``runAsNonRoot`` is
    effectively true or ``runAsUser`` is effectively a non-zero UID. A missing
    ``runAsUser`` counts as root.
    """

    RULE_ID = "runs-as-root"
    SEVERITY = Severity.MEDIUM
    REASON = "Container runs as root user (UID 0)"
    IMPACT = "Increases blast radius of container compromise"
    FIX = "Set runAsNonRoot: true or runAsUser to non-zero UID"

    def check_pod_spec(self, resource: K8sResource, pod_spec: Mapping[str, Any]) -> list[Finding]:
        pod_security = as_mapping(pod_spec.get("securityContext"))
        pod_non_root = as_bool(pod_security.get("runAsNonRoot"))
        pod_user = as_int(pod_security.get("runAsUser"))

        for container in get_containers(pod_spec):
            security = as_mapping(container.get("securityContext"))

            run_as_non_root = as_bool(security.get("runAsNonRoot"))
            if run_as_non_root is None:
                run_as_non_root = pod_non_root

            run_as_user = as_int(security.get("runAsUser"))
            if run_as_user is None:
                run_as_user = pod_user

            if not run_as_non_root and (run_as_user is None or run_as_user == 0):
                return [self._create_finding(resource)]
        return []


class PrivilegeEscalationRule(PodSpecRule):
    """Check that containers don't allow privilege escalation."""

    RULE_ID = "privilege-escalation-allowed"
    SEVERITY = Severity.HIGH
    REASON = "Allows privilege escalation within container"
    IMPACT = "Enables container escape via kernel exploits"
    FIX = "Set allowPrivilegeEscalation: false"

    def check_pod_spec(self, resource: K8sResource, pod_spec: Mapping[str, Any]) -> list[Finding]:
        for container in get_containers(pod_spec):
            security = as_mapping(container.get("securityContext"))
            if is_true(security.get("allowPrivilegeEscalation")):
                return [self._create_finding(resource)]
        return []


class LatestImageTagRule(PodSpecRule):
    """Check that container images are pinned."""

    RULE_ID = "latest-image-tag"
    SEVERITY = Severity.MEDIUM
    REASON = "Uses :latest or untagged image"
    IMPACT = "Non-reproducible deployments and potential supply chain risk"
    FIX = "Pin to specific image digest or semantic version"

    def check_pod_spec(self, resource: K8sResource, pod_spec: Mapping[str, Any]) -> list[Finding]:
        for container in get_containers(pod_spec):
            image = as_str(container.get("image"))
            if image is None:
                continue
            if image.endswith(":latest") or ":" not in image:
                return [self._create_finding(resource)]
        return []


class HostNetworkRule(PodSpecRule):
    """Check that pods don't use the host network namespace."""

    RULE_ID = "host-network"
    SEVERITY = Severity.HIGH
    REASON = "Uses host network namespace"
    IMPACT = "Bypasses network policies and accesses host network"
    FIX = "Remove hostNetwork or set to false"

    def check_pod_spec(self, resource: K8sResource, pod_spec: Mapping[str, Any]) -> list[Finding]:
        if is_true(pod_spec.get("hostNetwork")):
            return [self._create_finding(resource)]
        return []


class HostPIDIPCRule(PodSpecRule):
    """Check that pods don't share the host PID or IPC namespace.

    hostPID is checked first; only one finding is reported when both are set.
    """

    RULE_ID = "host-pid-ipc"
    SEVERITY = Severity.HIGH

    def check_pod_spec(self, resource: K8sResource, pod_spec: Mapping[str, Any]) -> list[Finding]:
        if is_true(pod_spec.get("hostPID")):
            return [
                self._create_finding(
                    resource,
                    reason="Uses host PID namespace",
                    impact="Can inspect and kill processes on the host",
                    fix="Remove hostPID or set to false",
                )
            ]

        if is_true(pod_spec.get("hostIPC")):
            return [
                self._create_finding(
                    resource,
                    reason="Uses host IPC namespace",
                    impact="Can access shared memory and semaphores on host",
                    fix="Remove hostIPC or set to false",
                )
            ]

        return []
