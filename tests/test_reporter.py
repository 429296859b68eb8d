"""Tests for report generators."""

import json

import pytest

from k8s_danger_scan.models import Finding, OutputFormat, ScanResult, Severity
from k8s_danger_scan.reporter import (
    NO_FINDINGS_MESSAGE,
    HumanReporter,
    JSONReporter,
    create_reporter,
)


@pytest.fixture
def sample_result():
    """Create a sample scan result with a namespaced and a cluster-scoped finding."""
    return ScanResult(
        findings=[
            Finding(
                rule_id="privileged-container",
                severity=Severity.HIGH,
                kind="Deployment",
                name="web",
                namespace="prod",
                reason="Container runs in privileged mode",
                impact="Full host access if container is compromised",
                fix="Remove privileged flag or set to false",
            ),
            Finding(
                rule_id="wildcard-rbac",
                severity=Severity.HIGH,
                kind="ClusterRole",
                name="god-mode",
                namespace="",
                reason="Grants wildcard permissions (verbs: *, resources: *)",
                impact="Complete cluster control for any principal with this role",
                fix="Specify explicit verbs and resources",
            ),
        ],
        resources_scanned=2,
    )


@pytest.fixture
def empty_result():
    return ScanResult(findings=[], resources_scanned=1)


class TestHumanReporter:
    """Tests for the plain-text reporter."""

    def test_exact_output(self, sample_result):
        report = HumanReporter().generate(sample_result)
        assert report == (
            "HIGH RISK\n"
            "Resource: Deployment/web\n"
            "Namespace: prod\n"
            "Rule: privileged-container\n"
            "Reason: Container runs in privileged mode\n"
            "Impact: Full host access if container is compromised\n"
            "Fix: Remove privileged flag or set to false\n"
            "\n"
            "HIGH RISK\n"
            "Resource: ClusterRole/god-mode\n"
            "Rule: wildcard-rbac\n"
            "Reason: Grants wildcard permissions (verbs: *, resources: *)\n"
            "Impact: Complete cluster control for any principal with this role\n"
            "Fix: Specify explicit verbs and resources\n"
            "\n"
            "SUMMARY\n"
            "High risk: 2\n"
            "Medium risk: 0\n"
            "Resources affected: 2\n"
            "Namespaces affected: 1\n"
        )

    def test_namespaces_line_omitted_without_namespaces(self, sample_result):
        result = ScanResult(findings=sample_result.findings[1:])
        report = HumanReporter().generate(result)
        assert "Namespace" not in report
        assert report.endswith("Resources affected: 1\n")

    def test_no_findings(self, empty_result):
        assert HumanReporter().generate(empty_result) == "No security issues found.\n"
        assert NO_FINDINGS_MESSAGE == "No security issues found."


class TestJSONReporter:
    """Tests for the JSON reporter."""

    def test_valid_json(self, sample_result):
        report = JSONReporter().generate(sample_result)
        data = json.loads(report)
        assert data["summary"] == {
            "high": 2,
            "medium": 0,
            "resources_affected": 2,
            "namespaces_affected": 1,
        }
        assert len(data["findings"]) == 2
        assert data["findings"][1]["namespace"] == ""

    def test_formatting(self, sample_result):
        report = JSONReporter().generate(sample_result)
        assert report.endswith("}\n")
        assert report.startswith('{\n  "summary": {\n    "high": 2,')

    def test_empty_findings_is_list(self, empty_result):
        data = json.loads(JSONReporter().generate(empty_result))
        assert data["findings"] == []
        assert data["summary"]["high"] == 0

    def test_findings_parse_back(self, sample_result):
        data = json.loads(JSONReporter().generate(sample_result))
        assert [Finding.from_dict(f) for f in data["findings"]] == sample_result.findings


class TestCreateReporter:
    """Tests for reporter factory."""

    def test_create_json_reporter(self):
        assert isinstance(create_reporter("json"), JSONReporter)
        assert isinstance(create_reporter(OutputFormat.JSON), JSONReporter)

    def test_create_human_reporter(self):
        assert isinstance(create_reporter("human"), HumanReporter)
        assert isinstance(create_reporter(OutputFormat.HUMAN), HumanReporter)

    def test_invalid_format(self):
        with pytest.raises(ValueError, match="Unsupported format"):
            create_reporter("invalid")
