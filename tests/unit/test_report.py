"""
Unit tests for run reports and their artifacts.
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET

import pytest

from workflow_runner.models import RunReport
from workflow_runner.report import format_summary, write_json, write_junit_xml

pytestmark = pytest.mark.unit


def test_report_totals(sample_report):
    assert sample_report.total == 3
    assert sample_report.passed == 2
    assert sample_report.failed == 1
    assert sample_report.ok is False
    assert sample_report.elapsed == pytest.approx(2.45)


def test_empty_report_is_ok():
    report = RunReport(app="bug-fixer", base_url="http://bugs.test")

    assert report.ok
    assert report.total == 0


def test_json_artifact(sample_report, tmp_path):
    # Arrange
    path = tmp_path / "reports" / "run.json"

    # Act
    write_json(sample_report, path)

    # Assert
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["app"] == "task-manager"
    assert data["summary"] == {"total": 3, "passed": 2, "failed": 1, "elapsed": 2.45}
    failed = data["results"][1]
    assert failed["passed"] is False
    assert failed["message"].startswith("Exactly one task should be listed")
    assert failed["screenshot"].endswith(".png")
    assert data["results"][2]["notes"] == ["No 'Mark Complete' action found, skipping (lenient)"]
    assert data["finished_at"] is None


def test_junit_artifact(sample_report, tmp_path):
    # Arrange
    path = tmp_path / "TEST-task-manager.xml"

    # Act
    write_junit_xml(sample_report, path)

    # Assert
    suite = ET.parse(path).getroot()
    assert suite.tag == "testsuite"
    assert suite.get("tests") == "3"
    assert suite.get("failures") == "1"

    cases = suite.findall("testcase")
    assert [case.get("name") for case in cases] == [r.name for r in sample_report.results]
    assert cases[0].find("failure") is None
    failure = cases[1].find("failure")
    assert failure is not None
    assert "expected 1, found 0" in failure.get("message")
    assert "Screenshot:" in cases[1].find("system-out").text
    assert "lenient" in cases[2].find("system-out").text


def test_summary_table(sample_report):
    summary = format_summary(sample_report)

    assert "TC01: Verify Homepage Title" in summary
    assert "PASS" in summary
    assert "FAIL" in summary
    assert "Exactly one task should be listed" in summary
    assert summary.endswith("Total: 3  Passed: 2  Failed: 1")
