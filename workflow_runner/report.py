"""
Report artifacts for a completed run.

Two machine-readable formats are written for downstream tooling:

- JSON: the structured per-scenario result list plus totals.
- JUnit XML: a single ``<testsuite>`` document, the format CI test
  report publishers understand.

:func:`format_summary` renders the human-readable table printed to
stdout for CI logs.
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from pathlib import Path

from workflow_runner.models import RunReport


def write_json(report: RunReport, path: str | Path) -> Path:
    """
    Write the report as JSON.

    Args:
        report: Completed run report.
        path: Destination file; parent directories are created.

    Returns:
        The path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(report.to_dict(), handle, indent=2)
        handle.write("\n")
    return path


def build_junit_xml(report: RunReport) -> ET.Element:
    """Build a JUnit ``<testsuite>`` element for the report."""
    suite = ET.Element(
        "testsuite",
        {
            "name": report.app,
            "tests": str(report.total),
            "failures": str(report.failed),
            "errors": "0",
            "skipped": "0",
            "time": f"{report.elapsed:.3f}",
            "timestamp": report.started_at.isoformat(),
        },
    )
    properties = ET.SubElement(suite, "properties")
    ET.SubElement(properties, "property", {"name": "base_url", "value": report.base_url})

    for result in report.results:
        case = ET.SubElement(
            suite,
            "testcase",
            {
                "classname": report.app,
                "name": result.name,
                "time": f"{result.elapsed:.3f}",
            },
        )
        if not result.passed:
            failure = ET.SubElement(case, "failure", {"message": result.message or ""})
            failure.text = result.message or ""
        output = list(result.notes)
        if result.screenshot:
            output.append(f"Screenshot: {result.screenshot}")
        if output:
            ET.SubElement(case, "system-out").text = "\n".join(output)

    return suite


def write_junit_xml(report: RunReport, path: str | Path) -> Path:
    """
    Write the report as a JUnit XML document.

    Args:
        report: Completed run report.
        path: Destination file; parent directories are created.

    Returns:
        The path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tree = ET.ElementTree(build_junit_xml(report))
    ET.indent(tree)
    tree.write(path, encoding="utf-8", xml_declaration=True)
    return path


def format_summary(report: RunReport) -> str:
    """Render a human-readable summary table."""
    width = max([len(result.name) for result in report.results] + [len("Scenario")])
    lines = [
        f"=== {report.app} @ {report.base_url} ===",
        f"{'Scenario':<{width}}  {'Result':<6}  {'Time':>7}",
        f"{'-' * width}  {'-' * 6}  {'-' * 7}",
    ]
    for result in report.results:
        verdict = "PASS" if result.passed else "FAIL"
        lines.append(f"{result.name:<{width}}  {verdict:<6}  {result.elapsed:>6.2f}s")
        if result.message:
            lines.append(f"    {result.message}")
    lines.append("")
    lines.append(f"Total: {report.total}  Passed: {report.passed}  Failed: {report.failed}")
    return "\n".join(lines)
