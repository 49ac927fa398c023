"""Tests for report summaries (reporters/summary.py)."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from bindcov.aggregation.builder import ReportBuilder
from bindcov.collector import CoverageModel
from bindcov.models.coverage import Scope, Signature, SourceLocation
from bindcov.models.report import ReportNode
from bindcov.reporters.jacoco_xml import JaCoCoXMLReporter
from bindcov.reporters.summary import (
    CoverageSummary,
    PackageSummary,
    parse_report_file,
    summarize,
)

_FOREIGN_JACOCO_XML = """\
<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<report name="jacoco">
  <package name="com/example">
    <class name="com/example/Calculator" sourcefilename="Calculator.java">
      <method name="add" desc="(II)I" line="10"/>
      <counter type="METHOD" missed="1" covered="3"/>
    </class>
    <counter type="METHOD" missed="1" covered="3"/>
    <counter type="CLASS" missed="0" covered="1"/>
  </package>
</report>
"""


@pytest.fixture
def report() -> ReportNode:
    model = CoverageModel()
    model.add_declaration(Scope.type("ns::A"), SourceLocation("a.cpp", 1), Signature("foo"))
    model.add_declaration(Scope.type("ns::A"), SourceLocation("a.cpp", 2), Signature("bar"))
    model.add_declaration(Scope.none(), SourceLocation("x.cpp", 5), Signature("lonely"))
    model.mark_used(Scope.type("ns::A"), "foo")
    return ReportBuilder(model, "mymodule").build(timestamp=0)


class TestPercentages:
    def test_package_percentage(self) -> None:
        assert PackageSummary("p", 3, 1).method_coverage_percentage == 75.0

    def test_nothing_counted_is_full(self) -> None:
        assert CoverageSummary().method_coverage_percentage == 100.0

    def test_uncovered_packages(self) -> None:
        summary = CoverageSummary(
            packages={
                "a": PackageSummary("a", 0, 2),
                "b": PackageSummary("b", 1, 1),
                "c": PackageSummary("c", 0, 0),
            }
        )
        assert summary.get_uncovered_packages() == ["a"]


class TestSummarize:
    def test_packages_and_totals(self, report: ReportNode) -> None:
        summary = summarize(report)
        assert summary.name == "mymodule"
        assert list(summary.packages) == ["ns", "unknown"]
        assert summary.packages["ns"] == PackageSummary("ns", 1, 1, 1)
        assert summary.packages["unknown"] == PackageSummary("unknown", 0, 1, 0)
        assert (summary.method_covered, summary.method_missed) == (1, 2)


class TestParseReportFile:
    def test_round_trip_matches_summarize(self, report: ReportNode, tmp_path: Path) -> None:
        path = JaCoCoXMLReporter().generate(report, tmp_path / "coverage.xml")
        assert parse_report_file(path) == summarize(report)

    def test_reads_foreign_jacoco_report(self, tmp_path: Path) -> None:
        path = tmp_path / "jacoco.xml"
        path.write_text(_FOREIGN_JACOCO_XML, encoding="utf-8")
        summary = parse_report_file(path)
        assert summary.name == "jacoco"
        assert summary.packages["com/example"] == PackageSummary("com/example", 3, 1, 1)
        assert (summary.method_covered, summary.method_missed) == (3, 1)

    def test_missing_file_returns_empty(self, caplog: pytest.LogCaptureFixture) -> None:
        summary = parse_report_file(Path("/nonexistent/coverage.xml"))
        assert summary == CoverageSummary()
        assert "Failed to parse coverage report" in caplog.text

    def test_malformed_xml_returns_empty(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = tmp_path / "coverage.xml"
        path.write_text("<report><package", encoding="utf-8")
        assert parse_report_file(path) == CoverageSummary()
        records = [r for r in caplog.records if r.name == "bindcov.reporters.summary"]
        assert [r.levelno for r in records] == [logging.WARNING]
        assert "Failed to parse coverage report" in caplog.text

    def test_wrong_root_returns_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "coverage.xml"
        path.write_text("<testsuites/>", encoding="utf-8")
        assert parse_report_file(path) == CoverageSummary()
