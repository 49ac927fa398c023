"""Reporters for rendering and summarizing coverage reports."""

from __future__ import annotations

from bindcov.reporters.jacoco_xml import JaCoCoXMLReporter, WriteFailedError
from bindcov.reporters.summary import CoverageSummary, parse_report_file, summarize
from bindcov.reporters.terminal import SummaryReporter

__all__ = [
    "CoverageSummary",
    "JaCoCoXMLReporter",
    "SummaryReporter",
    "WriteFailedError",
    "parse_report_file",
    "summarize",
]
