"""Per-package method coverage summary.

A summary can be taken straight from a report tree or read back from a
JaCoCo XML document previously written by :mod:`bindcov.reporters.jacoco_xml`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from defusedxml import ElementTree
from defusedxml.ElementTree import ParseError as DefusedParseError

from bindcov.models.report import CounterType, find_counter

if TYPE_CHECKING:
    from pathlib import Path
    from xml.etree.ElementTree import Element as XmlElement

    from bindcov.models.report import ReportNode

logger = logging.getLogger(__name__)


def _percentage(covered: int, missed: int) -> float:
    total = covered + missed
    if total == 0:
        return 100.0
    return (covered / total) * 100.0


@dataclass
class PackageSummary:
    """Method totals of one reported package."""

    name: str
    method_covered: int = 0
    method_missed: int = 0
    class_count: int = 0

    @property
    def method_coverage_percentage(self) -> float:
        """Return method coverage percentage (0.0-100.0)."""
        return _percentage(self.method_covered, self.method_missed)


@dataclass
class CoverageSummary:
    """Method totals per package and for the whole report."""

    name: str = ""
    packages: dict[str, PackageSummary] = field(default_factory=dict)
    method_covered: int = 0
    method_missed: int = 0

    @property
    def method_coverage_percentage(self) -> float:
        """Return overall method coverage percentage (0.0-100.0)."""
        return _percentage(self.method_covered, self.method_missed)

    def get_uncovered_packages(self) -> list[str]:
        """Return names of packages where no method was covered."""
        return [
            name
            for name, package in self.packages.items()
            if package.method_covered == 0 and package.method_missed > 0
        ]


def summarize(report: ReportNode) -> CoverageSummary:
    """Reduce a report tree to its package and report METHOD counters."""
    summary = CoverageSummary(name=report.name)
    for package in report.group.packages:
        method_counter = find_counter(package.counters, CounterType.METHOD)
        class_counter = find_counter(package.counters, CounterType.CLASS)
        summary.packages[package.name] = PackageSummary(
            name=package.name,
            method_covered=method_counter.covered if method_counter else 0,
            method_missed=method_counter.missed if method_counter else 0,
            class_count=class_counter.covered if class_counter else 0,
        )
    total = find_counter(report.counters, CounterType.METHOD)
    if total is not None:
        summary.method_covered = total.covered
        summary.method_missed = total.missed
    return summary


def _int_attr(element: XmlElement, key: str, default: int = 0) -> int:
    value = element.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _counter_value(element: XmlElement, counter_type: CounterType, key: str) -> int | None:
    """Return attribute *key* of the direct child counter of *counter_type*, if any."""
    for counter in element.findall("counter"):
        if counter.get("type") == counter_type.value:
            return _int_attr(counter, key)
    return None


def parse_report_file(report_file: Path) -> CoverageSummary:
    """Read a JaCoCo XML document into a :class:`CoverageSummary`.

    Unreadable or malformed files are logged and yield an empty summary.
    """
    try:
        tree = ElementTree.parse(report_file)
    except (DefusedParseError, OSError) as e:
        logger.warning("Failed to parse coverage report %s: %s", report_file, e)
        return CoverageSummary()

    root = tree.getroot()
    if root.tag != "report":
        logger.warning("Coverage report root is not <report>: %s", root.tag)
        return CoverageSummary()

    summary = CoverageSummary(name=root.get("name", ""))
    for package in root.findall(".//package"):
        name = package.get("name", "")
        summary.packages[name] = PackageSummary(
            name=name,
            method_covered=_counter_value(package, CounterType.METHOD, "covered") or 0,
            method_missed=_counter_value(package, CounterType.METHOD, "missed") or 0,
            class_count=_counter_value(package, CounterType.CLASS, "covered") or 0,
        )

    covered = _counter_value(root, CounterType.METHOD, "covered")
    missed = _counter_value(root, CounterType.METHOD, "missed")
    if covered is not None and missed is not None:
        summary.method_covered = covered
        summary.method_missed = missed
    else:
        summary.method_covered = sum(p.method_covered for p in summary.packages.values())
        summary.method_missed = sum(p.method_missed for p in summary.packages.values())
    return summary
