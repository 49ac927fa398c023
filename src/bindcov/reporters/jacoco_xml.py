"""JaCoCo XML reporter that writes the coverage report document.

Produces the ``report > group > package > {class, sourcefile}`` layout read
by JaCoCo-aware viewers and CI plugins. All data is carried in attributes.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from bindcov.models.report import (
        ClassNode,
        Counter,
        MethodNode,
        PackageNode,
        ReportNode,
        SourcefileNode,
    )

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
JACOCO_DOCTYPE = (
    "<!DOCTYPE report SYSTEM 'http://www.eclemma.org/jacoco/trunk/coverage/report.dtd'>"
)


class WriteFailedError(RuntimeError):
    """Raised when the report document cannot be written."""


class JaCoCoXMLReporter:
    """Render a :class:`ReportNode` tree as a JaCoCo XML document."""

    def generate(self, report: ReportNode, output_path: Path) -> Path:
        """Write the report document.

        Args:
            report: Report tree built from the coverage model.
            output_path: Path to write the XML file.

        Returns:
            The path to the generated XML file.

        Raises:
            WriteFailedError: If the file or its directory cannot be written.
        """
        content = self.generate_string(report)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise WriteFailedError(f"Cannot write coverage report to {output_path}: {e}") from e
        logger.info("JaCoCo XML report written to %s", output_path)
        return output_path

    def generate_string(self, report: ReportNode) -> str:
        """Return the report document, declaration and DOCTYPE included."""
        root = _build_xml(report)
        ET.indent(root, space="  ")
        body = ET.tostring(root, encoding="unicode")
        return f"{XML_DECLARATION}\n{JACOCO_DOCTYPE}\n{body}\n"


def _add_counters(parent: ET.Element, counters: list[Counter]) -> None:
    for counter in counters:
        elem = ET.SubElement(parent, "counter")
        elem.set("type", counter.type.value)
        elem.set("covered", str(counter.covered))
        elem.set("missed", str(counter.missed))


def _add_method(parent: ET.Element, method: MethodNode) -> None:
    elem = ET.SubElement(parent, "method")
    elem.set("name", method.name)
    elem.set("desc", method.desc)
    elem.set("line", str(method.line))
    _add_counters(elem, method.counters)


def _add_class(parent: ET.Element, class_node: ClassNode) -> None:
    elem = ET.SubElement(parent, "class")
    elem.set("name", class_node.name)
    elem.set("sourcefilename", class_node.sourcefilename)
    for method in class_node.methods:
        _add_method(elem, method)
    _add_counters(elem, class_node.counters)


def _add_sourcefile(parent: ET.Element, sourcefile: SourcefileNode) -> None:
    elem = ET.SubElement(parent, "sourcefile")
    elem.set("name", sourcefile.name)
    for line in sourcefile.lines:
        line_elem = ET.SubElement(elem, "line")
        line_elem.set("ln", str(line.ln))
        line_elem.set("ci", str(line.ci))
        line_elem.set("mi", str(line.mi))
    _add_counters(elem, sourcefile.counters)


def _add_package(parent: ET.Element, package: PackageNode) -> None:
    elem = ET.SubElement(parent, "package")
    elem.set("name", package.name)
    for class_node in package.classes:
        _add_class(elem, class_node)
    for method in package.methods:
        _add_method(elem, method)
    for sourcefile in package.sourcefiles.values():
        _add_sourcefile(elem, sourcefile)
    if package.free_sourcefile is not None:
        _add_sourcefile(elem, package.free_sourcefile)
    _add_counters(elem, package.counters)


def _build_xml(report: ReportNode) -> ET.Element:
    """Build the XML element tree from a ``ReportNode``."""
    root = ET.Element("report")
    root.set("name", report.name)

    session = ET.SubElement(root, "sessioninfo")
    session.set("id", report.sessioninfo.id)
    session.set("start", str(report.sessioninfo.start))

    group = ET.SubElement(root, "group")
    group.set("name", report.group.name)
    for package in report.group.packages:
        _add_package(group, package)
    _add_counters(group, report.group.counters)

    _add_counters(root, report.counters)
    return root
