"""Build the report tree from a populated coverage model."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from bindcov.aggregation.counters import (
    accumulate_class,
    accumulate_free_methods,
    line_row,
    method_counters,
    package_counters,
    rollup,
    tally,
)
from bindcov.models.report import (
    ClassNode,
    Counter,
    CounterType,
    GroupNode,
    MethodNode,
    PackageNode,
    ReportNode,
    SessionInfo,
    SourcefileNode,
)

if TYPE_CHECKING:
    from bindcov.collector import CoverageModel
    from bindcov.models.coverage import CoverageClass, Method, Package

logger = logging.getLogger(__name__)


def _method_row(method: Method) -> MethodNode:
    return MethodNode(
        name=method.name,
        desc=method.signature,
        line=method.declaration_line,
        counters=method_counters(method),
    )


class ReportBuilder:
    """Turn a :class:`CoverageModel` into a :class:`ReportNode` tree.

    Packages keep the order in which the model first saw them. A package
    is left out of the report when none of its classes or free functions
    declared any method.
    """

    def __init__(self, model: CoverageModel, root_module: str) -> None:
        self.model = model
        self.root_module = root_module

    def build(self, timestamp: int | None = None) -> ReportNode:
        """Build the report tree.

        Args:
            timestamp: Session start as a Unix timestamp. Defaults to now.

        Returns:
            The report root holding a single group named after the root module.
        """
        start = int(time.time()) if timestamp is None else timestamp
        group = GroupNode(self.root_module)

        for package in self.model.packages.values():
            node = self._build_package(package)
            if node is not None:
                group.packages.append(node)

        total = rollup(group.packages)
        group.counters.append(total)

        logger.debug(
            "Report %s: %d package(s), %d/%d methods covered",
            self.root_module,
            len(group.packages),
            total.covered,
            total.total,
        )
        return ReportNode(
            name=self.root_module,
            sessioninfo=SessionInfo(id=self.root_module, start=start),
            group=group,
            counters=[Counter(CounterType.METHOD, total.covered, total.missed)],
        )

    def _build_package(self, package: Package) -> PackageNode | None:
        logger.debug("Reporting: %s", package.name)
        node = PackageNode(package.name)
        covered = 0
        missed = 0

        for coverage_class in package.classes.values():
            sourcefile = node.sourcefile(coverage_class.file_name)
            class_covered, class_missed = tally(coverage_class.methods)
            node.classes.append(
                self._build_class(coverage_class, sourcefile, class_covered, class_missed)
            )
            accumulate_class(sourcefile, class_covered, class_missed)
            covered += class_covered
            missed += class_missed

        if package.methods:
            # Free functions have no file of their own; they share a
            # sourcefile named after the namespace.
            sourcefile = SourcefileNode(package.name)
            node.free_sourcefile = sourcefile
            for method in package.methods:
                node.methods.append(_method_row(method))
                sourcefile.lines.append(line_row(method))
            free_covered, free_missed = tally(package.methods)
            accumulate_free_methods(sourcefile, free_covered, free_missed)
            covered += free_covered
            missed += free_missed

        if covered + missed == 0:
            logger.debug("Omitting package %s: no declared methods", package.name)
            return None

        node.counters.extend(package_counters(covered, missed, len(package.classes)))
        return node

    def _build_class(
        self,
        coverage_class: CoverageClass,
        sourcefile: SourcefileNode,
        covered: int,
        missed: int,
    ) -> ClassNode:
        node = ClassNode(
            name=coverage_class.qualified_name, sourcefilename=coverage_class.file_name
        )
        for method in coverage_class.methods:
            logger.debug("    %s use %d", method.name, method.usage_count)
            node.methods.append(_method_row(method))
            sourcefile.lines.append(line_row(method))
        node.counters.append(Counter(CounterType.METHOD, covered, missed))
        return node
