"""Per-run coverage session tying collection to report output."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from bindcov.aggregation.builder import ReportBuilder
from bindcov.collector import CoverageModel
from bindcov.config import validate_config
from bindcov.reporters.jacoco_xml import JaCoCoXMLReporter

if TYPE_CHECKING:
    from bindcov.config import BindcovConfig
    from bindcov.models.coverage import Method, Scope, Signature, SourceLocation
    from bindcov.models.report import ReportNode

logger = logging.getLogger(__name__)


class CoverageSession:
    """Everything one run needs: the coverage model and how to report it.

    Create one per run and pass it to the declaration walk; once the walk
    is finished call :meth:`write_report`.
    """

    def __init__(
        self,
        root_module: str,
        *,
        source_root: str = "",
        output_path: str | Path = "coverage.xml",
        match_signature: bool = False,
    ) -> None:
        self.root_module = root_module
        self.output_path = Path(output_path)
        self.match_signature = match_signature
        self.model = CoverageModel(source_root)

    @classmethod
    def from_config(cls, config: BindcovConfig) -> CoverageSession:
        """Create a session from *config*, logging any validation errors."""
        for error in validate_config(config):
            logger.warning("Invalid configuration: %s", error)
        return cls(
            config.report.root_module,
            source_root=config.project.source_root,
            output_path=config.output_file,
            match_signature=config.coverage.match_signature,
        )

    def add_method_decl(
        self, scope: Scope, location: SourceLocation, signature: Signature
    ) -> Method | None:
        return self.model.add_declaration(scope, location, signature)

    def mark_method_used(self, scope: Scope, signature: Signature) -> bool:
        """Record a call site resolving to *signature* in *scope*."""
        logger.debug("Usage+ %s::%s", scope.qualified_name, signature.name)
        descriptor = signature.descriptor if self.match_signature else None
        return self.model.mark_used(scope, signature.name, descriptor=descriptor)

    def build_report(self, timestamp: int | None = None) -> ReportNode:
        return ReportBuilder(self.model, self.root_module).build(timestamp)

    def write_report(self, path: str | Path | None = None, *, timestamp: int | None = None) -> Path:
        """Build the report tree and write it once as JaCoCo XML.

        Raises:
            WriteFailedError: If the document cannot be written.
        """
        output = Path(path) if path is not None else self.output_path
        return JaCoCoXMLReporter().generate(self.build_report(timestamp), output)
