"""bindcov: usage coverage of declared bindings, reported as JaCoCo XML."""

from bindcov.collector import CoverageModel
from bindcov.models.coverage import Scope, Signature, SourceLocation
from bindcov.reporters.jacoco_xml import WriteFailedError
from bindcov.session import CoverageSession

__version__ = "0.1.0"

__all__ = [
    "CoverageModel",
    "CoverageSession",
    "Scope",
    "Signature",
    "SourceLocation",
    "WriteFailedError",
    "__version__",
]
