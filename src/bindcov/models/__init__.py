"""Data models for bindcov."""

from bindcov.models.coverage import (
    CoverageClass,
    Method,
    Package,
    Scope,
    ScopeKind,
    Signature,
    SourceLocation,
)
from bindcov.models.report import Counter, CounterType, ReportNode

__all__ = [
    "Counter",
    "CounterType",
    "CoverageClass",
    "Method",
    "Package",
    "ReportNode",
    "Scope",
    "ScopeKind",
    "Signature",
    "SourceLocation",
]
