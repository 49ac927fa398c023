"""Counter aggregation and report building."""

from bindcov.aggregation.builder import ReportBuilder

__all__ = ["ReportBuilder"]
