"""Tests for bindcov.aggregation.counters."""

from __future__ import annotations

from bindcov.aggregation.counters import (
    accumulate_class,
    accumulate_free_methods,
    line_row,
    method_counters,
    package_counters,
    rollup,
    tally,
)
from bindcov.models.coverage import USED, Method
from bindcov.models.report import (
    Counter,
    CounterType,
    PackageNode,
    SourcefileNode,
    find_counter,
)


def _method(name: str, *, used: bool = False, line: int = 1) -> Method:
    method = Method(name=name, signature="()void", declaration_line=line)
    if used:
        method.usage_count = USED
    return method


def _counter(node: SourcefileNode, counter_type: CounterType) -> Counter:
    counter = find_counter(node.counters, counter_type)
    assert counter is not None
    return counter


def _pair(node: SourcefileNode, counter_type: CounterType) -> tuple[int, int]:
    counter = _counter(node, counter_type)
    return counter.covered, counter.missed


class TestTally:
    def test_empty(self) -> None:
        assert tally([]) == (0, 0)

    def test_counts_covered_and_missed(self) -> None:
        methods = [_method("a", used=True), _method("b"), _method("c", used=True)]
        assert tally(methods) == (2, 1)


class TestMethodRows:
    def test_covered_method_counters(self) -> None:
        counters = method_counters(_method("a", used=True))
        assert [(c.type, c.covered, c.missed) for c in counters] == [
            (CounterType.METHOD, 1, 0),
            (CounterType.LINE, 1, 0),
        ]

    def test_missed_method_counters(self) -> None:
        counters = method_counters(_method("a"))
        assert [(c.covered, c.missed) for c in counters] == [(0, 1), (0, 1)]

    def test_line_row_flags(self) -> None:
        covered = line_row(_method("a", used=True, line=12))
        missed = line_row(_method("b", line=30))
        assert (covered.ln, covered.ci, covered.mi) == (12, 1, 0)
        assert (missed.ln, missed.ci, missed.mi) == (30, 0, 1)


class TestSourcefileAccumulation:
    def test_creates_missing_counters(self) -> None:
        node = SourcefileNode("a.cpp")
        accumulate_class(node, 1, 2)
        assert [c.type for c in node.counters] == [
            CounterType.CLASS,
            CounterType.METHOD,
            CounterType.LINE,
        ]

    def test_shared_file_accumulates(self) -> None:
        node = SourcefileNode("a.cpp")
        accumulate_class(node, 1, 1)
        accumulate_class(node, 1, 0)
        accumulate_class(node, 0, 3)
        assert _pair(node, CounterType.CLASS) == (3, 0)
        assert _pair(node, CounterType.METHOD) == (2, 4)
        assert _pair(node, CounterType.LINE) == (2, 4)
        assert len(node.counters) == 3

    def test_class_without_methods_still_counts(self) -> None:
        node = SourcefileNode("a.cpp")
        accumulate_class(node, 0, 0)
        assert _counter(node, CounterType.CLASS).covered == 1
        assert _counter(node, CounterType.METHOD).total == 0

    def test_free_methods_have_no_class_counter(self) -> None:
        node = SourcefileNode("ns")
        accumulate_free_methods(node, 2, 1)
        assert find_counter(node.counters, CounterType.CLASS) is None
        assert _counter(node, CounterType.METHOD).covered == 2
        assert _counter(node, CounterType.LINE).missed == 1


class TestRollups:
    def test_package_counters(self) -> None:
        counters = package_counters(3, 4, 2)
        assert [(c.type, c.covered, c.missed) for c in counters] == [
            (CounterType.METHOD, 3, 4),
            (CounterType.CLASS, 2, 0),
        ]

    def test_rollup_sums_packages(self) -> None:
        first = PackageNode("a", counters=package_counters(1, 2, 1))
        second = PackageNode("b", counters=package_counters(4, 0, 3))
        total = rollup([first, second])
        assert total.type is CounterType.METHOD
        assert (total.covered, total.missed) == (5, 2)

    def test_rollup_of_nothing(self) -> None:
        total = rollup([])
        assert total.total == 0
