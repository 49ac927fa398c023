"""Counter arithmetic for the report tree.

Each declared method counts as one METHOD and one synthetic LINE. Counters
are accumulated into sourcefile nodes rather than overwritten, because
several classes (nested types, for instance) may share one source file.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bindcov.models.report import Counter, CounterType, LineNode, find_counter

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bindcov.models.coverage import Method
    from bindcov.models.report import PackageNode, SourcefileNode


def tally(methods: Iterable[Method]) -> tuple[int, int]:
    """Return ``(covered, missed)`` method counts."""
    covered = 0
    missed = 0
    for method in methods:
        if method.is_covered:
            covered += 1
        else:
            missed += 1
    return covered, missed


def method_counters(method: Method) -> list[Counter]:
    """Return the METHOD and LINE counters of a single method row."""
    covered = 1 if method.is_covered else 0
    missed = 1 - covered
    return [
        Counter(CounterType.METHOD, covered, missed),
        Counter(CounterType.LINE, covered, missed),
    ]


def line_row(method: Method) -> LineNode:
    """Return the sourcefile line recorded for a method declaration."""
    covered = 1 if method.is_covered else 0
    return LineNode(ln=method.declaration_line, ci=covered, mi=1 - covered)


def accumulate_class(sourcefile: SourcefileNode, covered: int, missed: int) -> None:
    """Add one class's method totals to its sourcefile counters.

    ``CLASS.covered`` counts the classes attributed to the file; classes are
    never reported as missed.
    """
    sourcefile.counter(CounterType.CLASS).covered += 1
    accumulate_free_methods(sourcefile, covered, missed)


def accumulate_free_methods(sourcefile: SourcefileNode, covered: int, missed: int) -> None:
    """Add method totals to the METHOD and LINE counters of *sourcefile*."""
    for counter_type in (CounterType.METHOD, CounterType.LINE):
        counter = sourcefile.counter(counter_type)
        counter.covered += covered
        counter.missed += missed


def package_counters(covered: int, missed: int, class_count: int) -> list[Counter]:
    """Return the METHOD and CLASS counters closing a package."""
    return [
        Counter(CounterType.METHOD, covered, missed),
        Counter(CounterType.CLASS, class_count, 0),
    ]


def rollup(packages: Iterable[PackageNode]) -> Counter:
    """Sum the METHOD counters of *packages* into one counter."""
    total = Counter(CounterType.METHOD)
    for package in packages:
        counter = find_counter(package.counters, CounterType.METHOD)
        if counter is None:
            continue
        total.covered += counter.covered
        total.missed += counter.missed
    return total
