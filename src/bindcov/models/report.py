"""In-memory report tree mirroring the JaCoCo XML layout."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class CounterType(Enum):
    """Counter kinds emitted in the report."""

    CLASS = "CLASS"
    METHOD = "METHOD"
    LINE = "LINE"


@dataclass
class Counter:
    """Covered/missed totals of one kind."""

    type: CounterType
    covered: int = 0
    missed: int = 0

    @property
    def total(self) -> int:
        return self.covered + self.missed


def find_counter(counters: list[Counter], counter_type: CounterType) -> Counter | None:
    """Return the counter of *counter_type* in *counters*, or None."""
    for counter in counters:
        if counter.type is counter_type:
            return counter
    return None


@dataclass
class LineNode:
    """One synthetic source line per declared method."""

    ln: int
    ci: int
    mi: int


@dataclass
class MethodNode:
    name: str
    desc: str
    line: int
    counters: list[Counter] = field(default_factory=list)


@dataclass
class ClassNode:
    name: str
    sourcefilename: str
    methods: list[MethodNode] = field(default_factory=list)
    counters: list[Counter] = field(default_factory=list)


@dataclass
class SourcefileNode:
    """Lines and counters of one source file, possibly shared by several classes."""

    name: str
    lines: list[LineNode] = field(default_factory=list)
    counters: list[Counter] = field(default_factory=list)

    def counter(self, counter_type: CounterType) -> Counter:
        """Return the counter of *counter_type*, creating a zero one when absent."""
        existing = find_counter(self.counters, counter_type)
        if existing is not None:
            return existing
        created = Counter(counter_type)
        self.counters.append(created)
        return created


@dataclass
class PackageNode:
    name: str
    classes: list[ClassNode] = field(default_factory=list)
    methods: list[MethodNode] = field(default_factory=list)
    """Rows of free functions declared directly in the namespace."""

    sourcefiles: dict[str, SourcefileNode] = field(default_factory=dict)
    free_sourcefile: SourcefileNode | None = None
    """Synthetic sourcefile named after the package holding free-function lines.

    Kept apart from :attr:`sourcefiles` so a class file that happens to share
    the package name is never merged with it.
    """

    counters: list[Counter] = field(default_factory=list)

    def sourcefile(self, name: str) -> SourcefileNode:
        """Return the sourcefile node called *name*, creating it when absent."""
        node = self.sourcefiles.get(name)
        if node is None:
            node = SourcefileNode(name)
            self.sourcefiles[name] = node
        return node


@dataclass
class GroupNode:
    name: str
    packages: list[PackageNode] = field(default_factory=list)
    counters: list[Counter] = field(default_factory=list)


@dataclass
class SessionInfo:
    id: str
    start: int
    """Unix timestamp (seconds) taken when the report was built."""


@dataclass
class ReportNode:
    """Root of the report tree."""

    name: str
    sessioninfo: SessionInfo
    group: GroupNode
    counters: list[Counter] = field(default_factory=list)
