"""Declaration-level coverage models.

These are the records the collector fills in while the declaration walk is
running: packages (namespaces), classes (record types) and the methods
declared in them, each carrying its usage state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

SCOPE_SEPARATOR = "::"

UNKNOWN_PACKAGE = "unknown"
"""Name given to the package that collects declarations without a namespace."""

UNUSED = -1
"""``usage_count`` of a method that was declared but never seen used."""

USED = 1


class ScopeKind(Enum):
    """Kind of construct enclosing a declaration."""

    NAMESPACE = "namespace"
    TYPE = "type"
    NONE = "none"


@dataclass(frozen=True)
class Scope:
    """Enclosing context of a declaration or call site."""

    kind: ScopeKind
    qualified_name: str = ""

    @classmethod
    def namespace(cls, qualified_name: str) -> Scope:
        return cls(ScopeKind.NAMESPACE, qualified_name)

    @classmethod
    def type(cls, qualified_name: str) -> Scope:
        return cls(ScopeKind.TYPE, qualified_name)

    @classmethod
    def none(cls) -> Scope:
        return cls(ScopeKind.NONE)


@dataclass(frozen=True)
class SourceLocation:
    """Presumed location of a declaration."""

    file: str
    line: int


@dataclass(frozen=True)
class Signature:
    """Name and types of a declared function."""

    name: str
    parameter_types: tuple[str, ...] = ()
    return_type: str = "void"

    @property
    def descriptor(self) -> str:
        """Return the ``(T1;T2)R`` descriptor used for the report ``desc`` field."""
        return "(" + ";".join(self.parameter_types) + ")" + self.return_type


@dataclass
class Method:
    """A declared method or free function."""

    name: str
    signature: str
    declaration_line: int
    usage_count: int = UNUSED

    @property
    def is_covered(self) -> bool:
        """Return True if a usage was recorded after the declaration."""
        return self.usage_count > 0


@dataclass
class CoverageClass:
    """A record type and the methods declared in it."""

    qualified_name: str
    file_name: str = ""
    """Source file relative to the source root, set by the first declaration."""

    methods: list[Method] = field(default_factory=list)


@dataclass
class Package:
    """A namespace with its classes and its free functions."""

    name: str
    classes: dict[str, CoverageClass] = field(default_factory=dict)
    """Classes keyed by qualified name, in insertion order."""

    methods: list[Method] = field(default_factory=list)
    """Functions declared directly in the namespace."""


def base_scope(qualified_name: str) -> str:
    """Return the enclosing scope of a qualified name (``a::b::C`` -> ``a::b``)."""
    head, sep, _ = qualified_name.rpartition(SCOPE_SEPARATOR)
    return head if sep else ""
