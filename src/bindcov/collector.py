"""Collect declarations and usages into the coverage model.

The declaration walk drives a :class:`CoverageModel` through two events:
``add_declaration`` for every function it discovers and ``mark_used`` for
every call site that resolves to one of them.
"""

from __future__ import annotations

import logging

from bindcov.models.coverage import (
    UNKNOWN_PACKAGE,
    USED,
    CoverageClass,
    Method,
    Package,
    Scope,
    ScopeKind,
    Signature,
    SourceLocation,
    base_scope,
)

logger = logging.getLogger(__name__)


def _package_name(path: str) -> str:
    return path or UNKNOWN_PACKAGE


class CoverageModel:
    """Package -> class/method hierarchy built up during one run.

    Lookups come in two flavours: ``find_*`` never mutates the model and
    returns None on a miss, ``get_*`` inserts what is missing.
    """

    def __init__(self, source_root: str = "") -> None:
        self.source_root = source_root.rstrip("/")
        self.packages: dict[str, Package] = {}

    # ── Lookups ───────────────────────────────────────────────────

    def find_package(self, path: str) -> Package | None:
        return self.packages.get(_package_name(path))

    def get_package(self, path: str) -> Package:
        """Return the package for namespace *path*, creating it if needed."""
        name = _package_name(path)
        package = self.packages.get(name)
        if package is None:
            package = Package(name)
            self.packages[name] = package
        return package

    def find_class(self, qualified_name: str) -> CoverageClass | None:
        package = self.find_package(base_scope(qualified_name))
        if package is None:
            return None
        return package.classes.get(qualified_name)

    def get_class(self, qualified_name: str) -> CoverageClass:
        """Return the class *qualified_name*, creating it (and its package) if needed."""
        package = self.get_package(base_scope(qualified_name))
        coverage_class = package.classes.get(qualified_name)
        if coverage_class is None:
            coverage_class = CoverageClass(qualified_name)
            package.classes[qualified_name] = coverage_class
        return coverage_class

    def relativize(self, file_path: str) -> str | None:
        """Return *file_path* relative to the source root.

        Paths that are already relative are taken as root-relative and kept
        unchanged. Returns None for files that are not project sources:
        absolute paths outside the root, or paths with a ``../`` segment.
        """
        if not self.source_root:
            return file_path
        if "../" in file_path:
            return None
        if file_path.startswith(self.source_root + "/"):
            return file_path[len(self.source_root) + 1 :]
        if not file_path.startswith("/"):
            return file_path
        return None

    # ── Events ────────────────────────────────────────────────────

    def add_declaration(
        self, scope: Scope, location: SourceLocation, signature: Signature
    ) -> Method | None:
        """Record a declared function.

        Returns the new method, or None when the declaration was dropped
        because its class would be attributed to a file outside the source
        root.
        """
        method = Method(
            name=signature.name,
            signature=signature.descriptor,
            declaration_line=location.line,
        )

        if scope.kind is ScopeKind.TYPE:
            coverage_class = self.find_class(scope.qualified_name)
            if coverage_class is None or not coverage_class.file_name:
                file_name = self.relativize(location.file)
                if file_name is None:
                    logger.debug(
                        "Skipping %s%s in %s: %s is not under %s",
                        method.name,
                        method.signature,
                        scope.qualified_name,
                        location.file,
                        self.source_root,
                    )
                    return None
                coverage_class = self.get_class(scope.qualified_name)
                coverage_class.file_name = file_name
            coverage_class.methods.append(method)
            logger.debug(
                "Decl: %s%s in class: %s",
                method.name,
                method.signature,
                coverage_class.qualified_name,
            )
            return method

        package = self.get_package(
            scope.qualified_name if scope.kind is ScopeKind.NAMESPACE else ""
        )
        package.methods.append(method)
        logger.debug("Decl: %s%s in package: %s", method.name, method.signature, package.name)
        return method

    def mark_used(self, scope: Scope, name: str, *, descriptor: str | None = None) -> bool:
        """Mark the first method called *name* in *scope* as used.

        Only the first declaration with a matching name is marked, so
        overloads share one usage flag unless *descriptor* narrows the match
        to a full signature. Unknown scopes and names are ignored.

        Returns:
            True if a declaration was marked.
        """
        logger.debug("Looking for: %s in %s", name, scope.qualified_name or UNKNOWN_PACKAGE)
        for method in self._methods_in(scope):
            if method.name != name:
                continue
            if descriptor is not None and method.signature != descriptor:
                continue
            method.usage_count = USED
            return True
        logger.debug("No declaration of %s found in %s", name, scope.qualified_name)
        return False

    def _methods_in(self, scope: Scope) -> list[Method]:
        if scope.kind is ScopeKind.TYPE:
            coverage_class = self.find_class(scope.qualified_name)
            return coverage_class.methods if coverage_class is not None else []
        path = scope.qualified_name if scope.kind is ScopeKind.NAMESPACE else ""
        package = self.find_package(path)
        return package.methods if package is not None else []
