"""
Best-effort resolution of Java type names to fully-qualified names.

Resolution is a value, never an exception: every resolver returns either
``Resolved`` or ``Unresolved``. ``CompositeResolver`` tries a chain of
resolvers in order and turns a resolver that raises into a miss.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple, Union

from .javatypes import PRIMITIVES, TypeName, best_guess, render_type

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolved:
    qualified_name: str


@dataclass(frozen=True)
class Unresolved:
    reason: str


Resolution = Union[Resolved, Unresolved]


@dataclass(frozen=True)
class ResolutionContext:
    """What a compilation unit tells us about the names it can see."""

    package: str = ""
    imports: Tuple[str, ...] = ()
    wildcard_imports: Tuple[str, ...] = ()
    source_root: Optional[Path] = None


# java.lang is always visible; the other packages only through a wildcard import
JAVA_LANG: FrozenSet[str] = frozenset({
    "Object", "String", "Integer", "Long", "Short", "Byte", "Double", "Float",
    "Boolean", "Character", "Number", "Void", "Enum", "Class", "Math",
    "StringBuilder", "CharSequence", "Iterable", "Comparable", "Runnable",
    "Thread", "System", "Record", "Exception", "RuntimeException", "Error",
    "Throwable", "Override", "Deprecated", "SuppressWarnings", "FunctionalInterface",
})

JDK_PACKAGES: Dict[str, FrozenSet[str]] = {
    "java.util": frozenset({
        "List", "ArrayList", "LinkedList", "Map", "HashMap", "LinkedHashMap", "TreeMap",
        "Set", "HashSet", "LinkedHashSet", "TreeSet", "Collection", "Collections",
        "Optional", "UUID", "Date", "Locale", "Objects", "Arrays", "Queue", "Deque",
        "Iterator", "Currency", "BitSet", "Calendar",
    }),
    "java.time": frozenset({
        "LocalDate", "LocalDateTime", "LocalTime", "Instant", "Duration", "Period",
        "ZonedDateTime", "OffsetDateTime", "OffsetTime", "ZoneId", "Year", "YearMonth",
        "MonthDay", "DayOfWeek", "Month",
    }),
    "java.math": frozenset({"BigDecimal", "BigInteger", "RoundingMode", "MathContext"}),
    "java.sql": frozenset({"Timestamp", "Time", "Date", "Blob", "Clob"}),
    "java.net": frozenset({"URI", "URL", "InetAddress"}),
    "java.nio.file": frozenset({"Path", "Paths"}),
}


def _head(name: str) -> Tuple[str, str]:
    """``Map.Entry`` -> (``Map``, ``.Entry``)."""
    head, dot, rest = name.partition(".")
    return head, dot + rest


class TypeResolver:
    """Resolves a raw (non-generic) type name as written in source."""

    name = "resolver"

    def resolve(self, name: str, context: ResolutionContext) -> Resolution:
        raise NotImplementedError


class PrimitiveResolver(TypeResolver):
    name = "primitive"

    def resolve(self, name: str, context: ResolutionContext) -> Resolution:
        if name in PRIMITIVES:
            return Resolved(name)
        return Unresolved(f"{name} is not a primitive")


class QualifiedResolver(TypeResolver):
    name = "qualified"

    def resolve(self, name: str, context: ResolutionContext) -> Resolution:
        if "." in name and name[:1].islower():
            return Resolved(name)
        return Unresolved(f"{name} is not qualified")


class ImportResolver(TypeResolver):
    name = "import"

    def resolve(self, name: str, context: ResolutionContext) -> Resolution:
        head, rest = _head(name)
        for imp in context.imports:
            if imp.rsplit(".", 1)[-1] == head:
                return Resolved(imp + rest)
        return Unresolved(f"{head} is not imported")


class SourceRootResolver(TypeResolver):
    """Looks for ``<root>/<pkg>/<Name>.java`` in the own package and wildcard imports."""

    name = "source-root"

    def resolve(self, name: str, context: ResolutionContext) -> Resolution:
        root = context.source_root
        if root is None:
            return Unresolved("no source root")
        head, rest = _head(name)
        for pkg in (context.package, *context.wildcard_imports):
            pkg_dir = Path(root, *pkg.split(".")) if pkg else Path(root)
            if (pkg_dir / f"{head}.java").is_file():
                return Resolved(f"{pkg}.{head}{rest}" if pkg else f"{head}{rest}")
        return Unresolved(f"{head} not found under {root}")


class BuiltinResolver(TypeResolver):
    name = "builtin"

    def __init__(self, java_lang: Iterable[str] = JAVA_LANG, packages: Optional[Dict[str, FrozenSet[str]]] = None) -> None:
        self.java_lang = frozenset(java_lang)
        self.packages = JDK_PACKAGES if packages is None else packages

    def resolve(self, name: str, context: ResolutionContext) -> Resolution:
        head, rest = _head(name)
        if head in self.java_lang:
            return Resolved(f"java.lang.{head}{rest}")
        for pkg in context.wildcard_imports:
            if head in self.packages.get(pkg, ()):
                return Resolved(f"{pkg}.{head}{rest}")
        return Unresolved(f"{head} is not a known JDK type")


@dataclass
class CompositeResolver(TypeResolver):
    resolvers: List[TypeResolver] = field(default_factory=list)

    name = "composite"

    def resolve(self, name: str, context: ResolutionContext) -> Resolution:
        reasons: List[str] = []
        for r in self.resolvers:
            try:
                res = r.resolve(name, context)
            except Exception as e:  # a broken resolver only loses its own vote
                log.debug("Resolver %s raised on %s: %s", r.name, name, e)
                reasons.append(f"{r.name}: {e}")
                continue
            if isinstance(res, Resolved):
                return res
            reasons.append(f"{r.name}: {res.reason}")
        return Unresolved("; ".join(reasons) or f"no resolver for {name}")


def default_resolver() -> CompositeResolver:
    return CompositeResolver([
        PrimitiveResolver(),
        QualifiedResolver(),
        ImportResolver(),
        SourceRootResolver(),
        BuiltinResolver(),
    ])


# ---------------- declared types ----------------


def _qualify(t: TypeName, resolver: TypeResolver, context: ResolutionContext) -> Union[TypeName, Unresolved]:
    if t.wildcard:
        if not t.arguments:
            return t
        bound = _qualify(t.arguments[0], resolver, context)
        if isinstance(bound, Unresolved):
            return bound
        return TypeName("", t.names, (bound,), 0, t.wildcard)

    res = resolver.resolve(t.qualified_name, context)
    if isinstance(res, Unresolved):
        return res
    raw = best_guess(res.qualified_name)

    args: List[TypeName] = []
    for a in t.arguments:
        q = _qualify(a, resolver, context)
        if isinstance(q, Unresolved):
            return q
        args.append(q)
    return TypeName(raw.package, raw.names, tuple(args), t.dimensions)


def resolve_declared_type(declared: str, resolver: TypeResolver, context: ResolutionContext) -> Resolution:
    """
    Resolve a full declared type (generics, wildcards, arrays) component-wise.

    Any component that does not resolve makes the whole type ``Unresolved``;
    callers fall back to the literal declared text.
    """
    try:
        t = best_guess(declared)
        q = _qualify(t, resolver, context)
    except Exception as e:
        return Unresolved(f"{declared}: {e}")
    if isinstance(q, Unresolved):
        return q
    return Resolved(render_type(q, None))


def resolve_or_declared(declared: str, resolver: TypeResolver, context: ResolutionContext) -> str:
    res = resolve_declared_type(declared, resolver, context)
    if isinstance(res, Resolved):
        return res.qualified_name
    log.debug("Unresolved type %s: %s", declared, res.reason)
    return declared


def context_from_imports(package: str, imports: Sequence[Tuple[str, bool]], source_root: Optional[Path]) -> ResolutionContext:
    """Build a context from ``(path, is_wildcard)`` import pairs."""
    single = tuple(path for path, wildcard in imports if not wildcard)
    wild = tuple(path for path, wildcard in imports if wildcard)
    return ResolutionContext(package=package, imports=single, wildcard_imports=wild, source_root=source_root)
