"""Java type names: parsing, rendering and import bookkeeping."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

PRIMITIVE_TO_WRAPPER = {
    "int": "Integer",
    "long": "Long",
    "double": "Double",
    "float": "Float",
    "short": "Short",
    "byte": "Byte",
    "boolean": "Boolean",
    "char": "Character",
}
PRIMITIVES = set(PRIMITIVE_TO_WRAPPER) | {"void"}

COLLECTION_TYPES = {
    "Collection", "List", "ArrayList", "LinkedList",
    "Set", "HashSet", "LinkedHashSet", "TreeSet",
    "Map", "HashMap", "LinkedHashMap", "TreeMap",
    "Iterable", "Queue", "Deque",
}

_TOKEN_RE = re.compile(r"\s*([A-Za-z_$][\w$]*(?:\s*\.\s*[A-Za-z_$][\w$]*)*|\?|<|>|,|\[\s*\]|&)")


@dataclass(frozen=True)
class TypeName:
    """
    A Java type reference.

    ``package`` is empty for primitives, type variables and names we could not
    qualify. ``names`` holds the top-level class followed by any nested names
    (``("Map", "Entry")``). A wildcard stores its kind in ``wildcard`` ("?",
    "extends" or "super") and its bound, if any, as the single argument.
    """

    package: str
    names: Tuple[str, ...]
    arguments: Tuple["TypeName", ...] = ()
    dimensions: int = 0
    wildcard: str = ""

    @property
    def simple_name(self) -> str:
        return self.names[-1] if self.names else "?"

    @property
    def qualified_name(self) -> str:
        dotted = ".".join(self.names)
        return f"{self.package}.{dotted}" if self.package else dotted

    @property
    def import_name(self) -> Optional[str]:
        if not self.package or self.wildcard:
            return None
        return f"{self.package}.{self.names[0]}"

    @property
    def is_primitive(self) -> bool:
        return not self.package and len(self.names) == 1 and self.names[0] in PRIMITIVES and not self.dimensions

    @property
    def is_collection(self) -> bool:
        return self.dimensions > 0 or (self.names[0] in COLLECTION_TYPES and self.package in {"", "java.util"})

    def with_arguments(self, *args: "TypeName") -> "TypeName":
        return TypeName(self.package, self.names, tuple(args), self.dimensions, self.wildcard)

    def boxed(self) -> "TypeName":
        if self.is_primitive and self.names[0] in PRIMITIVE_TO_WRAPPER:
            return TypeName("java.lang", (wrapper_type(self.names[0]),))
        return self

    def walk(self) -> Iterable["TypeName"]:
        yield self
        for a in self.arguments:
            yield from a.walk()

    def __str__(self) -> str:
        return render_type(self, None)


def class_name(package: str, *names: str) -> TypeName:
    return TypeName(package, tuple(names))


def parameterized(raw: TypeName, *args: TypeName) -> TypeName:
    return raw.with_arguments(*args)


BOOLEAN = TypeName("", ("boolean",))
LONG = class_name("java.lang", "Long")
STRING = class_name("java.lang", "String")
OVERRIDE = class_name("java.lang", "Override")
LIST = class_name("java.util", "List")
LOCAL_DATE_TIME = class_name("java.time", "LocalDateTime")

# ---------------- parsing ----------------


def _split_qualified(dotted: str) -> Tuple[str, Tuple[str, ...]]:
    parts = [x.strip() for x in dotted.split(".") if x.strip()]
    pkg: List[str] = []
    while len(parts) > 1 and parts[0][:1].islower():
        pkg.append(parts.pop(0))
    return ".".join(pkg), tuple(parts)


def _tokens(text: str) -> List[str]:
    out: List[str] = []
    pos = 0
    text = text.strip()
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if not m:
            raise ValueError(f"unparseable type: {text!r}")
        out.append(re.sub(r"\s+", "", m.group(1)))
        pos = m.end()
        while pos < len(text) and text[pos].isspace():
            pos += 1
    return out


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.toks = _tokens(text)
        self.i = 0

    def peek(self) -> Optional[str]:
        return self.toks[self.i] if self.i < len(self.toks) else None

    def take(self, expected: Optional[str] = None) -> str:
        tok = self.peek()
        if tok is None or (expected is not None and tok != expected):
            raise ValueError(f"unparseable type: {self.text!r}")
        self.i += 1
        return tok

    def parse_type(self) -> TypeName:
        tok = self.peek()
        if tok == "?":
            self.take()
            nxt = self.peek()
            if nxt in {"extends", "super"}:
                self.take()
                bound = self.parse_type()
                return TypeName("", ("?",), (bound,), 0, nxt)
            return TypeName("", ("?",), (), 0, "?")

        # nested generic types such as Outer<A>.Inner are flattened to Outer.Inner<A>
        dotted = self.take()
        args: List[TypeName] = []
        if self.peek() == "<":
            self.take("<")
            if self.peek() != ">":
                args.append(self.parse_type())
                while self.peek() == ",":
                    self.take(",")
                    args.append(self.parse_type())
            self.take(">")
        dims = 0
        while self.peek() == "[]":
            self.take()
            dims += 1
        if dotted in PRIMITIVES:
            return TypeName("", (dotted,), (), dims)
        pkg, names = _split_qualified(dotted)
        return TypeName(pkg, names, tuple(args), dims)


def best_guess(text: str) -> TypeName:
    """Parse a Java type as written, guessing package vs. class by case."""
    parser = _Parser(text)
    t = parser.parse_type()
    if parser.peek() is not None:
        raise ValueError(f"unparseable type: {text!r}")
    return t


def wrapper_type(t: str) -> str:
    return PRIMITIVE_TO_WRAPPER.get(t, t)


# ---------------- rendering / imports ----------------


@dataclass
class ImportTable:
    """
    Decides which types are imported and which stay fully qualified.

    The first qualified name registered for a simple name wins; later clashes
    are rendered fully qualified. The class being rendered reserves its own
    simple name.
    """

    own_package: str
    own_names: Set[str] = field(default_factory=set)
    _by_simple: Dict[str, str] = field(default_factory=dict)

    def register(self, t: TypeName) -> None:
        for node in t.walk():
            imp = node.import_name
            if imp is None:
                continue
            top = node.names[0]
            if top in self.own_names and f"{self.own_package}.{top}" != imp:
                continue
            self._by_simple.setdefault(top, imp)

    def uses_short_name(self, t: TypeName) -> bool:
        imp = t.import_name
        if imp is None:
            return True
        top = t.names[0]
        registered = self._by_simple.get(top)
        if registered is None:
            return imp == f"{self.own_package}.{top}"
        return registered == imp

    def imports(self) -> List[str]:
        out = set()
        for top, imp in self._by_simple.items():
            pkg = imp[: -(len(top) + 1)]
            if pkg in {"java.lang", self.own_package}:
                continue
            out.add(imp)
        return sorted(out)


def render_type(t: TypeName, table: Optional[ImportTable]) -> str:
    """Render ``t``; without a table every name is fully qualified."""
    if t.wildcard:
        if t.wildcard == "?" or not t.arguments:
            return "?"
        return f"? {t.wildcard} {render_type(t.arguments[0], table)}"
    if table is None or not table.uses_short_name(t):
        base = t.qualified_name
    else:
        base = ".".join(t.names)
    if t.arguments:
        base += "<" + ", ".join(render_type(a, table) for a in t.arguments) + ">"
    return base + "[]" * t.dimensions


def render_import_block(items: Iterable[str]) -> str:
    """Render sorted, deduplicated Java import lines (with trailing newline)."""
    out: Set[str] = set()
    for raw in items or ():
        s = re.sub(r"^\s*import\s+", "", str(raw)).rstrip(";").strip()
        if s:
            out.add(f"import {s};")
    return ("\n".join(sorted(out)) + "\n") if out else ""
