"""
Artifact descriptions: the intermediate form between emitters and the renderer.

Statements are kept as templates. ``$T`` in a template is replaced, in order,
by the rendered form of the corresponding entry in ``Line.types`` so imports
can be collected before any text is produced.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .javatypes import ImportTable, TypeName, render_type
from .layout import ArtifactKind

CLASS = "class"
INTERFACE = "interface"


@dataclass(frozen=True)
class Line:
    template: str
    types: Tuple[TypeName, ...] = ()
    depth: int = 0

    def render(self, table: Optional[ImportTable]) -> str:
        parts = self.template.split("$T")
        if len(parts) - 1 != len(self.types):
            raise ValueError(f"template expects {len(parts) - 1} type(s), got {len(self.types)}: {self.template!r}")
        out = [parts[0]]
        for t, tail in zip(self.types, parts[1:]):
            out.append(render_type(t, table))
            out.append(tail)
        return "".join(out)


@dataclass(frozen=True)
class Annotation:
    type: TypeName
    # (member name, literal value); a single ("value", x) member renders as @A(x)
    members: Tuple[Tuple[str, str], ...] = ()


@dataclass(frozen=True)
class ParameterSpec:
    name: str
    type: TypeName
    annotations: Tuple[Annotation, ...] = ()


@dataclass(frozen=True)
class FieldSpec:
    name: str
    type: TypeName
    documentation: str = ""
    modifiers: Tuple[str, ...] = ("private",)
    initializer: Optional[Line] = None
    annotations: Tuple[Annotation, ...] = ()


@dataclass(frozen=True)
class MethodSpec:
    name: str
    parameters: Tuple[ParameterSpec, ...] = ()
    return_type: Optional[TypeName] = None
    modifiers: Tuple[str, ...] = ("public",)
    annotations: Tuple[Annotation, ...] = ()
    documentation: str = ""
    # None for abstract/interface methods
    body: Optional[Tuple[Line, ...]] = None
    is_constructor: bool = False

    @property
    def is_abstract(self) -> bool:
        return self.body is None


@dataclass(frozen=True)
class ArtifactDescription:
    kind: str
    artifact: ArtifactKind
    package: str
    class_name: str
    documentation: str = ""
    annotations: Tuple[Annotation, ...] = ()
    super_type: Optional[TypeName] = None
    super_interfaces: Tuple[TypeName, ...] = ()
    fields: Tuple[FieldSpec, ...] = ()
    methods: Tuple[MethodSpec, ...] = ()
    modifiers: Tuple[str, ...] = ("public",)

    @property
    def is_interface(self) -> bool:
        return self.kind == INTERFACE

    @property
    def qualified_name(self) -> str:
        return f"{self.package}.{self.class_name}"

    @property
    def type_name(self) -> TypeName:
        return TypeName(self.package, (self.class_name,))

    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def method(self, name: str) -> MethodSpec:
        for m in self.methods:
            if m.name == name:
                return m
        raise KeyError(name)

    def referenced_types(self) -> Iterator[TypeName]:
        """Every type the rendered source mentions, in declaration order."""
        for a in self.annotations:
            yield a.type
        if self.super_type is not None:
            yield self.super_type
        yield from self.super_interfaces
        for f in self.fields:
            for a in f.annotations:
                yield a.type
            yield f.type
            if f.initializer is not None:
                yield from f.initializer.types
        for m in self.methods:
            for a in m.annotations:
                yield a.type
            if m.return_type is not None:
                yield m.return_type
            for p in m.parameters:
                for a in p.annotations:
                    yield a.type
                yield p.type
            for line in m.body or ():
                yield from line.types


class CodeBlock:
    """Builds a method body one statement at a time, tracking brace depth."""

    def __init__(self) -> None:
        self._lines: List[Line] = []
        self._depth = 0

    def add(self, template: str, *types: TypeName) -> "CodeBlock":
        self._lines.append(Line(template, tuple(types), self._depth))
        return self

    def add_statement(self, template: str, *types: TypeName) -> "CodeBlock":
        return self.add(template + ";", *types)

    def begin_control_flow(self, template: str, *types: TypeName) -> "CodeBlock":
        self.add(template + " {", *types)
        self._depth += 1
        return self

    def next_control_flow(self, template: str, *types: TypeName) -> "CodeBlock":
        self._depth -= 1
        self.add("} " + template + " {", *types)
        self._depth += 1
        return self

    def end_control_flow(self) -> "CodeBlock":
        self._depth -= 1
        return self.add("}")

    def indent(self, levels: int = 1) -> "CodeBlock":
        self._depth += levels
        return self

    def unindent(self, levels: int = 1) -> "CodeBlock":
        self._depth = max(0, self._depth - levels)
        return self

    def build(self) -> Tuple[Line, ...]:
        if self._depth != 0:
            raise ValueError(f"unbalanced code block (depth {self._depth})")
        return tuple(self._lines)


def code(*statements: str) -> Tuple[Line, ...]:
    """Shorthand for bodies made of plain statements without type references."""
    return tuple(Line(s) for s in statements)
