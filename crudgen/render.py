"""Serialize an ArtifactDescription to Java source text."""

from __future__ import annotations

from typing import List

from .artifact import Annotation, ArtifactDescription, FieldSpec, MethodSpec, ParameterSpec
from .javatypes import ImportTable, render_import_block, render_type

INDENT = "    "


def build_import_table(artifact: ArtifactDescription) -> ImportTable:
    table = ImportTable(artifact.package, {artifact.class_name})
    for t in artifact.referenced_types():
        table.register(t)
    return table


def render_javadoc(text: str, indent: str) -> List[str]:
    if not text:
        return []
    out = [f"{indent}/**"]
    for line in text.splitlines():
        out.append(f"{indent} * {line}".rstrip())
    out.append(f"{indent} */")
    return out


def render_annotation(a: Annotation, table: ImportTable) -> str:
    name = "@" + render_type(a.type, table)
    if not a.members:
        return name
    if len(a.members) == 1 and a.members[0][0] == "value":
        return f"{name}({a.members[0][1]})"
    return name + "(" + ", ".join(f"{k} = {v}" for k, v in a.members) + ")"


def _parameter(p: ParameterSpec, table: ImportTable) -> str:
    anns = "".join(render_annotation(a, table) + " " for a in p.annotations)
    return f"{anns}{render_type(p.type, table)} {p.name}"


def _field(f: FieldSpec, table: ImportTable, indent: str) -> List[str]:
    out = render_javadoc(f.documentation, indent)
    out += [indent + render_annotation(a, table) for a in f.annotations]
    head = " ".join(list(f.modifiers) + [render_type(f.type, table), f.name])
    if f.initializer is not None:
        head += " = " + f.initializer.render(table)
    out.append(f"{indent}{head};")
    return out


def _method(m: MethodSpec, table: ImportTable, indent: str) -> List[str]:
    out = render_javadoc(m.documentation, indent)
    out += [indent + render_annotation(a, table) for a in m.annotations]

    parts = list(m.modifiers)
    if not m.is_constructor:
        parts.append(render_type(m.return_type, table) if m.return_type is not None else "void")
    params = ", ".join(_parameter(p, table) for p in m.parameters)
    signature = " ".join(parts + [f"{m.name}({params})"])

    if m.body is None:
        out.append(f"{indent}{signature};")
        return out

    out.append(f"{indent}{signature} {{")
    for line in m.body:
        out.append(indent + INDENT * (1 + line.depth) + line.render(table))
    out.append(f"{indent}}}")
    return out


def render_java_file(artifact: ArtifactDescription) -> str:
    table = build_import_table(artifact)
    lines: List[str] = [f"package {artifact.package};", ""]

    imports = render_import_block(table.imports())
    if imports:
        lines += imports.rstrip("\n").split("\n")
        lines.append("")

    lines += render_javadoc(artifact.documentation, "")
    lines += [render_annotation(a, table) for a in artifact.annotations]

    decl = list(artifact.modifiers) + [artifact.kind, artifact.class_name]
    if artifact.is_interface:
        if artifact.super_interfaces:
            decl += ["extends", ", ".join(render_type(t, table) for t in artifact.super_interfaces)]
    else:
        if artifact.super_type is not None:
            decl += ["extends", render_type(artifact.super_type, table)]
        if artifact.super_interfaces:
            decl += ["implements", ", ".join(render_type(t, table) for t in artifact.super_interfaces)]
    lines.append(" ".join(decl) + " {")

    members: List[List[str]] = [_field(f, table, INDENT) for f in artifact.fields]
    members += [_method(m, table, INDENT) for m in artifact.methods]
    for i, block in enumerate(members):
        if i:
            lines.append("")
        lines += block

    lines.append("}")
    return "\n".join(lines) + "\n"
