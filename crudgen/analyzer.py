"""Parse one entity source file into an EntityDescriptor."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple

import javalang

from .errors import MalformedSource, SourceNotFound
from .locator import entity_relpath
from .model import EntityDescriptor, FieldDescriptor, is_primary_key_name, split_entity_id
from .resolver import TypeResolver, context_from_imports, default_resolver, resolve_or_declared

log = logging.getLogger(__name__)


def read_text(pth: Path) -> str:
    return pth.read_text(encoding="utf-8", errors="replace")


def clean_javadoc(doc: Optional[str]) -> str:
    """
    ``/** Hello.\\n * @author x */`` -> ``Hello.``

    Strips the comment markers and leading ``*`` of each line, stops at the
    first block tag and drops blank lines.
    """
    if not doc:
        return ""
    body = doc.strip()
    if body.startswith("/**"):
        body = body[3:]
    elif body.startswith("/*"):
        body = body[2:]
    if body.endswith("*/"):
        body = body[:-2]

    lines: List[str] = []
    for raw in body.splitlines():
        s = re.sub(r"^\s*\*+", "", raw).strip()
        if s.startswith("@"):
            break
        if s:
            lines.append(s)
    return "\n".join(lines)


def clean_comment(comment: Optional[str]) -> str:
    """
    Doc text of any comment form.

    ``/** */`` goes through :func:`clean_javadoc`; ``//`` and ``/* */`` keep
    every non-blank line with markers and leading ``*`` removed.
    """
    if not comment:
        return ""
    body = comment.strip()
    if body.startswith("/**"):
        return clean_javadoc(body)
    if body.startswith("//"):
        body = body[2:]
    else:
        body = body[2:]
        if body.endswith("*/"):
            body = body[:-2]
    lines = [re.sub(r"^\s*\*+", "", raw).strip() for raw in body.splitlines()]
    return "\n".join(s for s in lines if s)


# ---------------- comments ----------------

class CommentTokenizer(javalang.tokenizer.JavaTokenizer):
    """
    javalang's tokenizer keeps only Javadoc. This one hangs every comment,
    as ``(line, text)``, on the ``comments`` attribute of the next token.
    """

    def __init__(self, data: str, ignore_errors: bool = False) -> None:
        super().__init__(data, ignore_errors)
        self.pending: List[Tuple[int, str]] = []

    def read_comment(self):
        line = self.current_line
        comment = super().read_comment()
        self.pending.append((line, comment))
        return comment

    def tokenize(self):
        for token in super().tokenize():
            token.comments, self.pending = self.pending, []
            yield token


DECLARATION_BOUNDARY = {";", "{", "}"}


class LeadingComments:
    """Finds the comment directly above a declaration, annotations and modifiers included."""

    def __init__(self, tokens: List) -> None:
        self.tokens = tokens
        self._index = {t.position: i for i, t in enumerate(tokens)}

    def first_token(self, position) -> Optional[int]:
        i = self._index.get(position)
        if i is None:
            return None
        depth = 0
        while i > 0:
            value = self.tokens[i - 1].value
            if value == ")":
                depth += 1
            elif value == "(":
                depth -= 1
            elif depth == 0 and value in DECLARATION_BOUNDARY:
                break
            i -= 1
        return i

    def comment_for(self, node) -> str:
        i = self.first_token(getattr(node, "position", None))
        if i is None:
            return clean_javadoc(getattr(node, "documentation", None))
        comments = getattr(self.tokens[i], "comments", [])
        if i > 0:
            # trailing comment of the previous statement
            prev_line = self.tokens[i - 1].position.line
            comments = [c for c in comments if c[0] != prev_line]
        return clean_comment(comments[-1][1]) if comments else ""


# ---------------- javalang type nodes -> source text ----------------

def _dims(node) -> int:
    d = getattr(node, "dimensions", None)
    return len(d) if d else 0


def _type_argument_to_str(arg) -> str:
    pattern = getattr(arg, "pattern_type", None)
    inner = getattr(arg, "type", None)
    if pattern == "?" or (pattern is not None and inner is None):
        return "?"
    if pattern in {"extends", "super"}:
        return f"? {pattern} {type_to_str(inner)}"
    return type_to_str(inner)


def type_to_str(t) -> str:
    """Render a javalang ``BasicType``/``ReferenceType`` back to Java source."""
    if t is None:
        return "Object"
    if isinstance(t, javalang.tree.BasicType):
        return t.name + "[]" * _dims(t)

    parts: List[str] = []
    node = t
    while node is not None:
        piece = node.name
        args = getattr(node, "arguments", None)
        if args:
            piece += "<" + ", ".join(_type_argument_to_str(a) for a in args) + ">"
        parts.append(piece)
        node = getattr(node, "sub_type", None)
    return ".".join(parts) + "[]" * _dims(t)


# ---------------- analyzer ----------------

class EntityAnalyzer:
    def __init__(self, resolver: Optional[TypeResolver] = None) -> None:
        self.resolver = resolver or default_resolver()

    def analyze(self, entity_id: str, source_root: Path) -> EntityDescriptor:
        source_root = Path(source_root)
        path = source_root / entity_relpath(entity_id)
        if not path.is_file():
            raise SourceNotFound(f"Entity source not found: {path}", entity_id=entity_id)

        try:
            tokens = list(CommentTokenizer(read_text(path)).tokenize())
            tree = javalang.parser.Parser(tokens).parse()
        except (javalang.parser.JavaSyntaxError, javalang.tokenizer.LexerError) as e:
            detail = getattr(e, "description", "") or str(e) or type(e).__name__
            raise MalformedSource(f"Cannot parse {path}: {detail}", entity_id=entity_id) from e

        pkg = tree.package.name if tree.package else ""
        expected_pkg, simple = split_entity_id(entity_id)
        decl = next((t for t in tree.types if t.name == simple), None)
        if decl is None:
            raise MalformedSource(f"{path} does not declare {simple}", entity_id=entity_id)
        if pkg != expected_pkg:
            log.warning("%s declares package %r, expected %r", path, pkg, expected_pkg)

        imports: List[Tuple[str, bool]] = [
            (imp.path, bool(imp.wildcard)) for imp in (tree.imports or []) if not imp.static
        ]
        context = context_from_imports(pkg, imports, source_root)
        leading = LeadingComments(tokens)

        fields: List[FieldDescriptor] = []
        for node in decl.body or []:
            if not isinstance(node, javalang.tree.FieldDeclaration):
                continue
            if getattr(node, "modifiers", None) and "static" in node.modifiers:
                continue

            base_type = type_to_str(node.type)
            comment = leading.comment_for(node)
            for d in node.declarators:
                declared = base_type + "[]" * _dims(d)
                resolved = resolve_or_declared(declared, self.resolver, context)
                fields.append(FieldDescriptor(
                    name=d.name,
                    declared_type=declared,
                    resolved_type=resolved,
                    comment=comment,
                    is_primary_key=is_primary_key_name(d.name),
                ))

        entity = EntityDescriptor(
            package_name=pkg,
            class_name=decl.name,
            class_comment=leading.comment_for(decl),
            fields=tuple(fields),
        )
        log.info("Parsed %s (%d field(s))", entity.qualified_name, len(fields))
        return entity
