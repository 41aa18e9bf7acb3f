"""Find entity classes marked with ``@GenModel`` in the configured packages."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Set

import javalang

from .analyzer import read_text
from .locator import EXCLUDE_DIRS, MAX_SEARCH_DEPTH, SRC_MAIN_JAVA, walk_dirs

log = logging.getLogger(__name__)

GEN_MODEL = "GenModel"


def iter_java_files(root: Path) -> List[Path]:
    out: List[Path] = []
    for p in Path(root).rglob("*.java"):
        if any(part in EXCLUDE_DIRS for part in p.relative_to(root).parts):
            continue
        out.append(p)
    return sorted(out)


def source_roots(base_dir: Path, max_depth: int = MAX_SEARCH_DEPTH) -> List[Path]:
    return [d for d in walk_dirs(Path(base_dir), max_depth, EXCLUDE_DIRS) if d.parts[-3:] == SRC_MAIN_JAVA.parts]


def in_packages(pkg: str, packages: Iterable[str]) -> bool:
    wanted = [p.strip().strip(".") for p in packages if p and p.strip()]
    if not wanted:
        return True
    return any(pkg == w or pkg.startswith(w + ".") for w in wanted)


def discover_entities(base_dir: Path, packages: Iterable[str] = (), annotation: str = GEN_MODEL) -> List[str]:
    """Fully-qualified names of classes annotated ``@<annotation>``, sorted."""
    packages = list(packages)
    found: Set[str] = set()
    for root in source_roots(base_dir):
        for f in iter_java_files(root):
            txt = read_text(f)
            if f"@{annotation}" not in txt and f".{annotation}" not in txt:
                continue
            try:
                tree = javalang.parse.parse(txt)
            except (javalang.parser.JavaSyntaxError, javalang.tokenizer.LexerError) as e:
                log.warning("Skipping unparseable %s: %s", f, getattr(e, "description", "") or e)
                continue

            pkg = tree.package.name if tree.package else ""
            if not in_packages(pkg, packages):
                continue
            for t in tree.types:
                names = {a.name.rsplit(".", 1)[-1] for a in (getattr(t, "annotations", None) or [])}
                if annotation in names:
                    found.add(f"{pkg}.{t.name}" if pkg else t.name)

    log.debug("Discovered %d @%s class(es) under %s", len(found), annotation, base_dir)
    return sorted(found)
