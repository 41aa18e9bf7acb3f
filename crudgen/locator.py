"""Locate the source root (``.../src/main/java``) that holds an entity's file."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from .errors import ConfigError, LocatorNotFound
from .model import is_entity_id, split_entity_id

log = logging.getLogger(__name__)

SRC_MAIN_JAVA = Path("src", "main", "java")
PROJECT_MARKERS = ("pom.xml", "build.gradle", "build.gradle.kts")

EXCLUDE_DIRS = {
    ".crudgen",
    ".git", ".idea", ".vscode",
    "target", "build", "out", ".gradle",
    "node_modules", "__pycache__", ".mvn",
    ".venv", "venv", ".tox",
}

MAX_SEARCH_DEPTH = 6
FALLBACK_SEARCH_DEPTH = 4


def entity_relpath(entity_id: str) -> Path:
    pkg, name = split_entity_id(entity_id)
    if not is_entity_id(entity_id):
        raise ConfigError(f"Not a class name: {entity_id!r}", entity_id=entity_id)
    rel = Path(*pkg.split(".")) if pkg else Path()
    return rel / f"{name}.java"


def walk_dirs(root: Path, max_depth: int, exclude: Optional[set] = None) -> Iterator[Path]:
    """Yield directories under ``root`` (root included) down to ``max_depth``, sorted."""
    root = Path(root)
    base_depth = len(root.parts)
    for dirpath, dirnames, _ in os.walk(root):
        here = Path(dirpath)
        depth = len(here.parts) - base_depth
        if exclude:
            dirnames[:] = [d for d in dirnames if d not in exclude]
        dirnames.sort()
        if depth >= max_depth:
            dirnames[:] = []
        yield here


def has_project_marker(path: Path) -> bool:
    return any((path / m).is_file() for m in PROJECT_MARKERS)


def module_dir_of(source_root: Path) -> Path:
    """``<module>/src/main/java`` -> ``<module>``."""
    return source_root.parent.parent.parent


class SourceLocator:
    """
    Finds the source root containing an entity, trying in order:

    1. a reverse search of the working tree for ``src/main/java`` roots holding
       the file, preferring roots of a real module (project marker present and,
       if a module hint is set, named after it);
    2. conventional module paths relative to the working directory;
    3. a shallower, unfiltered walk for any ``src/**/java`` directory.
    """

    def __init__(
        self,
        base_dir: Optional[Path] = None,
        *,
        max_depth: int = MAX_SEARCH_DEPTH,
        fallback_depth: int = FALLBACK_SEARCH_DEPTH,
    ) -> None:
        self.base_dir = Path(base_dir or Path.cwd()).resolve()
        self.max_depth = max_depth
        self.fallback_depth = fallback_depth

    def locate(self, entity_id: str, module_hint: str = "") -> Path:
        rel = entity_relpath(entity_id)
        module_hint = (module_hint or "").strip()

        for strategy, root in self._candidates(rel, module_hint):
            if (root / rel).is_file():
                log.debug("Located %s via %s: %s", entity_id, strategy, root)
                return root
            log.debug("Rejected candidate for %s (%s): %s", entity_id, strategy, root)

        raise LocatorNotFound(
            f"Source file {rel.as_posix()} not found from {self.base_dir} (module={module_hint or '-'})",
            entity_id=entity_id,
        )

    def _candidates(self, rel: Path, module_hint: str) -> Iterator[Tuple[str, Path]]:
        hit = self._reverse_search(rel, module_hint)
        if hit is not None:
            yield "reverse-search", hit

        for root in self._conventional_roots(module_hint):
            yield "conventional", root

        for root in self._fallback_roots(rel):
            yield "fallback", root

    def _reverse_search(self, rel: Path, module_hint: str) -> Optional[Path]:
        raw: List[Path] = []
        for d in walk_dirs(self.base_dir, self.max_depth, EXCLUDE_DIRS):
            if d.parts[-3:] != SRC_MAIN_JAVA.parts:
                continue
            if (d / rel).is_file():
                raw.append(d)
        if not raw:
            return None
        for root in raw:
            module_dir = module_dir_of(root)
            if not has_project_marker(module_dir):
                continue
            if module_hint and module_dir.name != module_hint:
                continue
            return root
        return raw[0]

    def _conventional_roots(self, module_hint: str) -> List[Path]:
        cwd = self.base_dir
        roots = [cwd / SRC_MAIN_JAVA]
        if module_hint:
            roots += [
                cwd / module_hint / SRC_MAIN_JAVA,
                cwd.parent / module_hint / SRC_MAIN_JAVA,
                cwd.parent.parent / module_hint / SRC_MAIN_JAVA,
            ]
        seen = set()
        out = []
        for r in roots:
            if r not in seen:
                seen.add(r)
                out.append(r)
        return out

    def _fallback_roots(self, rel: Path) -> Iterator[Path]:
        for d in walk_dirs(self.base_dir, self.fallback_depth):
            if d.name != "java" or "src" not in d.parts:
                continue
            if (d / rel).is_file():
                yield d
