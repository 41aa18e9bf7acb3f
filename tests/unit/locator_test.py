"""Unit tests for source root discovery."""

from pathlib import Path

import pytest

from crudgen.errors import ConfigError, LocatorNotFound
from crudgen.locator import SourceLocator, entity_relpath

USER = "com.acme.entity.User"
SOURCE = "package com.acme.entity;\npublic class User {}\n"


def _root(p: Path) -> Path:
    return p.resolve()


def test_entity_relpath() -> None:
    assert entity_relpath(USER) == Path("com", "acme", "entity", "User.java")


@pytest.mark.parametrize("bad", ["com.acme.entity.", "com..User", ".User", ""])
def test_entity_relpath_rejects_empty_segments(bad: str) -> None:
    with pytest.raises(ConfigError):
        entity_relpath(bad)


def test_reverse_search_finds_module_root(java_project) -> None:
    root = SourceLocator(java_project.root).locate(USER, "app")
    assert root == _root(java_project.source_root)


def test_prefers_root_with_project_marker(java_project) -> None:
    """A copy without pom.xml sorts first but loses to the real module."""
    decoy = java_project.root / "aaa" / "src" / "main" / "java"
    java_project.add(USER, SOURCE, source_root=decoy)
    root = SourceLocator(java_project.root).locate(USER)
    assert root == _root(java_project.source_root)


def test_module_hint_selects_named_module(java_project) -> None:
    web = java_project.root / "web"
    web.mkdir()
    (web / "pom.xml").write_text("<project/>\n", encoding="utf-8")
    java_project.add(USER, SOURCE, source_root=web / "src" / "main" / "java")

    assert SourceLocator(java_project.root).locate(USER, "web") == _root(web / "src" / "main" / "java")
    assert SourceLocator(java_project.root).locate(USER, "app") == _root(java_project.source_root)


def test_accepts_raw_hit_without_marker(tmp_path: Path) -> None:
    root = tmp_path / "loose" / "src" / "main" / "java"
    (root / "com" / "acme" / "entity").mkdir(parents=True)
    (root / "com" / "acme" / "entity" / "User.java").write_text(SOURCE, encoding="utf-8")
    assert SourceLocator(tmp_path).locate(USER) == _root(root)


def test_conventional_sibling_module(java_project) -> None:
    """Running from a sibling directory still finds ../<module>/src/main/java."""
    tools = java_project.root / "tools"
    tools.mkdir()
    assert SourceLocator(tools).locate(USER, "app") == _root(java_project.source_root)


def test_fallback_finds_non_standard_layout(tmp_path: Path) -> None:
    root = tmp_path / "legacy" / "src" / "java"
    (root / "com" / "acme" / "entity").mkdir(parents=True)
    (root / "com" / "acme" / "entity" / "User.java").write_text(SOURCE, encoding="utf-8")
    assert SourceLocator(tmp_path).locate(USER) == _root(root)


def test_fallback_searches_excluded_directories(tmp_path: Path) -> None:
    root = tmp_path / "build" / "src" / "main" / "java"
    (root / "com" / "acme" / "entity").mkdir(parents=True)
    (root / "com" / "acme" / "entity" / "User.java").write_text(SOURCE, encoding="utf-8")
    assert SourceLocator(tmp_path).locate(USER) == _root(root)


def test_not_found(java_project) -> None:
    with pytest.raises(LocatorNotFound) as exc:
        SourceLocator(java_project.root).locate("com.acme.entity.Missing", "app")
    assert exc.value.entity_id == "com.acme.entity.Missing"
