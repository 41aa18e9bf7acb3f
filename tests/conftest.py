"""Shared fixtures: a small Maven-style project on disk and hand-built entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import pytest

from crudgen.layout import LayoutConfig, derive_layout
from crudgen.model import EntityDescriptor, FieldDescriptor, is_primary_key_name

USER_JAVA = """\
package com.acme.entity;

import java.time.LocalDateTime;
import java.util.*;

/**
 * User account.
 *
 * @author someone
 */
public class User {
    private static final long serialVersionUID = 1L;

    /** Primary key */
    private Long id;

    /**
     * Login name.
     */
    private String userName;

    private int age;

    private boolean active;

    private Role role;

    private List<String> tags;

    private Map<String, Address> addresses;

    private byte[] avatar;

    private Long deptId;

    private LocalDateTime createdAt;

    private LocalDateTime updatedAt;
}
"""

ROLE_JAVA = """\
package com.acme.entity;

public enum Role {
    ADMIN,
    MEMBER
}
"""

TAG_JAVA = """\
package com.acme.entity;

import io.github.youngerier.generator.annotation.GenModel;

/**
 * Tag.
 */
@GenModel
public class Tag {
    private Long id;

    /**
     * Tag name.
     */
    private String name;
}
"""

BROKEN_JAVA = """\
package com.acme.entity;

public class Broken {
    private Long id
    private String name;
}
"""


@dataclass
class JavaProject:
    root: Path
    module: str = "app"

    @property
    def module_dir(self) -> Path:
        return self.root / self.module

    @property
    def source_root(self) -> Path:
        return self.module_dir / "src" / "main" / "java"

    def add(self, fqn: str, source: str, source_root: Optional[Path] = None) -> Path:
        pkg, _, name = fqn.rpartition(".")
        path = (source_root or self.source_root).joinpath(*pkg.split("."), f"{name}.java")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return path


@pytest.fixture
def java_project(tmp_path: Path) -> JavaProject:
    proj = JavaProject(tmp_path / "workspace")
    proj.module_dir.mkdir(parents=True)
    (proj.module_dir / "pom.xml").write_text("<project/>\n", encoding="utf-8")
    proj.add("com.acme.entity.User", USER_JAVA)
    proj.add("com.acme.entity.Role", ROLE_JAVA)
    proj.add("com.acme.entity.Tag", TAG_JAVA)
    return proj


def make_field(name: str, declared: str, resolved: Optional[str] = None, comment: str = "") -> FieldDescriptor:
    return FieldDescriptor(
        name=name,
        declared_type=declared,
        resolved_type=resolved or declared,
        comment=comment,
        is_primary_key=is_primary_key_name(name),
    )


@pytest.fixture
def user_entity() -> EntityDescriptor:
    return EntityDescriptor(
        package_name="com.acme.entity",
        class_name="User",
        class_comment="User account.",
        fields=(
            make_field("id", "Long", "java.lang.Long", "Primary key"),
            make_field("userName", "String", "java.lang.String", "Login name."),
            make_field("age", "int"),
            make_field("active", "boolean"),
            make_field("role", "Role", "com.acme.entity.Role"),
            make_field("tags", "List<String>", "java.util.List<java.lang.String>"),
            make_field("addresses", "Map<String, Address>"),
            make_field("avatar", "byte[]"),
            make_field("deptId", "Long", "java.lang.Long"),
            make_field("createdAt", "LocalDateTime", "java.time.LocalDateTime"),
            make_field("updatedAt", "LocalDateTime", "java.time.LocalDateTime"),
        ),
    )


@pytest.fixture
def user_layout(user_entity: EntityDescriptor) -> LayoutConfig:
    return derive_layout(user_entity.base_package, user_entity.class_name)


@pytest.fixture
def field_factory():
    return make_field


@pytest.fixture
def broken_source() -> str:
    return BROKEN_JAVA
