from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .javatypes import LONG, TypeName, best_guess


def camel(s: str) -> str:
    return s[:1].upper() + s[1:] if s else s


def lower_first(s: str) -> str:
    return s[:1].lower() + s[1:] if s else s


def pluralize(name: str) -> str:
    if name.endswith("y") and len(name) > 1 and name[-2].lower() not in "aeiou":
        return name[:-1] + "ies"
    if name.endswith("s"):
        return name + "es"
    return name + "s"


def is_primary_key_name(name: str) -> bool:
    return name == "id" or name.endswith("Id")


def split_entity_id(entity_id: str) -> Tuple[str, str]:
    """``com.abc.entity.User`` -> (``com.abc.entity``, ``User``)."""
    entity_id = entity_id.strip()
    if "." not in entity_id:
        return "", entity_id
    pkg, name = entity_id.rsplit(".", 1)
    return pkg, name


def is_entity_id(entity_id: str) -> bool:
    """Dotted name with no empty segment: ``com.acme.User`` yes, ``com.acme.`` no."""
    return all(entity_id.strip().split("."))


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    declared_type: str
    resolved_type: str
    comment: str = ""
    is_primary_key: bool = False

    @property
    def type_name(self) -> TypeName:
        try:
            return best_guess(self.resolved_type)
        except ValueError:
            return TypeName("", (self.resolved_type,))

    @property
    def getter(self) -> str:
        # lombok uses isX() only for primitive boolean
        prefix = "is" if self.declared_type.strip() == "boolean" else "get"
        return f"{prefix}{camel(self.name)}"

    @property
    def setter(self) -> str:
        return f"set{camel(self.name)}"


@dataclass(frozen=True)
class EntityDescriptor:
    package_name: str
    class_name: str
    class_comment: str = ""
    fields: Tuple[FieldDescriptor, ...] = field(default_factory=tuple)

    @property
    def qualified_name(self) -> str:
        return f"{self.package_name}.{self.class_name}" if self.package_name else self.class_name

    @property
    def base_package(self) -> str:
        pkg = self.package_name
        return pkg[: pkg.rfind(".")] if "." in pkg else ""

    @property
    def camel_name(self) -> str:
        return lower_first(self.class_name)

    @property
    def type_name(self) -> TypeName:
        pkg, name = split_entity_id(self.qualified_name)
        return TypeName(pkg, (name,))

    @property
    def primary_key(self) -> Optional[FieldDescriptor]:
        for f in self.fields:
            if f.name == "id":
                return f
        for f in self.fields:
            if f.is_primary_key:
                return f
        return None

    @property
    def id_type(self) -> TypeName:
        pk = self.primary_key
        if pk is None:
            return LONG
        t = pk.type_name
        if t.is_collection or t.arguments:
            return LONG
        return t.boxed()

    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)
