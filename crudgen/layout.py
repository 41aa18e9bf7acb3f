"""Package and class naming for one entity's artifact set."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Tuple

from .errors import InvalidBasePackage
from .javatypes import TypeName


class ArtifactKind(Enum):
    DTO = "dto"
    REQUEST = "request"
    RESPONSE = "response"
    QUERY = "query"
    REPOSITORY = "repository"
    SERVICE = "service"
    SERVICE_IMPL = "service_impl"
    CONVERTOR = "convertor"
    CONTROLLER = "controller"


# kind -> (package suffix, class name suffix)
LAYOUT_RULES: Dict[ArtifactKind, Tuple[str, str]] = {
    ArtifactKind.DTO: (".model.dto", "DTO"),
    ArtifactKind.REQUEST: (".model.request", "Request"),
    ArtifactKind.RESPONSE: (".model.response", "Response"),
    ArtifactKind.QUERY: (".model.request", "Query"),
    ArtifactKind.REPOSITORY: (".dal.repository", "Repository"),
    ArtifactKind.SERVICE: (".service", "Service"),
    ArtifactKind.SERVICE_IMPL: (".service.impl", "ServiceImpl"),
    ArtifactKind.CONVERTOR: (".convertor", "Convertor"),
    ArtifactKind.CONTROLLER: (".controller", "Controller"),
}


@dataclass(frozen=True)
class ArtifactLocation:
    package: str
    class_name: str

    @property
    def qualified_name(self) -> str:
        return f"{self.package}.{self.class_name}"

    @property
    def type_name(self) -> TypeName:
        return TypeName(self.package, (self.class_name,))


@dataclass(frozen=True)
class LayoutConfig:
    base_package: str
    entity_name: str
    locations: Tuple[Tuple[ArtifactKind, ArtifactLocation], ...]

    def __getitem__(self, kind: ArtifactKind) -> ArtifactLocation:
        for k, loc in self.locations:
            if k is kind:
                return loc
        raise KeyError(kind)

    def __iter__(self) -> Iterator[Tuple[ArtifactKind, ArtifactLocation]]:
        return iter(self.locations)

    def type_of(self, kind: ArtifactKind) -> TypeName:
        return self[kind].type_name


def derive_layout(base_package: str, entity_name: str) -> LayoutConfig:
    base = (base_package or "").strip().strip(".")
    if not base:
        raise InvalidBasePackage(f"Empty base package for entity {entity_name!r}")
    if not entity_name:
        raise ValueError("Empty entity name")

    locations = tuple(
        (kind, ArtifactLocation(base + pkg_suffix, entity_name + name_suffix))
        for kind, (pkg_suffix, name_suffix) in LAYOUT_RULES.items()
    )
    return LayoutConfig(base, entity_name, locations)
