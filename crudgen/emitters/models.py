"""DTO, Request, Response and Query: the data classes around an entity."""

from __future__ import annotations

from typing import FrozenSet, Tuple

from ..artifact import CLASS, ArtifactDescription, FieldSpec
from ..javatypes import LOCAL_DATE_TIME, parameterized
from ..layout import ArtifactKind, LayoutConfig
from ..model import EntityDescriptor
from .support import ABSTRACT_PAGE_QUERY, DATA, DEFAULT_ORDER_FIELD, annotation, class_doc, mirror_fields

# server-managed columns, current and legacy names
REQUEST_EXCLUDED: FrozenSet[str] = frozenset({
    "id", "createdAt", "updatedAt",
    "gmtCreate", "gmtModified", "createTime", "updateTime",
})

QUERY_RANGE_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("minCreatedAt", "Created at, lower bound (inclusive)."),
    ("maxCreatedAt", "Created at, upper bound (inclusive)."),
    ("minUpdatedAt", "Updated at, lower bound (inclusive)."),
    ("maxUpdatedAt", "Updated at, upper bound (inclusive)."),
)


def _data_class(entity: EntityDescriptor, layout: LayoutConfig, kind: ArtifactKind, role: str, fields, **extra) -> ArtifactDescription:
    loc = layout[kind]
    return ArtifactDescription(
        kind=CLASS,
        artifact=kind,
        package=loc.package,
        class_name=loc.class_name,
        documentation=class_doc(entity, role),
        annotations=(annotation(DATA),),
        fields=tuple(fields),
        **extra,
    )


def emit_dto(entity: EntityDescriptor, layout: LayoutConfig) -> ArtifactDescription:
    return _data_class(
        entity, layout, ArtifactKind.DTO, "Data transfer object.",
        mirror_fields(entity.fields, primary_key_note=True),
    )


def emit_request(entity: EntityDescriptor, layout: LayoutConfig) -> ArtifactDescription:
    kept = [f for f in entity.fields if f.name not in REQUEST_EXCLUDED]
    return _data_class(
        entity, layout, ArtifactKind.REQUEST, "Create/update request.",
        mirror_fields(kept),
    )


def emit_response(entity: EntityDescriptor, layout: LayoutConfig) -> ArtifactDescription:
    return _data_class(
        entity, layout, ArtifactKind.RESPONSE, "Response object.",
        mirror_fields(entity.fields),
    )


def emit_query(entity: EntityDescriptor, layout: LayoutConfig) -> ArtifactDescription:
    # boxed so an unset filter is null rather than a primitive default
    fields = list(mirror_fields(entity.fields, boxed=True))
    fields.extend(FieldSpec(name=n, type=LOCAL_DATE_TIME, documentation=doc) for n, doc in QUERY_RANGE_FIELDS)
    return _data_class(
        entity, layout, ArtifactKind.QUERY, "Query conditions.",
        fields,
        super_type=parameterized(ABSTRACT_PAGE_QUERY, DEFAULT_ORDER_FIELD),
    )
