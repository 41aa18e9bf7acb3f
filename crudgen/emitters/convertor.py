"""MapStruct convertor between the entity and its data classes."""

from __future__ import annotations

from ..artifact import INTERFACE, ArtifactDescription, FieldSpec, Line, MethodSpec, ParameterSpec
from ..javatypes import LIST, parameterized
from ..layout import ArtifactKind, LayoutConfig
from ..model import EntityDescriptor
from .support import MAPPERS, MAPSTRUCT_MAPPER, annotation, class_doc


def emit_convertor(entity: EntityDescriptor, layout: LayoutConfig) -> ArtifactDescription:
    loc = layout[ArtifactKind.CONVERTOR]
    self_t = loc.type_name
    entity_t = entity.type_name
    dto_t = layout.type_of(ArtifactKind.DTO)
    request_t = layout.type_of(ArtifactKind.REQUEST)
    response_t = layout.type_of(ArtifactKind.RESPONSE)
    entities = ParameterSpec("entities", parameterized(LIST, entity_t))

    def sig(name, param, ret):
        return MethodSpec(name=name, parameters=(param,), return_type=ret, modifiers=())

    instance = FieldSpec(
        "INSTANCE",
        self_t,
        modifiers=(),
        initializer=Line("$T.getMapper($T.class)", (MAPPERS, self_t)),
    )

    return ArtifactDescription(
        kind=INTERFACE,
        artifact=ArtifactKind.CONVERTOR,
        package=loc.package,
        class_name=loc.class_name,
        documentation=class_doc(entity, "Object conversion."),
        annotations=(annotation(MAPSTRUCT_MAPPER),),
        fields=(instance,),
        methods=(
            sig("toDto", ParameterSpec("entity", entity_t), dto_t),
            sig("toEntity", ParameterSpec("dto", dto_t), entity_t),
            sig("toEntity", ParameterSpec("request", request_t), entity_t),
            sig("toResponse", ParameterSpec("entity", entity_t), response_t),
            sig("toDtoList", entities, parameterized(LIST, dto_t)),
            sig("toResponseList", entities, parameterized(LIST, response_t)),
        ),
    )
