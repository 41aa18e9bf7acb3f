"""Service interface and its implementation."""

from __future__ import annotations

from typing import Tuple

from ..artifact import CLASS, INTERFACE, Annotation, ArtifactDescription, CodeBlock, FieldSpec, Line, MethodSpec, ParameterSpec, code
from ..javatypes import BOOLEAN, LIST, OVERRIDE, parameterized
from ..layout import ArtifactKind, LayoutConfig
from ..model import EntityDescriptor, lower_first, pluralize
from .support import PAGE, PAGINATION, SERVICE, annotation, class_doc


def _signatures(entity: EntityDescriptor, layout: LayoutConfig) -> Tuple[MethodSpec, ...]:
    """The six service operations, abstract, in declaration order."""
    e = entity.class_name
    es = pluralize(e)
    dto_t = layout.type_of(ArtifactKind.DTO)
    query_t = layout.type_of(ArtifactKind.QUERY)
    id_t = entity.id_type
    dto_var = f"{entity.camel_name}DTO"

    def m(name, params, ret, doc):
        return MethodSpec(name=name, parameters=tuple(params), return_type=ret, modifiers=(), documentation=doc)

    return (
        m(f"create{e}", [ParameterSpec(dto_var, dto_t)], dto_t, f"Create a {e}."),
        m(f"get{e}ById", [ParameterSpec("id", id_t)], dto_t, f"Get a {e} by id, or null."),
        m(f"query{es}", [ParameterSpec("query", query_t)], parameterized(LIST, dto_t), f"List {es} matching the query."),
        m(f"pageQuery{es}", [ParameterSpec("query", query_t)], parameterized(PAGINATION, dto_t), f"Page through {es} matching the query."),
        m(f"update{e}", [ParameterSpec("id", id_t), ParameterSpec(dto_var, dto_t)], dto_t, f"Update a {e}; null when it does not exist."),
        m(f"delete{e}", [ParameterSpec("id", id_t)], BOOLEAN, f"Delete a {e}; true when a row was removed."),
    )


def emit_service(entity: EntityDescriptor, layout: LayoutConfig) -> ArtifactDescription:
    loc = layout[ArtifactKind.SERVICE]
    return ArtifactDescription(
        kind=INTERFACE,
        artifact=ArtifactKind.SERVICE,
        package=loc.package,
        class_name=loc.class_name,
        documentation=class_doc(entity, "Service."),
        methods=_signatures(entity, layout),
    )


def emit_service_impl(entity: EntityDescriptor, layout: LayoutConfig) -> ArtifactDescription:
    loc = layout[ArtifactKind.SERVICE_IMPL]
    entity_t = entity.type_name
    dto_t = layout.type_of(ArtifactKind.DTO)
    repo_t = layout.type_of(ArtifactKind.REPOSITORY)
    conv_t = layout.type_of(ArtifactKind.CONVERTOR)

    repo = lower_first(repo_t.simple_name)
    conv = lower_first(conv_t.simple_name)
    var = entity.camel_name
    many = lower_first(pluralize(entity.class_name))
    dto_var = f"{var}DTO"
    pk = entity.primary_key
    set_id = pk.setter if pk is not None else "setId"

    fields = (
        FieldSpec(repo, repo_t, modifiers=("private", "final")),
        FieldSpec(conv, conv_t, modifiers=("private", "final"), initializer=Line("$T.INSTANCE", (conv_t,))),
    )

    ctor = MethodSpec(
        name=loc.class_name,
        parameters=(ParameterSpec(repo, repo_t),),
        is_constructor=True,
        body=code(f"this.{repo} = {repo};"),
    )

    create = (CodeBlock()
              .add_statement(f"$T {var} = {conv}.toEntity({dto_var})", entity_t)
              .add_statement(f"{repo}.insert({var})")
              .add_statement(f"return {conv}.toDto({var})"))
    get = (CodeBlock()
           .add_statement(f"$T {var} = {repo}.selectOneById(id)", entity_t)
           .add_statement(f"return {conv}.toDto({var})"))
    query = (CodeBlock()
             .add_statement(f"$T<$T> {many} = {repo}.listByQuery(query)", LIST, entity_t)
             .add_statement(f"return {conv}.toDtoList({many})"))
    page = (CodeBlock()
            .add_statement(f"$T<$T> page = {repo}.page(query).map({conv}::toDto)", PAGE, dto_t)
            .add_statement("return $T.of(page.getRecords(), query, page.getTotalRow())", PAGINATION))
    update = (CodeBlock()
              .add_statement(f"$T existing = {repo}.selectOneById(id)", entity_t)
              .begin_control_flow("if (existing == null)")
              .add_statement("return null")
              .end_control_flow()
              .add_statement(f"$T {var} = {conv}.toEntity({dto_var})", entity_t)
              .add_statement(f"{var}.{set_id}(id)")
              .add_statement(f"{repo}.update({var})")
              .add_statement(f"return {conv}.toDto({var})"))
    delete = CodeBlock().add_statement(f"return {repo}.deleteById(id) > 0")

    bodies = (create, get, query, page, update, delete)
    overrides = tuple(
        MethodSpec(
            name=sig.name,
            parameters=sig.parameters,
            return_type=sig.return_type,
            modifiers=("public",),
            annotations=(Annotation(OVERRIDE),),
            body=body.build(),
        )
        for sig, body in zip(_signatures(entity, layout), bodies)
    )

    return ArtifactDescription(
        kind=CLASS,
        artifact=ArtifactKind.SERVICE_IMPL,
        package=loc.package,
        class_name=loc.class_name,
        documentation=class_doc(entity, "Service implementation."),
        annotations=(annotation(SERVICE),),
        super_interfaces=(layout.type_of(ArtifactKind.SERVICE),),
        fields=fields,
        methods=(ctor,) + overrides,
    )
