"""Spring REST controller over the service."""

from __future__ import annotations

from ..artifact import CLASS, Annotation, ArtifactDescription, CodeBlock, FieldSpec, MethodSpec, ParameterSpec
from ..javatypes import LIST, class_name, parameterized
from ..layout import ArtifactKind, LayoutConfig
from ..model import EntityDescriptor, lower_first, pluralize
from .support import (
    DELETE_MAPPING,
    GET_MAPPING,
    PAGINATION,
    PATH_VARIABLE,
    POST_MAPPING,
    PUT_MAPPING,
    REQUEST_BODY,
    REQUEST_MAPPING,
    REQUIRED_ARGS_CONSTRUCTOR,
    REST_CONTROLLER,
    RESPONSE,
    SLF4J,
    annotation,
    class_doc,
    java_string,
)

BOOLEAN_BOX = class_name("java.lang", "Boolean")


def route_name(entity_name: str) -> str:
    return "/" + lower_first(pluralize(entity_name))


def emit_controller(entity: EntityDescriptor, layout: LayoutConfig) -> ArtifactDescription:
    loc = layout[ArtifactKind.CONTROLLER]
    e = entity.class_name
    es = pluralize(e)
    dto_t = layout.type_of(ArtifactKind.DTO)
    query_t = layout.type_of(ArtifactKind.QUERY)
    service_t = layout.type_of(ArtifactKind.SERVICE)
    id_t = entity.id_type
    svc = lower_first(service_t.simple_name)
    dto_var = f"{entity.camel_name}DTO"
    pk = entity.primary_key
    get_id = pk.getter if pk is not None else "getId"

    def body_param(name, t):
        return ParameterSpec(name, t, (Annotation(REQUEST_BODY),))

    id_param = ParameterSpec("id", id_t, (Annotation(PATH_VARIABLE),))

    def endpoint(name, mapping, path, param, doc, log_line, call, result_t):
        block = CodeBlock()
        block.add_statement(log_line)
        block.add_statement(f"$T result = {svc}.{call}", result_t)
        block.add_statement("return $T.ok(result)", RESPONSE)
        return MethodSpec(
            name=name,
            parameters=(param,),
            return_type=parameterized(RESPONSE, result_t),
            annotations=(annotation(mapping, java_string(path) if path else None),),
            documentation=doc,
            body=block.build(),
        )

    list_t = parameterized(LIST, dto_t)
    page_t = parameterized(PAGINATION, dto_t)
    methods = (
        endpoint(
            f"create{e}", POST_MAPPING, None, body_param(dto_var, dto_t),
            f"Create a {e}.",
            f'log.info("Create {e}: {{}}", {dto_var})',
            f"create{e}({dto_var})", dto_t,
        ),
        endpoint(
            f"get{e}ById", GET_MAPPING, "/{id}", id_param,
            f"Get a {e} by id.",
            f'log.info("Get {e} by id: {{}}", id)',
            f"get{e}ById(id)", dto_t,
        ),
        endpoint(
            f"query{es}", POST_MAPPING, "/query", body_param("query", query_t),
            f"List {es} matching the query.",
            f'log.info("Query {es}: {{}}", query)',
            f"query{es}(query)", list_t,
        ),
        endpoint(
            f"pageQuery{es}", POST_MAPPING, "/page", body_param("query", query_t),
            f"Page through {es} matching the query.",
            f'log.info("Page query {es}: {{}}", query)',
            f"pageQuery{es}(query)", page_t,
        ),
        endpoint(
            f"update{e}", PUT_MAPPING, None, body_param(dto_var, dto_t),
            f"Update a {e}; the id is taken from the body.",
            f'log.info("Update {e}: id={{}}, data={{}}", {dto_var}.{get_id}(), {dto_var})',
            f"update{e}({dto_var}.{get_id}(), {dto_var})", dto_t,
        ),
        endpoint(
            f"delete{e}", DELETE_MAPPING, "/{id}", id_param,
            f"Delete a {e}.",
            f'log.info("Delete {e}: id={{}}", id)',
            f"delete{e}(id)", BOOLEAN_BOX,
        ),
    )

    return ArtifactDescription(
        kind=CLASS,
        artifact=ArtifactKind.CONTROLLER,
        package=loc.package,
        class_name=loc.class_name,
        documentation=class_doc(entity, "REST controller."),
        annotations=(
            annotation(REST_CONTROLLER),
            annotation(REQUEST_MAPPING, java_string(route_name(e))),
            annotation(REQUIRED_ARGS_CONSTRUCTOR),
            annotation(SLF4J),
        ),
        fields=(FieldSpec(svc, service_t, modifiers=("private", "final")),),
        methods=methods,
    )
