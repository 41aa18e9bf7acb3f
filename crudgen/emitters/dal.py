"""Repository: MyBatis-Flex mapper interface with query-driven default methods."""

from __future__ import annotations

from typing import List

from ..artifact import INTERFACE, ArtifactDescription, CodeBlock, MethodSpec, ParameterSpec
from ..javatypes import LIST, TypeName, class_name, parameterized
from ..layout import ArtifactKind, LayoutConfig
from ..model import EntityDescriptor, lower_first
from ..predicates import QueryPlan, build_query_plan
from .support import BASE_MAPPER, PAGE, QUERY_WRAPPER, QUERY_WRAPPER_HELPER, class_doc


def table_refs_type(entity: EntityDescriptor) -> TypeName:
    """``com.x.entity.User`` -> ``com.x.entity.table.UserTableRefs``."""
    pkg = f"{entity.package_name}.table" if entity.package_name else "table"
    return class_name(pkg, f"{entity.class_name}TableRefs")


def query_wrapper_block(block: CodeBlock, plan: QueryPlan, refs: TypeName, refs_var: str) -> CodeBlock:
    """Append the QueryWrapper construction and ordering for ``plan`` to ``block``."""
    static_field = lower_first(refs.simple_name[: -len("TableRefs")])
    block.add_statement(f"$T {refs_var} = $T.{static_field}", refs, refs)

    chain: List[str] = [f".from({refs_var})"]
    for i, p in enumerate(plan.predicates):
        verb = "where" if i == 0 else "and"
        chain.append(f".{verb}({p.render(refs_var)})")
    chain[-1] += ";"

    block.add("$T queryWrapper = $T.create()", QUERY_WRAPPER, QUERY_WRAPPER)
    block.indent(2)
    for link in chain:
        block.add(link)
    block.unindent(2)

    block.begin_control_flow("if (query.requireOrderBy())")
    block.add_statement("$T.applyOrder(queryWrapper, query)", QUERY_WRAPPER_HELPER)
    if plan.ordering.has_default:
        block.next_control_flow("else")
        block.add_statement(f"queryWrapper.orderBy({refs_var}.{plan.ordering.primary_key}.desc())")
    block.end_control_flow()
    return block


def emit_repository(entity: EntityDescriptor, layout: LayoutConfig) -> ArtifactDescription:
    loc = layout[ArtifactKind.REPOSITORY]
    entity_t = entity.type_name
    query_t = layout.type_of(ArtifactKind.QUERY)
    refs = table_refs_type(entity)
    refs_var = f"{entity.camel_name}TableRefs"
    plan = build_query_plan(entity)
    query_param = (ParameterSpec("query", query_t),)

    list_body = query_wrapper_block(CodeBlock(), plan, refs, refs_var)
    list_body.add_statement("return selectListByQuery(queryWrapper)")

    page_body = CodeBlock()
    page_body.add_statement(
        "$T<$T> page = new $T<>(query.getQueryPage(), query.getQuerySize())",
        PAGE, entity_t, PAGE,
    )
    query_wrapper_block(page_body, plan, refs, refs_var)
    page_body.add_statement("return paginate(page, queryWrapper)")

    methods = (
        MethodSpec(
            name="listByQuery",
            parameters=query_param,
            return_type=parameterized(LIST, entity_t),
            modifiers=("default",),
            documentation=f"List {entity.class_name} records matching the query.",
            body=list_body.build(),
        ),
        MethodSpec(
            name="page",
            parameters=query_param,
            return_type=parameterized(PAGE, entity_t),
            modifiers=("default",),
            documentation=f"Page through {entity.class_name} records matching the query.",
            body=page_body.build(),
        ),
    )

    return ArtifactDescription(
        kind=INTERFACE,
        artifact=ArtifactKind.REPOSITORY,
        package=loc.package,
        class_name=loc.class_name,
        documentation=class_doc(entity, "Data access."),
        super_interfaces=(parameterized(BASE_MAPPER, entity_t),),
        methods=methods,
    )
