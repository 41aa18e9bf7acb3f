"""Types referenced by generated code, and small helpers shared by the emitters."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from ..artifact import Annotation, FieldSpec
from ..javatypes import TypeName, class_name
from ..model import EntityDescriptor, FieldDescriptor

# runtime support library shipped next to the generated code
SUPPORT_PKG = "io.github.youngerier.support"
ABSTRACT_PAGE_QUERY = class_name(SUPPORT_PKG, "AbstractPageQuery")
DEFAULT_ORDER_FIELD = class_name(SUPPORT_PKG + ".enums", "DefaultOrderField")
RESPONSE = class_name(SUPPORT_PKG, "Response")
PAGINATION = class_name(SUPPORT_PKG + ".page", "Pagination")
QUERY_WRAPPER_HELPER = class_name(SUPPORT_PKG, "QueryWrapperHelper")

# MyBatis-Flex
BASE_MAPPER = class_name("com.mybatisflex.core", "BaseMapper")
PAGE = class_name("com.mybatisflex.core.paginate", "Page")
QUERY_WRAPPER = class_name("com.mybatisflex.core.query", "QueryWrapper")

# Lombok
DATA = class_name("lombok", "Data")
REQUIRED_ARGS_CONSTRUCTOR = class_name("lombok", "RequiredArgsConstructor")
SLF4J = class_name("lombok.extern.slf4j", "Slf4j")

# MapStruct
MAPSTRUCT_MAPPER = class_name("org.mapstruct", "Mapper")
MAPPERS = class_name("org.mapstruct.factory", "Mappers")

# Spring
SERVICE = class_name("org.springframework.stereotype", "Service")
WEB_PKG = "org.springframework.web.bind.annotation"
REST_CONTROLLER = class_name(WEB_PKG, "RestController")
REQUEST_MAPPING = class_name(WEB_PKG, "RequestMapping")
GET_MAPPING = class_name(WEB_PKG, "GetMapping")
POST_MAPPING = class_name(WEB_PKG, "PostMapping")
PUT_MAPPING = class_name(WEB_PKG, "PutMapping")
DELETE_MAPPING = class_name(WEB_PKG, "DeleteMapping")
REQUEST_BODY = class_name(WEB_PKG, "RequestBody")
PATH_VARIABLE = class_name(WEB_PKG, "PathVariable")

PRIMARY_KEY_NOTE = "Primary key."


def annotation(t: TypeName, value: Optional[str] = None) -> Annotation:
    if value is None:
        return Annotation(t)
    return Annotation(t, (("value", value),))


def java_string(s: str) -> str:
    return '"' + s.replace("\\", "\\\\").replace('"', '\\"') + '"'


def class_doc(entity: EntityDescriptor, role: str) -> str:
    """Entity comment (if any) followed by the artifact's role line."""
    if entity.class_comment:
        return f"{entity.class_comment}\n{role}"
    return role


def field_doc(f: FieldDescriptor, primary_key_note: bool = False) -> str:
    lines = [f.comment] if f.comment else []
    if primary_key_note and f.is_primary_key:
        lines.append(PRIMARY_KEY_NOTE)
    return "\n".join(lines)


def mirror_fields(
    fields: Iterable[FieldDescriptor],
    *,
    primary_key_note: bool = False,
    boxed: bool = False,
) -> Tuple[FieldSpec, ...]:
    out: List[FieldSpec] = []
    for f in fields:
        t = f.type_name.boxed() if boxed else f.type_name
        out.append(FieldSpec(name=f.name, type=t, documentation=field_doc(f, primary_key_note)))
    return tuple(out)
