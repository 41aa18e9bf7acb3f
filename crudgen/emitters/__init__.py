"""One pure emitter per artifact kind: ``emit(entity, layout) -> ArtifactDescription``."""

from __future__ import annotations

from typing import Callable, List, Tuple

from ..artifact import ArtifactDescription
from ..layout import ArtifactKind, LayoutConfig
from ..model import EntityDescriptor
from .controller import emit_controller
from .convertor import emit_convertor
from .dal import emit_repository
from .models import emit_dto, emit_query, emit_request, emit_response
from .service import emit_service, emit_service_impl

Emitter = Callable[[EntityDescriptor, LayoutConfig], ArtifactDescription]

EMITTERS: Tuple[Tuple[ArtifactKind, Emitter], ...] = (
    (ArtifactKind.DTO, emit_dto),
    (ArtifactKind.REQUEST, emit_request),
    (ArtifactKind.RESPONSE, emit_response),
    (ArtifactKind.QUERY, emit_query),
    (ArtifactKind.REPOSITORY, emit_repository),
    (ArtifactKind.SERVICE, emit_service),
    (ArtifactKind.SERVICE_IMPL, emit_service_impl),
    (ArtifactKind.CONVERTOR, emit_convertor),
    (ArtifactKind.CONTROLLER, emit_controller),
)


def emit_all(entity: EntityDescriptor, layout: LayoutConfig) -> List[ArtifactDescription]:
    return [emit(entity, layout) for _, emit in EMITTERS]


__all__ = [
    "EMITTERS",
    "Emitter",
    "emit_all",
    "emit_controller",
    "emit_convertor",
    "emit_dto",
    "emit_query",
    "emit_repository",
    "emit_request",
    "emit_response",
    "emit_service",
    "emit_service_impl",
]
