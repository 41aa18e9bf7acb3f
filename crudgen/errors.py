"""Error taxonomy for the generator pipeline.

Every failure that aborts one entity's artifact set derives from
GeneratorError, so the engine can isolate it and move on to the next entity.
Type resolution failures are not exceptions: see crudgen.resolver.Unresolved.
"""

from __future__ import annotations

from typing import Optional


class GeneratorError(Exception):
    def __init__(self, message: str, *, entity_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.entity_id = entity_id


class ConfigError(GeneratorError):
    """Invalid or unreadable generator configuration."""


class LocatorNotFound(GeneratorError):
    """No candidate source root contains the entity's file."""


class SourceNotFound(GeneratorError):
    """The entity file does not exist under the given source root."""


class MalformedSource(GeneratorError):
    """The entity file could not be parsed or does not declare the class."""


class InvalidBasePackage(GeneratorError, ValueError):
    """The entity lives in a top-level package, so no base package exists."""


class WriteFailure(GeneratorError):
    """Creating directories or writing an artifact failed."""
