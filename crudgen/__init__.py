"""crudgen: CRUD layer generator for Java entity classes."""

from .analyzer import EntityAnalyzer
from .config import GeneratorConfig, load_config
from .engine import EntityReport, GeneratorEngine, RunSummary
from .errors import (
    ConfigError,
    GeneratorError,
    InvalidBasePackage,
    LocatorNotFound,
    MalformedSource,
    SourceNotFound,
    WriteFailure,
)
from .layout import ArtifactKind, LayoutConfig, derive_layout
from .locator import SourceLocator
from .model import EntityDescriptor, FieldDescriptor
from .writer import CodeFileWriter, WriteResult, WriteStatus

__all__ = [
    "ArtifactKind",
    "CodeFileWriter",
    "ConfigError",
    "EntityAnalyzer",
    "EntityDescriptor",
    "EntityReport",
    "FieldDescriptor",
    "GeneratorConfig",
    "GeneratorEngine",
    "GeneratorError",
    "InvalidBasePackage",
    "LayoutConfig",
    "LocatorNotFound",
    "MalformedSource",
    "RunSummary",
    "SourceLocator",
    "SourceNotFound",
    "WriteFailure",
    "WriteResult",
    "WriteStatus",
    "derive_layout",
    "load_config",
]
