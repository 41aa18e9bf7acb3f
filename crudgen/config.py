"""Generator configuration and the ``crudgen.json`` loader."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import ConfigError
from .model import is_entity_id

DEFAULT_CONFIG_FILE = "crudgen.json"

# JSON key -> (attribute, expected type)
_KEYS = {
    "moduleHint": ("module_hint", str),
    "outputRoot": ("output_root", str),
    "entityIds": ("entity_ids", list),
    "scanPackages": ("scan_packages", list),
    "baseDir": ("base_dir", str),
    "workers": ("workers", int),
    "dryRun": ("dry_run", bool),
}


@dataclass
class GeneratorConfig:
    module_hint: str = ""
    output_root: Path = Path(".")
    entity_ids: List[str] = field(default_factory=list)
    scan_packages: List[str] = field(default_factory=list)
    base_dir: Optional[Path] = None
    workers: int = 1
    dry_run: bool = False

    def validate(self) -> "GeneratorConfig":
        if self.workers < 1:
            raise ConfigError(f"workers must be >= 1, got {self.workers}")
        for eid in self.entity_ids:
            if not isinstance(eid, str) or not is_entity_id(eid):
                raise ConfigError(f"Invalid entity id: {eid!r}")
        return self

    def merged(self, **overrides: Any) -> "GeneratorConfig":
        """Copy with every override that is not None applied (CLI flags over file values)."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


def config_from_dict(raw: Dict[str, Any], *, relative_to: Optional[Path] = None) -> GeneratorConfig:
    if not isinstance(raw, dict):
        raise ConfigError("Configuration must be a JSON object")

    values: Dict[str, Any] = {}
    for key, value in raw.items():
        if key not in _KEYS:
            raise ConfigError(f"Unknown configuration key: {key}")
        attr, expected = _KEYS[key]
        # bool is an int subclass; keep "workers": true out
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ConfigError(f"{key} must be of type {expected.__name__}, got {type(value).__name__}")
        if expected is list and not all(isinstance(x, str) for x in value):
            raise ConfigError(f"{key} must be a list of strings")
        values[attr] = value

    for attr in ("output_root", "base_dir"):
        if attr in values:
            p = Path(values[attr]).expanduser()
            if relative_to is not None and not p.is_absolute():
                p = relative_to / p
            values[attr] = p

    return GeneratorConfig(**values).validate()


def load_config(path: Path) -> GeneratorConfig:
    """Load a JSON config; relative paths inside it are relative to the file."""
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    return config_from_dict(raw, relative_to=path.resolve().parent)
