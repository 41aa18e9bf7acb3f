"""Idempotent output writer: renders, hashes, and writes only what changed."""

from __future__ import annotations

import hashlib
import logging
import os
import stat
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .artifact import ArtifactDescription
from .errors import WriteFailure
from .render import render_java_file

log = logging.getLogger(__name__)

SOURCE_SUBTREE = Path("src", "main", "java")


class WriteStatus(Enum):
    WRITTEN = "written"
    SKIPPED = "skipped"
    # dry run: would be written
    PENDING = "pending"


@dataclass(frozen=True)
class WriteResult:
    path: Path
    status: WriteStatus


def sha256_bytes(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def sha256_file(path: Path) -> Optional[str]:
    try:
        with path.open("rb") as f:
            h = hashlib.sha256()
            for chunk in iter(lambda: f.read(65536), b""):
                h.update(chunk)
            return h.hexdigest()
    except FileNotFoundError:
        return None


def new_file_mode() -> int:
    """Mode a plain ``open()`` would give a new file under the current umask."""
    mask = os.umask(0)
    os.umask(mask)
    return 0o666 & ~mask


def target_path(output_root: Path, package: str, class_name: str) -> Path:
    return Path(output_root) / SOURCE_SUBTREE / Path(*package.split(".")) / f"{class_name}.java"


class CodeFileWriter:
    def __init__(self, output_root: Path, dry_run: bool = False) -> None:
        self.output_root = Path(output_root)
        self.dry_run = dry_run
        # umask is process-wide; read it once here, before any worker threads
        self.file_mode = new_file_mode()

    def path_for(self, artifact: ArtifactDescription) -> Path:
        return target_path(self.output_root, artifact.package, artifact.class_name)

    def write(self, artifact: ArtifactDescription) -> WriteResult:
        data = render_java_file(artifact).encode("utf-8")
        path = self.path_for(artifact)

        try:
            existing = sha256_file(path)
        except OSError as e:
            raise WriteFailure(f"Cannot read {path}: {e}") from e

        if existing == sha256_bytes(data):
            log.info("Unchanged, skipped: %s", path)
            return WriteResult(path, WriteStatus.SKIPPED)

        if self.dry_run:
            log.info("Would write: %s", path)
            return WriteResult(path, WriteStatus.PENDING)

        try:
            write_bytes_atomic(path, data, self.file_mode)
        except OSError as e:
            raise WriteFailure(f"Cannot write {path}: {e}") from e
        log.info("Written: %s", path)
        return WriteResult(path, WriteStatus.WRITTEN)


def write_bytes_atomic(path: Path, data: bytes, mode: int = 0o644) -> None:
    """
    Write to a temp file in the target directory, then replace the target.

    An existing target keeps its permission bits; a new one gets ``mode``.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        pass
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp, mode)
        os.replace(tmp, path)
    except BaseException:
        try:
            os.unlink(tmp)
        except FileNotFoundError:
            pass
        raise
