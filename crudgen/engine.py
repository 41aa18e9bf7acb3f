"""
Per-entity pipeline: locate -> analyze -> layout -> emit all -> write all.

Each entity is isolated: a GeneratorError aborts that entity only, is logged
with its id, and the run moves on. Every emitter runs before the first write,
so an emitter failure leaves no output behind.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .analyzer import EntityAnalyzer
from .artifact import ArtifactDescription
from .config import GeneratorConfig
from .discovery import discover_entities
from .emitters import EMITTERS
from .errors import GeneratorError
from .layout import derive_layout
from .locator import SourceLocator
from .model import EntityDescriptor
from .writer import CodeFileWriter, WriteResult, WriteStatus

log = logging.getLogger(__name__)


@dataclass
class EntityReport:
    entity_id: str
    results: List[WriteResult] = field(default_factory=list)
    error: Optional[GeneratorError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def count(self, status: WriteStatus) -> int:
        return sum(1 for r in self.results if r.status is status)

    @property
    def written(self) -> int:
        return self.count(WriteStatus.WRITTEN)

    @property
    def skipped(self) -> int:
        return self.count(WriteStatus.SKIPPED)

    @property
    def pending(self) -> int:
        return self.count(WriteStatus.PENDING)


@dataclass
class RunSummary:
    reports: List[EntityReport] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return sum(1 for r in self.reports if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.reports if not r.ok)

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def report(self, entity_id: str) -> EntityReport:
        for r in self.reports:
            if r.entity_id == entity_id:
                return r
        raise KeyError(entity_id)


class GeneratorEngine:
    def __init__(
        self,
        config: GeneratorConfig,
        locator: Optional[SourceLocator] = None,
        analyzer: Optional[EntityAnalyzer] = None,
        writer: Optional[CodeFileWriter] = None,
    ) -> None:
        self.config = config
        self.locator = locator or SourceLocator(config.base_dir)
        self.analyzer = analyzer or EntityAnalyzer()
        self.writer = writer or CodeFileWriter(Path(config.output_root), dry_run=config.dry_run)

    def entity_ids(self) -> List[str]:
        """Configured ids first, then discovered ones not already listed."""
        ids: List[str] = []
        for eid in self.config.entity_ids:
            eid = eid.strip()
            if eid and eid not in ids:
                ids.append(eid)
        if self.config.scan_packages:
            for eid in discover_entities(self.locator.base_dir, self.config.scan_packages):
                if eid not in ids:
                    ids.append(eid)
        return ids

    def analyze(self, entity_id: str) -> EntityDescriptor:
        source_root = self.locator.locate(entity_id, self.config.module_hint)
        return self.analyzer.analyze(entity_id, source_root)

    def generate(self, entity: EntityDescriptor) -> List[ArtifactDescription]:
        layout = derive_layout(entity.base_package, entity.class_name)
        artifacts: List[ArtifactDescription] = []
        for kind, emit in EMITTERS:
            try:
                artifacts.append(emit(entity, layout))
            except GeneratorError:
                raise
            except Exception as e:
                raise GeneratorError(f"{kind.value} emitter failed: {e}") from e
        return artifacts

    def process(self, entity_id: str) -> EntityReport:
        report = EntityReport(entity_id)
        try:
            entity = self.analyze(entity_id)
            for artifact in self.generate(entity):
                report.results.append(self.writer.write(artifact))
        except GeneratorError as e:
            if e.entity_id is None:
                e.entity_id = entity_id
            report.error = e
            log.error("%s: %s", entity_id, e)
        return report

    def run(self) -> RunSummary:
        ids = self.entity_ids()
        if not ids:
            log.warning("No entities configured or discovered.")
            return RunSummary()

        if self.config.workers > 1 and len(ids) > 1:
            with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
                reports = list(pool.map(self.process, ids))
        else:
            reports = [self.process(eid) for eid in ids]

        summary = RunSummary(reports)
        log.info("Done: %d processed, %d failed", summary.processed, summary.failed)
        return summary
