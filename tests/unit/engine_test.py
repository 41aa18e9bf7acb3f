"""Unit tests for the per-entity pipeline."""

from pathlib import Path

import pytest

from crudgen import engine as engine_mod
from crudgen.config import GeneratorConfig
from crudgen.engine import GeneratorEngine
from crudgen.errors import ConfigError, GeneratorError, LocatorNotFound, MalformedSource
from crudgen.layout import ArtifactKind
from crudgen.writer import WriteStatus

USER = "com.acme.entity.User"
TAG = "com.acme.entity.Tag"
BROKEN = "com.acme.entity.Broken"


def _config(java_project, out: Path, *ids: str, **kw) -> GeneratorConfig:
    return GeneratorConfig(module_hint="app", output_root=out, entity_ids=list(ids), base_dir=java_project.root, **kw)


def _java_files(out: Path):
    return sorted(p.relative_to(out).as_posix() for p in out.rglob("*.java"))


def test_generates_full_artifact_set(java_project, tmp_path: Path) -> None:
    out = tmp_path / "out"
    summary = GeneratorEngine(_config(java_project, out, USER)).run()
    assert summary.ok
    report = summary.report(USER)
    assert report.written == len(ArtifactKind)
    assert _java_files(out) == sorted([
        "src/main/java/com/acme/controller/UserController.java",
        "src/main/java/com/acme/convertor/UserConvertor.java",
        "src/main/java/com/acme/dal/repository/UserRepository.java",
        "src/main/java/com/acme/model/dto/UserDTO.java",
        "src/main/java/com/acme/model/request/UserQuery.java",
        "src/main/java/com/acme/model/request/UserRequest.java",
        "src/main/java/com/acme/model/response/UserResponse.java",
        "src/main/java/com/acme/service/UserService.java",
        "src/main/java/com/acme/service/impl/UserServiceImpl.java",
    ])


def test_second_run_skips_everything(java_project, tmp_path: Path) -> None:
    out = tmp_path / "out"
    GeneratorEngine(_config(java_project, out, USER)).run()
    summary = GeneratorEngine(_config(java_project, out, USER)).run()
    report = summary.report(USER)
    assert report.skipped == len(ArtifactKind)
    assert report.written == 0
    assert all(r.status is WriteStatus.SKIPPED for r in report.results)


def test_continues_after_a_failing_entity(java_project, tmp_path: Path, broken_source: str) -> None:
    """Three entities, the second malformed: the first and third are fully generated."""
    java_project.add(BROKEN, broken_source)
    out = tmp_path / "out"
    summary = GeneratorEngine(_config(java_project, out, USER, BROKEN, TAG)).run()

    assert [r.entity_id for r in summary.reports] == [USER, BROKEN, TAG]
    assert summary.processed == 2
    assert summary.failed == 1
    assert not summary.ok

    failed = summary.report(BROKEN)
    assert isinstance(failed.error, MalformedSource)
    assert failed.error.entity_id == BROKEN
    assert failed.results == []

    assert summary.report(USER).written == len(ArtifactKind)
    assert summary.report(TAG).written == len(ArtifactKind)
    assert not list(out.rglob("Broken*.java"))


def test_missing_entity_is_reported(java_project, tmp_path: Path) -> None:
    summary = GeneratorEngine(_config(java_project, tmp_path / "out", "com.acme.entity.Ghost")).run()
    err = summary.report("com.acme.entity.Ghost").error
    assert isinstance(err, LocatorNotFound)
    assert err.entity_id == "com.acme.entity.Ghost"


def test_malformed_id_does_not_stop_the_batch(java_project, tmp_path: Path) -> None:
    """An id with an empty segment fails on its own; the next entity is still generated."""
    bad = "com.acme.entity."
    summary = GeneratorEngine(_config(java_project, tmp_path / "out", bad, USER)).run()
    assert isinstance(summary.report(bad).error, ConfigError)
    assert summary.report(bad).error.entity_id == bad
    assert summary.report(USER).written == len(ArtifactKind)
    assert summary.failed == 1


def test_emitter_failure_writes_nothing(java_project, tmp_path: Path, monkeypatch) -> None:
    def explode(entity, layout):
        raise RuntimeError("bad template")

    emitters = list(engine_mod.EMITTERS)
    emitters[-1] = (emitters[-1][0], explode)
    monkeypatch.setattr(engine_mod, "EMITTERS", tuple(emitters))

    out = tmp_path / "out"
    summary = GeneratorEngine(_config(java_project, out, USER)).run()
    err = summary.report(USER).error
    assert isinstance(err, GeneratorError)
    assert "bad template" in str(err)
    assert not out.exists()


def test_dry_run(java_project, tmp_path: Path) -> None:
    out = tmp_path / "out"
    summary = GeneratorEngine(_config(java_project, out, USER, dry_run=True)).run()
    assert summary.report(USER).pending == len(ArtifactKind)
    assert not out.exists()


def test_parallel_workers_keep_order(java_project, tmp_path: Path, broken_source: str) -> None:
    java_project.add(BROKEN, broken_source)
    out = tmp_path / "out"
    summary = GeneratorEngine(_config(java_project, out, TAG, BROKEN, USER, workers=3)).run()
    assert [r.entity_id for r in summary.reports] == [TAG, BROKEN, USER]
    assert [r.ok for r in summary.reports] == [True, False, True]


def test_scan_packages_adds_discovered_entities(java_project, tmp_path: Path) -> None:
    cfg = _config(java_project, tmp_path / "out", USER, scan_packages=["com.acme"])
    engine = GeneratorEngine(cfg)
    assert engine.entity_ids() == [USER, TAG]


def test_duplicate_ids_run_once(java_project, tmp_path: Path) -> None:
    engine = GeneratorEngine(_config(java_project, tmp_path / "out", USER, " " + USER))
    assert engine.entity_ids() == [USER]


def test_generated_sources_match_entity(java_project, tmp_path: Path) -> None:
    out = tmp_path / "out"
    GeneratorEngine(_config(java_project, out, USER)).run()
    dto = (out / "src/main/java/com/acme/model/dto/UserDTO.java").read_text(encoding="utf-8")
    assert "import com.acme.entity.Role;" in dto
    assert "import java.time.LocalDateTime;" in dto
    assert "    private Map<String, Address> addresses;" in dto
    assert "    private byte[] avatar;" in dto
    request = (out / "src/main/java/com/acme/model/request/UserRequest.java").read_text(encoding="utf-8")
    assert "private Long id;" not in request
    assert "createdAt" not in request


@pytest.mark.parametrize("workers", [1, 2])
def test_empty_run(tmp_path: Path, workers: int) -> None:
    summary = GeneratorEngine(GeneratorConfig(output_root=tmp_path, base_dir=tmp_path, workers=workers)).run()
    assert summary.reports == []
    assert summary.ok
