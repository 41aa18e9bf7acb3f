from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .config import DEFAULT_CONFIG_FILE, GeneratorConfig, load_config
from .engine import GeneratorEngine, RunSummary
from .errors import ConfigError
from .log import configure_logging

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="crudgen", description="Generate a CRUD layer from Java entity classes")
    ap.add_argument("--config", type=str, default=None, help=f"JSON config file (default: ./{DEFAULT_CONFIG_FILE} if present)")
    ap.add_argument("--base-dir", type=str, default=None, help="Directory to search for entity sources (default: cwd)")
    ap.add_argument("--module", dest="module_hint", type=str, default=None, help="Module name hint for locating sources")
    ap.add_argument("--output", dest="output_root", type=str, default=None, help="Output root; files go under <output>/src/main/java")
    ap.add_argument("--entity", dest="entity_ids", action="append", default=None, help="Entity FQN (repeatable)")
    ap.add_argument("--scan-package", dest="scan_packages", action="append", default=None, help="Package to scan for @GenModel classes (repeatable)")
    ap.add_argument("--workers", type=int, default=None, help="Entities processed in parallel")
    ap.add_argument("--dry-run", action="store_true", default=None, help="Do not write files")
    verbosity = ap.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only warnings and errors")
    return ap.parse_args(argv)


def build_config(args: argparse.Namespace) -> GeneratorConfig:
    if args.config:
        cfg = load_config(Path(args.config))
    elif Path(DEFAULT_CONFIG_FILE).is_file():
        cfg = load_config(Path(DEFAULT_CONFIG_FILE))
    else:
        cfg = GeneratorConfig()

    cfg = cfg.merged(
        module_hint=args.module_hint,
        output_root=Path(args.output_root).expanduser() if args.output_root else None,
        entity_ids=args.entity_ids,
        scan_packages=args.scan_packages,
        base_dir=Path(args.base_dir).expanduser() if args.base_dir else None,
        workers=args.workers,
        dry_run=args.dry_run,
    )
    cfg.validate()
    if not cfg.entity_ids and not cfg.scan_packages:
        raise ConfigError("No entities: pass --entity or --scan-package, or set entityIds/scanPackages")
    return cfg


def show_summary(summary: RunSummary, console: Console, dry_run: bool = False) -> None:
    t = Table(title="crudgen")
    t.add_column("#", justify="right")
    t.add_column("Entity")
    t.add_column("Pending" if dry_run else "Written", justify="right")
    t.add_column("Skipped", justify="right")
    t.add_column("Status")
    for i, r in enumerate(summary.reports, start=1):
        changed = r.pending if dry_run else r.written
        status = "ok" if r.ok else f"failed: {r.error}"
        t.add_row(str(i), r.entity_id, str(changed), str(r.skipped), status)
    console.print(t)
    console.print(f"Processed: {summary.processed}, failed: {summary.failed}")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        cfg = build_config(args)
    except ConfigError as e:
        log.error("%s", e)
        return EXIT_CONFIG

    summary = GeneratorEngine(cfg).run()
    if not args.quiet:
        show_summary(summary, Console(), dry_run=cfg.dry_run)
    return EXIT_OK if summary.ok else EXIT_FAILED


if __name__ == "__main__":
    raise SystemExit(main())
