"""
CLI entry point for regenerating the archive's index files.

This script is the Composition Root for index building: it wires the
FileSystemDocumentStore and IndexRenderer into RebuildIndexesService and
triggers the rebuild.

Run after adding meeting notes:

    export MEETING_NOTES_ROOT=meetings
    python -m src.infrastructure.entrypoints.build_indexes

In CI, fail when an index is out of date instead of rewriting it:

    python -m src.infrastructure.entrypoints.build_indexes --check
"""

import argparse
import sys
from typing import Optional, Sequence

import structlog

from src.application.services.index_rebuilder import RebuildIndexesService
from src.application.services.index_renderer import IndexRenderer
from src.domain.errors import ArchiveError
from src.infrastructure.config.settings import ArchiveSettings
from src.infrastructure.document_store.filesystem_store import FileSystemDocumentStore
from src.infrastructure.observability.logging import configure_logging

logger = structlog.get_logger(__name__)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Regenerate meeting-notes index files.")
    parser.add_argument("--root", help="archive root directory (overrides MEETING_NOTES_ROOT)")
    parser.add_argument(
        "--year",
        type=int,
        action="append",
        help="rebuild only this year's index; may be repeated",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="do not write; exit 1 if any index is out of date",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    settings = ArchiveSettings.from_env().with_root(args.root)
    configure_logging(settings.log_level, settings.log_format)

    store = FileSystemDocumentStore(
        settings.root,
        suffix=settings.document_suffix,
        index_filename=settings.index_filename,
    )
    renderer = IndexRenderer(title=settings.index_title, index_filename=settings.index_filename)
    service = RebuildIndexesService(store=store, renderer=renderer)

    unknown = sorted(set(args.year or []) - set(store.years()))
    if unknown:
        print(f"error: no such year in '{settings.root}': {unknown}", file=sys.stderr)
        return 2

    try:
        updates = service.rebuild(years=args.year, write=not args.check)
    except ArchiveError as exc:
        logger.error("index_rebuild_failed", error=str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return 1

    changed = [update for update in updates if update.changed]
    if args.check:
        for update in changed:
            print(f"stale: {update.path}")
        return 1 if changed else 0

    print(
        f"Index rebuild complete: {len(changed)} of {len(updates)} "
        f"index files updated in '{settings.root}/'."
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
