"""
CLI entry point for validating cross-references in the archive.

Composition Root for link validation. By default it stops at the first
BrokenLink and exits 1 with the missing document named, so the operator
sees the failure immediately. --all walks the whole archive (indexes and
meeting notes) and reports every broken link instead.

    python -m src.infrastructure.entrypoints.validate_links
    python -m src.infrastructure.entrypoints.validate_links --all
"""

import argparse
import sys
from typing import Optional, Sequence

import structlog

from src.application.use_cases.generate_year_index import GenerateYearIndexUseCase
from src.application.use_cases.resolve_cross_references import ResolveCrossReferencesUseCase
from src.domain.errors import ArchiveError
from src.infrastructure.config.settings import ArchiveSettings
from src.infrastructure.document_store.filesystem_store import FileSystemDocumentStore
from src.infrastructure.observability.logging import configure_logging

logger = structlog.get_logger(__name__)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate links in the meeting-notes archive.")
    parser.add_argument("--root", help="archive root directory (overrides MEETING_NOTES_ROOT)")
    parser.add_argument(
        "--year",
        type=int,
        action="append",
        help="validate only this year; may be repeated",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="report every broken link instead of stopping at the first",
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
    resolver = ResolveCrossReferencesUseCase(store)
    years = sorted(set(args.year)) if args.year else store.years()

    unknown = sorted(set(years) - set(store.years()))
    if unknown:
        print(f"error: no such year in '{settings.root}': {unknown}", file=sys.stderr)
        return 2

    try:
        if args.all:
            broken = resolver.find_broken_links(args.year)
            for link in broken:
                print(f"broken: {link}")
            print(f"{len(broken)} broken link(s) found across {len(years)} year(s).")
            return 1 if broken else 0

        generate = GenerateYearIndexUseCase(store)
        checked = 0
        for year in years:
            resolver.verify(generate.execute(year))
            checked += resolver.verify_index_file(year)
    except ArchiveError as exc:
        logger.error("link_validation_failed", error=str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(f"All {checked} index links resolve across {len(years)} year(s).")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
