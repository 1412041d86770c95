"""
Application service: regenerates the archive's index files.
See docs/CleanArchitecture.md for the layering rationale.

Flow per year: generate YearIndex -> verify its links -> render -> compare
with the stored index -> write when changed. Infrastructure (IDocumentStore)
is injected; nothing here knows about the filesystem.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

import structlog

from src.application.services.index_renderer import IndexRenderer
from src.application.use_cases.generate_year_index import GenerateYearIndexUseCase
from src.application.use_cases.resolve_cross_references import ResolveCrossReferencesUseCase
from src.domain.ports.document_store_port import IDocumentStore

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class IndexUpdate:
    path: str
    entries: int
    changed: bool


class RebuildIndexesService:
    def __init__(self, store: IDocumentStore, renderer: IndexRenderer) -> None:
        self._store = store
        self._renderer = renderer
        self._generate = GenerateYearIndexUseCase(store)
        self._resolver = ResolveCrossReferencesUseCase(store)

    def rebuild(
        self,
        years: Optional[Iterable[int]] = None,
        write: bool = True,
    ) -> list[IndexUpdate]:
        """Regenerate year indexes, plus the archive index when *years* is None.

        Args:
            years: Years to rebuild. None means every year in the store.
                   Years with no directory in the store are skipped.
            write: When False nothing is persisted; the returned updates tell
                   which indexes are stale.

        Returns:
            One IndexUpdate per index considered, year indexes first.

        Raises:
            ArchiveError: propagated from index generation or link verification.
        """
        all_years = self._store.years()
        selected = all_years if years is None else sorted(set(years))
        missing = [year for year in selected if year not in all_years]
        if missing:
            logger.warning("years_not_in_archive", years=missing)
            selected = [year for year in selected if year in all_years]
        updates: list[IndexUpdate] = []

        for year in selected:
            year_index = self._generate.execute(year)
            self._resolver.verify(year_index)
            text = self._renderer.render_year(year_index)
            updates.append(
                self._apply(self._store.index_path(year), text, len(year_index), write)
            )

        if years is None:
            text = self._renderer.render_archive(all_years)
            updates.append(self._apply(self._store.index_path(), text, len(all_years), write))
        return updates

    def _apply(self, path: str, text: str, entries: int, write: bool) -> IndexUpdate:
        changed = self._store.read_text(path) != text
        if changed and write:
            self._store.write_text(path, text)
            logger.info("index_rebuilt", path=path, entries=entries)
        elif changed:
            logger.info("index_stale", path=path, entries=entries)
        else:
            logger.debug("index_unchanged", path=path, entries=entries)
        return IndexUpdate(path=path, entries=entries, changed=changed)
