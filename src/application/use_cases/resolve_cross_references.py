"""
Use-case: verify that links from index pages (and notes) resolve to documents.
See docs/CleanArchitecture.md for the layering rationale.
Depends only on Domain ports and entities: no infrastructure imports.

verify() and verify_index_file() stop at the first BrokenLink so the operator
sees it immediately; find_broken_links() walks the whole archive and returns
every failure for reporting.
"""

import posixpath
from typing import Iterable, Optional

import structlog

from src.application.services.link_extractor import extract_links, resolve_link
from src.domain.entities.link_reference import LinkReference
from src.domain.entities.year_index import YearIndex
from src.domain.errors import BrokenLink
from src.domain.ports.document_store_port import IDocumentStore

logger = structlog.get_logger(__name__)


class ResolveCrossReferencesUseCase:
    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    def verify(self, year_index: YearIndex) -> None:
        """Check that every document listed in *year_index* exists in the store.

        Raises:
            BrokenLink: naming the first listed document that is missing.
        """
        source = self._store.index_path(year_index.year)
        for document in year_index.documents:
            target = f"{year_index.year}/{document.filename}"
            if not self._store.exists(target):
                raise BrokenLink(source=source, target=target)

    def verify_index_file(self, year: int) -> int:
        """Check every relative link in the persisted index file of *year*.

        Returns:
            Number of links checked.

        Raises:
            BrokenLink: if the index file itself is missing, or on the first
                        link that does not resolve.
        """
        index_path = self._store.index_path(year)
        text = self._store.read_text(index_path)
        if text is None:
            raise BrokenLink(source=self._store.index_path(), target=index_path)
        references = self._references(index_path, text)
        for reference in references:
            if not self._store.exists(reference.target):
                raise BrokenLink(source=reference.source, target=reference.target)
        return len(references)

    def find_broken_links(self, years: Optional[Iterable[int]] = None) -> list[BrokenLink]:
        """Collect every broken relative link in the archive.

        Scans the archive index (only when *years* is None), each year's
        index file, and each meeting document.
        """
        archive_index = self._store.index_path()
        broken: list[BrokenLink] = []
        if years is None:
            selected = self._store.years()
            sources = [archive_index]
        else:
            selected = sorted(set(years))
            sources = []
        for year in selected:
            sources.append(self._store.index_path(year))
            sources.extend(
                f"{year}/{document.filename}"
                for document in sorted(self._store.list_documents(year), key=lambda d: d.date)
            )

        for source in sources:
            text = self._store.read_text(source)
            if text is None:
                logger.warning("link_source_missing", source=source)
                if source != archive_index:
                    broken.append(BrokenLink(source=archive_index, target=source))
                continue
            for reference in self._references(source, text):
                if not self._store.exists(reference.target):
                    logger.warning(
                        "broken_link", source=reference.source, target=reference.target
                    )
                    broken.append(BrokenLink(source=reference.source, target=reference.target))
        return broken

    @staticmethod
    def _references(source: str, text: str) -> list[LinkReference]:
        base_dir = posixpath.dirname(source)
        references = []
        for raw in extract_links(text):
            target = resolve_link(base_dir, raw)
            if target is not None:
                references.append(LinkReference(source=source, target=target, raw=raw))
        return references
