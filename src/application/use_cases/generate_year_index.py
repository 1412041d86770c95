"""
Use-case: build the chronological YearIndex for one year of the archive.
See docs/CleanArchitecture.md for the layering rationale.
Depends only on Domain ports and entities: no infrastructure imports.
"""

from src.domain.entities.year_index import YearIndex
from src.domain.ports.document_store_port import IDocumentStore


class GenerateYearIndexUseCase:
    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    def execute(self, year: int) -> YearIndex:
        """Read *year*'s documents from the store and order them by date.

        Raises:
            MisfiledDocument:     if a document is dated outside *year*.
            DuplicateMeetingDate: if two documents share a date.
        """
        return YearIndex.from_documents(year, self._store.list_documents(year))
