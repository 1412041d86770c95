"""
Domain entity for the chronological listing of one year's meetings.
See docs/CleanArchitecture.md for the layering rationale.
Zero external dependencies: pure Python dataclass only.
"""

from dataclasses import dataclass
from typing import Iterable

from src.domain.entities.meeting_document import MeetingDocument
from src.domain.errors import DuplicateMeetingDate, MisfiledDocument


@dataclass(frozen=True)
class YearIndex:
    year: int
    documents: tuple[MeetingDocument, ...]

    def __post_init__(self) -> None:
        previous: MeetingDocument | None = None
        for document in self.documents:
            if document.year != self.year:
                raise MisfiledDocument(document.filename, document.date, self.year)
            if previous is not None:
                if document.date == previous.date:
                    raise DuplicateMeetingDate(
                        document.date, (previous.filename, document.filename)
                    )
                if document.date < previous.date:
                    raise ValueError(
                        f"YearIndex {self.year} is not in chronological order: "
                        f"{document.filename} follows {previous.filename}"
                    )
            previous = document

    @classmethod
    def from_documents(cls, year: int, documents: Iterable[MeetingDocument]) -> "YearIndex":
        """Build an index from documents in any order, sorting them by date."""
        return cls(year=year, documents=tuple(sorted(documents, key=lambda d: d.date)))

    def __len__(self) -> int:
        return len(self.documents)

    @property
    def is_empty(self) -> bool:
        return not self.documents
