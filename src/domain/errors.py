"""
Domain errors raised while reading, indexing, or validating the archive.
See docs/CleanArchitecture.md for the layering rationale.
"""

from datetime import date
from typing import Sequence


class ArchiveError(Exception):
    """Base class for every error the archive reports to an operator."""


class BrokenLink(ArchiveError):
    """An index or document links to a file that does not exist in the store."""

    def __init__(self, source: str, target: str) -> None:
        self.source = source
        self.target = target
        super().__init__(f"{source}: link to {target!r} does not resolve to a document")


class InvalidMeetingDocument(ArchiveError):
    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        self.reason = reason
        super().__init__(f"{filename}: {reason}")


class MisfiledDocument(ArchiveError):
    """A document is dated outside the year of the index it was listed under."""

    def __init__(self, filename: str, document_date: date, year: int) -> None:
        self.filename = filename
        self.date = document_date
        self.year = year
        super().__init__(
            f"{filename}: dated {document_date.isoformat()} but filed under {year}"
        )


class DuplicateMeetingDate(ArchiveError):
    def __init__(self, meeting_date: date, filenames: Sequence[str]) -> None:
        self.date = meeting_date
        self.filenames = tuple(filenames)
        super().__init__(
            f"more than one document dated {meeting_date.isoformat()}: "
            + ", ".join(self.filenames)
        )
