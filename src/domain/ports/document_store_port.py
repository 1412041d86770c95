"""
Port (interface) for meeting-notes document stores.
See docs/CleanArchitecture.md for the layering rationale.
Infrastructure adapters (e.g. FileSystemDocumentStore) must implement this interface.

All paths are archive-relative POSIX paths such as '2018/LDM-2018-01-03.md'.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities.meeting_document import MeetingDocument


class IDocumentStore(ABC):
    @abstractmethod
    def years(self) -> list[int]:
        """Return every year that has a directory in the store, ascending."""
        ...

    @abstractmethod
    def list_documents(self, year: int) -> list[MeetingDocument]:
        """Return the meeting documents filed under *year*, in no particular order."""
        ...

    @abstractmethod
    def exists(self, path: str) -> bool: ...

    @abstractmethod
    def read_text(self, path: str) -> Optional[str]:
        """Return the contents of *path*, or None if there is no such file."""
        ...

    @abstractmethod
    def write_text(self, path: str, text: str) -> None: ...

    @abstractmethod
    def index_path(self, year: Optional[int] = None) -> str:
        """Path of the index file for *year*, or of the archive index when year is None."""
        ...
