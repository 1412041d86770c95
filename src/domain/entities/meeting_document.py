"""
Domain entity for a single dated meeting record.
See docs/CleanArchitecture.md for the layering rationale.
Zero external dependencies: pure Python dataclass only.
"""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class MeetingDocument:
    date: date
    title: str
    topics: tuple[str, ...]
    body: str
    filename: str

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def display_date(self) -> str:
        """Human-readable date as used in index headings, e.g. 'Jan 3, 2018'."""
        return f"{self.date:%b} {self.date.day}, {self.date.year}"
