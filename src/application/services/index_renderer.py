"""
Application service: renders YearIndex listings as markdown text.
See docs/CleanArchitecture.md for the layering rationale.

Rendering is pure: the renderer never touches the store. Callers decide
whether and where the emitted text is persisted.
"""

from typing import Iterable
from urllib.parse import quote

from src.domain.entities.meeting_document import MeetingDocument
from src.domain.entities.year_index import YearIndex


class IndexRenderer:
    def __init__(self, title: str = "Meeting Notes", index_filename: str = "README.md") -> None:
        self._title = title
        self._index_filename = index_filename

    def render_year(self, index: YearIndex) -> str:
        """Emit the markdown listing for *index*, one section per meeting in date order."""
        lines = [
            f"# {self._title} for {index.year}",
            "",
            f"Overview of meetings and agendas for {index.year}.",
        ]
        for document in index.documents:
            lines.extend(["", *self._render_entry(document)])
        return "\n".join(lines) + "\n"

    def render_archive(self, years: Iterable[int]) -> str:
        """Emit the root listing that links every year's index file."""
        lines = [f"# {self._title}", ""]
        ordered = sorted(set(years))
        if ordered:
            lines.extend(
                f"- [{year}]({year}/{quote(self._index_filename)})" for year in ordered
            )
        else:
            lines.append("No meetings recorded yet.")
        return "\n".join(lines) + "\n"

    def _render_entry(self, document: MeetingDocument) -> list[str]:
        entry = [
            f"## {document.display_date}",
            "",
            f"[{_escape_brackets(document.title)}]({quote(document.filename)})",
        ]
        if document.topics:
            entry.append("")
            entry.extend(
                f"{number}. {topic}" for number, topic in enumerate(document.topics, start=1)
            )
        return entry


def _escape_brackets(text: str) -> str:
    return text.replace("[", r"\[").replace("]", r"\]")
