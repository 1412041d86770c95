"""Shared fixtures for archive tests.

Provides:
- ``archive``: a tmp_path meeting-notes tree with 2017 and 2018 notes
  (2018 holds the five January meetings 01-03, 01-10, 01-18, 01-22, 01-24)
- ``store``: a FileSystemDocumentStore over that tree
- ``InMemoryDocumentStore``: an IDocumentStore double for application tests
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional

import pytest
import structlog

from src.domain.entities.meeting_document import MeetingDocument
from src.domain.ports.document_store_port import IDocumentStore
from src.infrastructure.document_store.filesystem_store import FileSystemDocumentStore


def note(title: str, agenda: list[str], body: str = "") -> str:
    """Render a meeting-notes file in the archive's usual shape."""
    lines = [f"# {title}", "", "## Agenda", ""]
    lines.extend(f"{number}. {topic}" for number, topic in enumerate(agenda, start=1))
    lines.extend(["", body])
    return "\n".join(lines) + "\n"


ARCHIVE_FILES = {
    # written newest first so nothing relies on creation order
    "2018/LDM-2018-01-24.md": note(
        "C# Language Design Notes for Jan 24, 2018",
        ["Ref reassignment", "New constraints"],
    ),
    "2018/LDM-2018-01-22.md": note(
        "C# Language Design Notes for Jan 22, 2018",
        ["Nullable reference types"],
        "```\n# not a heading\n1. not a topic\n```\n",
    ),
    "2018/LDM-2018-01-18.md": (
        "# C# Language Design Notes for Jan 18, 2018\n\n"
        "## Quote of the Day\n\n> Ship it.\n\n"
        "## Ref locals\n\nDiscussion.\n\n"
        "## Stackalloc initializers\n\nMore discussion.\n"
    ),
    "2018/LDM-2018-01-10.md": note(
        "C# Language Design Notes for Jan 10, 2018",
        ["[Ranges](#ranges)", "Generic constraints"],
        "See the [earlier notes](../2017/LDM-2017-12-13.md) and "
        "[the proposal](https://github.com/example/proposals/issues/1).\n",
    ),
    "2018/LDM-2018-01-03.md": note(
        "C# Language Design Notes for Jan 3, 2018",
        ["Scoped locals", "Operator behavior"],
    ),
    "2018/notes-template.md": "# Template\n",
    "2017/LDM-2017-12-13.md": note(
        "C# Language Design Notes for Dec 13, 2017",
        ["Pattern-matching", "Default interface members"],
    ),
}


def write_files(root: Path, files: dict[str, str]) -> Path:
    for relative, text in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def archive(tmp_path: Path) -> Path:
    return write_files(tmp_path / "meetings", ARCHIVE_FILES)


@pytest.fixture
def store(archive: Path) -> FileSystemDocumentStore:
    return FileSystemDocumentStore(archive)


def make_document(iso_date: str, title: Optional[str] = None, topics: tuple[str, ...] = ()) -> MeetingDocument:
    meeting_date = date.fromisoformat(iso_date)
    return MeetingDocument(
        date=meeting_date,
        title=title or f"Notes for {iso_date}",
        topics=topics,
        body="",
        filename=f"LDM-{iso_date}.md",
    )


class InMemoryDocumentStore(IDocumentStore):
    """Dict-backed store: documents per year plus raw files by path."""

    def __init__(self, documents: Optional[dict[int, list[MeetingDocument]]] = None) -> None:
        self.documents = documents or {}
        self.files: dict[str, str] = {}
        for year, docs in self.documents.items():
            for document in docs:
                self.files[f"{year}/{document.filename}"] = document.body
        self.writes: list[str] = []

    def years(self) -> list[int]:
        return sorted(self.documents)

    def list_documents(self, year: int) -> list[MeetingDocument]:
        return list(self.documents.get(year, []))

    def exists(self, path: str) -> bool:
        return path in self.files

    def read_text(self, path: str) -> Optional[str]:
        return self.files.get(path)

    def write_text(self, path: str, text: str) -> None:
        self.files[path] = text
        self.writes.append(path)

    def index_path(self, year: Optional[int] = None) -> str:
        return "README.md" if year is None else f"{year}/README.md"


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers installed by configure_logging() so later tests don't write to closed streams."""
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
