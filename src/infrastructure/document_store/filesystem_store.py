"""
Infrastructure adapter: local directory tree -> IDocumentStore.
See docs/CleanArchitecture.md for the layering rationale.

Expected layout under *root*:

    <root>/README.md                 archive index
    <root>/2018/README.md            year index
    <root>/2018/LDM-2018-01-03.md    one file per meeting, named by date

All filesystem and markdown-parsing details are confined here; the rest of
the codebase depends only on IDocumentStore.
"""

from pathlib import Path, PurePosixPath
from typing import Optional

import chardet
import structlog

from src.domain.entities.meeting_document import MeetingDocument
from src.domain.ports.document_store_port import IDocumentStore
from src.infrastructure.document_store.markdown_notes_parser import (
    date_from_filename,
    parse_meeting_notes,
)

logger = structlog.get_logger(__name__)

_ENCODING = "utf-8"


class FileSystemDocumentStore(IDocumentStore):
    """Reads meeting notes from, and writes index files into, a directory per year."""

    def __init__(
        self,
        root: str | Path,
        suffix: str = ".md",
        index_filename: str = "README.md",
    ) -> None:
        self._root = Path(root)
        self._suffix = suffix
        self._index_filename = index_filename

    @property
    def root(self) -> Path:
        return self._root

    # ------------------------------------------------------------------
    # IDocumentStore interface
    # ------------------------------------------------------------------

    def years(self) -> list[int]:
        if not self._root.is_dir():
            return []
        return sorted(
            int(entry.name)
            for entry in self._root.iterdir()
            if entry.is_dir() and len(entry.name) == 4 and entry.name.isdigit()
        )

    def list_documents(self, year: int) -> list[MeetingDocument]:
        year_dir = self._root / str(year)
        if not year_dir.is_dir():
            return []
        documents = []
        for path in sorted(year_dir.iterdir()):
            if not path.is_file() or not path.name.endswith(self._suffix):
                continue
            if path.name == self._index_filename:
                continue
            if date_from_filename(path.name) is None:
                logger.info("document_skipped", path=str(path), reason="no date in file name")
                continue
            documents.append(parse_meeting_notes(path.name, _decode(path)))
        return documents

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def read_text(self, path: str) -> Optional[str]:
        resolved = self._resolve(path)
        if not resolved.is_file():
            return None
        return _decode(resolved)

    def write_text(self, path: str, text: str) -> None:
        resolved = self._resolve(path)
        resolved.parent.mkdir(parents=True, exist_ok=True)
        resolved.write_text(text, encoding=_ENCODING)

    def index_path(self, year: Optional[int] = None) -> str:
        if year is None:
            return self._index_filename
        return f"{year}/{self._index_filename}"

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _resolve(self, path: str) -> Path:
        return self._root.joinpath(*PurePosixPath(path).parts)


def _decode(path: Path) -> str:
    """Read *path* as UTF-8, falling back to chardet detection for older hand-edited notes."""
    raw = path.read_bytes()
    try:
        return raw.decode(_ENCODING)
    except UnicodeDecodeError:
        detected = chardet.detect(raw)
        encoding = detected.get("encoding") or _ENCODING
        logger.info(
            "document_encoding_detected",
            path=str(path),
            encoding=encoding,
            confidence=detected.get("confidence"),
        )
        try:
            return raw.decode(encoding, errors="replace")
        except LookupError:
            return raw.decode(_ENCODING, errors="replace")
