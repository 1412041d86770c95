"""
FastAPI entry point: read-only HTTP view of the meeting-notes archive.
See docs/CleanArchitecture.md for the layering rationale.

This module is the Composition Root for the API: create_app() wires the
document store into the application layer. Tests pass their own store;
the module-level app is configured from the environment.

Run locally:
    uvicorn src.infrastructure.entrypoints.fastapi_app:app --reload --port 8000
"""

import datetime
from typing import Optional

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from src.application.services.index_renderer import IndexRenderer
from src.application.use_cases.generate_year_index import GenerateYearIndexUseCase
from src.application.use_cases.resolve_cross_references import ResolveCrossReferencesUseCase
from src.domain.entities.year_index import YearIndex
from src.domain.errors import ArchiveError
from src.domain.ports.document_store_port import IDocumentStore
from src.infrastructure.config.settings import ArchiveSettings
from src.infrastructure.document_store.filesystem_store import FileSystemDocumentStore
from src.infrastructure.observability.logging import configure_logging

logger = structlog.get_logger(__name__)


class MeetingEntry(BaseModel):
    date: datetime.date
    title: str
    topics: list[str]
    link: str


class YearListing(BaseModel):
    year: int
    meetings: list[MeetingEntry]


class BrokenLinkEntry(BaseModel):
    source: str
    target: str


def create_app(
    store: Optional[IDocumentStore] = None,
    renderer: Optional[IndexRenderer] = None,
) -> FastAPI:
    """Build the API around *store*, or around a filesystem store configured from env."""
    if store is None:
        settings = ArchiveSettings.from_env()
        configure_logging(settings.log_level, settings.log_format)
        store = FileSystemDocumentStore(
            settings.root,
            suffix=settings.document_suffix,
            index_filename=settings.index_filename,
        )
        renderer = renderer or IndexRenderer(
            title=settings.index_title, index_filename=settings.index_filename
        )
    renderer = renderer or IndexRenderer()

    generate = GenerateYearIndexUseCase(store)
    resolver = ResolveCrossReferencesUseCase(store)
    app = FastAPI(title="Meeting Notes Archive API")

    def _year_index(year: int) -> YearIndex:
        if year not in store.years():
            raise HTTPException(status_code=404, detail=f"No meetings archived for {year}.")
        try:
            return generate.execute(year)
        except ArchiveError as exc:
            logger.warning("year_index_failed", year=year, error=str(exc))
            raise HTTPException(status_code=409, detail=str(exc)) from exc

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/years", response_model=list[int])
    def list_years():
        return store.years()

    @app.get("/years/{year}", response_model=YearListing)
    def get_year(year: int):
        """Chronological listing of one year's meetings."""
        index = _year_index(year)
        return YearListing(
            year=index.year,
            meetings=[
                MeetingEntry(
                    date=document.date,
                    title=document.title,
                    topics=list(document.topics),
                    link=f"{index.year}/{document.filename}",
                )
                for document in index.documents
            ],
        )

    @app.get("/years/{year}/index", response_class=PlainTextResponse)
    def get_year_index(year: int):
        """The year's index rendered as markdown, exactly as build_indexes writes it."""
        return renderer.render_year(_year_index(year))

    @app.get("/links/broken", response_model=list[BrokenLinkEntry])
    def list_broken_links():
        try:
            broken = resolver.find_broken_links()
        except ArchiveError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return [BrokenLinkEntry(source=link.source, target=link.target) for link in broken]

    return app


app = create_app()
