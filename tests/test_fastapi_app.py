"""Tests for the read-only HTTP API."""

import pytest
from fastapi.testclient import TestClient

from src.application.services.index_renderer import IndexRenderer
from src.application.services.index_rebuilder import RebuildIndexesService
from src.infrastructure.entrypoints.fastapi_app import create_app


@pytest.fixture
def client(store):
    return TestClient(create_app(store=store))


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_years(client):
    assert client.get("/years").json() == [2017, 2018]


def test_year_listing(client):
    response = client.get("/years/2018")

    assert response.status_code == 200
    body = response.json()
    assert body["year"] == 2018
    assert [m["date"] for m in body["meetings"]] == [
        "2018-01-03",
        "2018-01-10",
        "2018-01-18",
        "2018-01-22",
        "2018-01-24",
    ]
    assert body["meetings"][0] == {
        "date": "2018-01-03",
        "title": "C# Language Design Notes for Jan 3, 2018",
        "topics": ["Scoped locals", "Operator behavior"],
        "link": "2018/LDM-2018-01-03.md",
    }


def test_unknown_year(client):
    assert client.get("/years/1999").status_code == 404


def test_rendered_index_matches_build(archive, store, client):
    RebuildIndexesService(store, IndexRenderer()).rebuild()

    response = client.get("/years/2018/index")

    assert response.status_code == 200
    assert response.text == (archive / "2018" / "README.md").read_text(encoding="utf-8")


def test_conflicting_archive_returns_409(archive, client):
    (archive / "2018" / "LDM-2018-01-03-followup.md").write_text("# Follow-up\n", encoding="utf-8")
    response = client.get("/years/2018")
    assert response.status_code == 409
    assert "2018-01-03" in response.json()["detail"]


def test_broken_links(store, client):
    assert client.get("/links/broken").json() == [
        {"source": "README.md", "target": "2017/README.md"},
        {"source": "README.md", "target": "2018/README.md"},
    ]

    RebuildIndexesService(store, IndexRenderer()).rebuild()

    assert client.get("/links/broken").json() == []
