"""Tests for the FileSystemDocumentStore adapter."""

from datetime import date

import pytest

from conftest import write_files
from src.domain.errors import InvalidMeetingDocument
from src.infrastructure.document_store.filesystem_store import FileSystemDocumentStore


def test_years_are_ascending_and_ignore_other_directories(archive, store):
    (archive / "images").mkdir()
    (archive / "20181").mkdir()
    (archive / "2016.md").write_text("not a year directory", encoding="utf-8")

    assert store.years() == [2017, 2018]


def test_years_of_missing_root(tmp_path):
    assert FileSystemDocumentStore(tmp_path / "nowhere").years() == []


def test_list_documents_skips_index_and_undated_files(archive, store):
    (archive / "2018" / "README.md").write_text("# index\n", encoding="utf-8")
    (archive / "2018" / "LDM-2018-01-03.txt").write_text("wrong suffix", encoding="utf-8")

    documents = store.list_documents(2018)

    assert sorted(d.date for d in documents) == [
        date(2018, 1, 3),
        date(2018, 1, 10),
        date(2018, 1, 18),
        date(2018, 1, 22),
        date(2018, 1, 24),
    ]
    first = next(d for d in documents if d.date == date(2018, 1, 3))
    assert first.title == "C# Language Design Notes for Jan 3, 2018"
    assert first.topics == ("Scoped locals", "Operator behavior")


def test_list_documents_of_unknown_year(store):
    assert store.list_documents(1999) == []


def test_invalid_date_in_file_name(archive, store):
    write_files(archive, {"2018/LDM-2018-02-30.md": "# Notes\n"})
    with pytest.raises(InvalidMeetingDocument):
        store.list_documents(2018)


def test_custom_suffix_and_index_name(tmp_path):
    root = write_files(
        tmp_path,
        {
            "2020/2020-03-02.notes.md": "# Remote meeting\n",
            "2020/2020-03-09.md": "# Ignored\n",
            "2020/INDEX.notes.md": "# index\n",
        },
    )
    store = FileSystemDocumentStore(root, suffix=".notes.md", index_filename="INDEX.notes.md")

    assert [d.title for d in store.list_documents(2020)] == ["Remote meeting"]
    assert store.index_path(2020) == "2020/INDEX.notes.md"
    assert store.index_path() == "INDEX.notes.md"


def test_exists_read_and_write(archive, store):
    assert store.exists("2018/LDM-2018-01-03.md")
    assert store.exists("2018/../2017/LDM-2017-12-13.md")
    assert not store.exists("2018/LDM-2018-01-04.md")
    assert store.read_text("2019/README.md") is None

    store.write_text("2019/README.md", "# 2019\n")

    assert (archive / "2019" / "README.md").read_text(encoding="utf-8") == "# 2019\n"
    assert store.read_text("2019/README.md") == "# 2019\n"


def test_non_utf8_notes_are_decoded(tmp_path):
    root = tmp_path / "meetings"
    (root / "2016").mkdir(parents=True)
    (root / "2016" / "LDM-2016-02-10.md").write_bytes(
        "# Notes – café\n\n## Agenda\n\n1. Tuples\n".encode("cp1252")
    )
    store = FileSystemDocumentStore(root)

    [document] = store.list_documents(2016)

    assert document.title.startswith("Notes")
    assert document.topics == ("Tuples",)
    assert store.read_text("2016/LDM-2016-02-10.md").startswith("# Notes")
