"""Tests for seeding the sample catalogue."""

from __future__ import annotations

import copy

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from bookstore_service import cluster_manager, seed
from tests.fakes import FakeClient, FakeCollection


def test_sample_books_cover_every_task() -> None:
    titles = {b["title"] for b in seed.SAMPLE_BOOKS}
    authors = [b["author"] for b in seed.SAMPLE_BOOKS]

    assert len(seed.SAMPLE_BOOKS) == 12
    assert {"Clean Code", "NoSQL Distilled"} <= titles
    assert authors.count("Martin Fowler") >= 2
    assert any(b["genre"] == "Programming" for b in seed.SAMPLE_BOOKS)
    assert any(b["in_stock"] and b["published_year"] > 2010 for b in seed.SAMPLE_BOOKS)
    for book in seed.SAMPLE_BOOKS:
        assert set(book) >= {"title", "author", "genre", "published_year", "price", "in_stock"}


def test_seed_books_clears_then_inserts_copies() -> None:
    coll = FakeCollection([{"title": "stale"}])
    original = copy.deepcopy(seed.SAMPLE_BOOKS)

    inserted = seed.seed_books(coll)

    assert inserted == 12
    assert [c[0] for c in coll.calls] == ["delete_many", "insert_many"]
    assert coll.calls[0] == ("delete_many", {})
    assert seed.SAMPLE_BOOKS == original


def test_seed_books_without_drop_keeps_existing() -> None:
    coll = FakeCollection([{"title": "existing"}])

    assert seed.seed_books(coll, books=[{"title": "new"}], drop=False) == 1
    assert [d["title"] for d in coll.docs] == ["existing", "new"]


@pytest.mark.parametrize("drop", [True, False])
def test_seed_books_empty_list_is_noop(drop: bool) -> None:
    coll = FakeCollection([{"title": "existing"}])

    assert seed.seed_books(coll, books=[], drop=drop) == 0
    assert coll.calls == []
    assert coll.docs == [{"title": "existing"}]


def test_main_seeds_and_closes(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = FakeClient()
    monkeypatch.setattr(cluster_manager, "MongoClient", lambda *a, **kw: fake)

    assert seed.main() == 0
    assert len(fake["plp_bookstore"]["books"].docs) == 12
    assert fake.calls[-1] == ("close",)


def test_main_returns_error_code_when_unreachable(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = FakeClient(ping_error=ServerSelectionTimeoutError("down"))
    monkeypatch.setattr(cluster_manager, "MongoClient", lambda *a, **kw: fake)

    assert seed.main() == 1
    assert fake.calls == [("ping",), ("close",)]
