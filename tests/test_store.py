import json

import pytest

from app.models import Movie
from app.store import MissingGenre, MovieNotFound, MovieStore, SeedDataError


@pytest.fixture
def movie():
    return Movie(
        id="m-1",
        title="Amélie",
        year=2001,
        director="Jean-Pierre Jeunet",
        duration=122,
        poster="https://example.com/amelie.jpg",
        genre=["Romance"],
        rate=8.3,
    )


def test_seed_file_loads(store):
    assert len(store) == 10
    assert all(1900 <= movie.year <= 2025 for movie in store.list_all())


def test_filter_by_genre_requires_value(store):
    with pytest.raises(MissingGenre):
        store.filter_by_genre(None)
    with pytest.raises(MissingGenre):
        store.filter_by_genre("")


def test_filter_by_genre_is_exact_match(store):
    assert store.filter_by_genre("sci") == []
    assert {movie.title for movie in store.filter_by_genre("SCI-FI")} == {
        "Inception",
        "The Matrix",
        "Interstellar",
    }


def test_create_appends_with_fresh_id(movie):
    store = MovieStore([movie])
    fields = movie.model_dump(exclude={"id"})
    created = store.create(fields)
    assert created.id != movie.id
    assert store.list_all()[-1] == created


def test_update_partial_merges(movie):
    store = MovieStore([movie])
    updated = store.update_partial("m-1", {"rate": 9.0})
    assert updated.rate == 9.0
    assert updated.title == "Amélie"
    assert store.find_by_id("m-1") == updated


def test_missing_ids_raise_not_found(movie):
    store = MovieStore([movie])
    with pytest.raises(MovieNotFound):
        store.find_by_id("nope")
    with pytest.raises(MovieNotFound):
        store.update_partial("nope", {"title": "x"})
    with pytest.raises(MovieNotFound):
        store.delete("nope")
    store.delete("m-1")
    assert len(store) == 0


def test_duplicate_ids_are_rejected(movie):
    with pytest.raises(SeedDataError):
        MovieStore([movie, movie])


def test_invalid_seed_file(tmp_path, movie):
    bad = movie.model_dump()
    bad["year"] = 1850
    path = tmp_path / "movies.json"
    path.write_text(json.dumps([bad]), encoding="utf-8")
    with pytest.raises(SeedDataError):
        MovieStore.from_file(path)

    with pytest.raises(SeedDataError):
        MovieStore.from_file(tmp_path / "missing.json")
