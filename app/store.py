"""In-memory movie store and the FastAPI dependency that exposes it."""

from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Iterable

from fastapi import Request
from pydantic import TypeAdapter, ValidationError

from app.models import Movie

logger = logging.getLogger(__name__)

_SEED_ADAPTER = TypeAdapter(list[Movie])


class MovieStoreError(Exception):
    """Base exception for store lookups."""


class MovieNotFound(MovieStoreError):
    """Raised when no movie has the requested id."""


class MissingGenre(MovieStoreError):
    """Raised when a genre filter is requested without a genre."""


class SeedDataError(Exception):
    """Raised when the seed file cannot be read or holds invalid records."""


class MovieStore:
    """Ordered collection of movies kept for the lifetime of the process."""

    def __init__(self, movies: Iterable[Movie] = ()) -> None:
        self._movies: list[Movie] = []
        for movie in movies:
            if movie.id in self:
                raise SeedDataError(f"Duplicate movie id: {movie.id}")
            self._movies.append(movie)

    @classmethod
    def from_file(cls, path: Path | str) -> MovieStore:
        path = Path(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            movies = _SEED_ADAPTER.validate_python(raw)
        except (OSError, ValueError, ValidationError) as exc:
            raise SeedDataError(f"Could not load seed movies from {path}: {exc}") from exc
        store = cls(movies)
        logger.info("Loaded %d movies from %s", len(store), path)
        return store

    def __len__(self) -> int:
        return len(self._movies)

    def __contains__(self, movie_id: object) -> bool:
        return any(movie.id == movie_id for movie in self._movies)

    def list_all(self) -> list[Movie]:
        return list(self._movies)

    def find_by_id(self, movie_id: str) -> Movie:
        return self._movies[self._index_of(movie_id)]

    def filter_by_genre(self, genre: str | None) -> list[Movie]:
        """Return movies listing ``genre``, compared case-insensitively."""

        if not genre:
            raise MissingGenre("genre is required")
        wanted = genre.lower()
        return [
            movie
            for movie in self._movies
            if any(item.lower() == wanted for item in movie.genre)
        ]

    def create(self, fields: dict[str, Any]) -> Movie:
        movie = Movie(id=str(uuid.uuid4()), **fields)
        self._movies.append(movie)
        logger.info("Created movie %s", movie.id)
        return movie

    def update_partial(self, movie_id: str, fields: dict[str, Any]) -> Movie:
        index = self._index_of(movie_id)
        movie = self._movies[index].merged(fields)
        self._movies[index] = movie
        logger.info("Updated movie %s (%s)", movie_id, ", ".join(sorted(fields)) or "no fields")
        return movie

    def delete(self, movie_id: str) -> None:
        del self._movies[self._index_of(movie_id)]
        logger.info("Deleted movie %s", movie_id)

    def _index_of(self, movie_id: str) -> int:
        for index, movie in enumerate(self._movies):
            if movie.id == movie_id:
                return index
        raise MovieNotFound(movie_id)


def get_store(request: Request) -> MovieStore:
    """FastAPI dependency returning the store owned by the running app."""

    return request.app.state.store
