import pytest
from fastapi.testclient import TestClient

from app.core.config import DEFAULT_SEED_FILE, Settings
from app.main import create_app
from app.store import MovieStore


@pytest.fixture
def settings():
    return Settings(allowed_origins=["https://movies.com", "http://localhost:4200"])


@pytest.fixture
def store():
    # A fresh copy of the bundled seed data for every test.
    return MovieStore.from_file(DEFAULT_SEED_FILE)


@pytest.fixture
def client(settings, store):
    return TestClient(create_app(settings=settings, store=store))


@pytest.fixture
def new_movie():
    return {
        "title": "Spirited Away",
        "year": 2001,
        "director": "Hayao Miyazaki",
        "duration": 125,
        "poster": "https://example.com/posters/spirited-away.jpg",
        "genre": ["Animation", "Fantasy"],
        "rate": 8.6,
    }
