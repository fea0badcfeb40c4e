"""Pydantic models for movie records.

``MovieCreate`` carries the full field rules used when a movie is created,
``MovieUpdate`` applies the same rules to an optional subset of fields and
``Movie`` is a stored record with its server-assigned id.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, StringConstraints, TypeAdapter, field_validator
from pydantic_core import PydanticCustomError

Genre = Literal[
    "Drama",
    "Action",
    "Crime",
    "Adventure",
    "Sci-Fi",
    "Romance",
    "Animation",
    "Biography",
    "Fantasy",
]

MIN_YEAR = 1900
MAX_YEAR = 2025

Title = Annotated[str, StringConstraints(strict=True, strip_whitespace=True, min_length=1)]
Year = Annotated[int, Field(strict=True, ge=MIN_YEAR, le=MAX_YEAR)]
Duration = Annotated[int, Field(strict=True, gt=0)]
Rate = Annotated[float, Field(strict=True, ge=0, le=10)]
Director = Annotated[str, Field(strict=True)]
Poster = Annotated[str, Field(strict=True)]

_URL_ADAPTER = TypeAdapter(AnyUrl)


def _check_url(value: str) -> str:
    # Stored verbatim, AnyUrl would normalize it.
    try:
        _URL_ADAPTER.validate_python(value)
    except ValueError as exc:
        raise PydanticCustomError("url", "Invalid url") from exc
    return value


class MovieCreate(BaseModel):
    """All fields of a movie; ``rate`` defaults to 0."""

    model_config = ConfigDict(extra="ignore")

    title: Title
    year: Year
    director: Director
    duration: Duration
    poster: Poster
    genre: list[Genre]
    rate: Rate = 0

    @field_validator("poster")
    @classmethod
    def validate_poster(cls, value: str) -> str:
        return _check_url(value)


class MovieUpdate(BaseModel):
    """Any subset of movie fields.

    Defaults are never validated, so an omitted field stays unset while an
    explicit ``null`` is rejected like any other wrong type.
    """

    model_config = ConfigDict(extra="ignore")

    title: Title = None
    year: Year = None
    director: Director = None
    duration: Duration = None
    poster: Poster = None
    genre: list[Genre] = None
    rate: Rate = None

    @field_validator("poster")
    @classmethod
    def validate_poster(cls, value: str) -> str:
        return _check_url(value)


class Movie(MovieCreate):
    id: str

    def merged(self, fields: dict) -> Movie:
        return self.model_copy(update={k: v for k, v in fields.items() if k != "id"})
