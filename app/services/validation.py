"""Validation of incoming movie payloads."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from app.models import MovieCreate, MovieUpdate

_TITLE_MESSAGES = {
    "missing": "Movie title is required",
    "string_type": "Movie title must be a string",
}


class MovieValidationError(Exception):
    """Raised when a payload violates the movie field rules."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        super().__init__(f"{len(errors)} invalid field(s)")
        self.errors = errors


def validate_movie(payload: Any) -> dict[str, Any]:
    """Validate a full movie payload and return it with defaults applied."""

    try:
        movie = MovieCreate.model_validate(payload)
    except ValidationError as exc:
        raise MovieValidationError(format_errors(exc)) from exc
    return movie.model_dump()


def validate_partial_movie(payload: Any) -> dict[str, Any]:
    """Validate only the fields present in ``payload`` and return them."""

    try:
        movie = MovieUpdate.model_validate(payload)
    except ValidationError as exc:
        raise MovieValidationError(format_errors(exc)) from exc
    return movie.model_dump(exclude_unset=True)


def format_errors(exc: ValidationError) -> list[dict[str, Any]]:
    """Flatten pydantic errors into one entry per violated field."""

    return format_error_list(exc.errors(include_url=False, include_input=False))


def format_error_list(raw_errors: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    errors = []
    for error in raw_errors:
        loc = list(error["loc"])
        message = error["msg"]
        if loc == ["title"]:
            message = _TITLE_MESSAGES.get(error["type"], message)
        errors.append(
            {
                "field": ".".join(str(part) for part in loc),
                "loc": loc,
                "type": error["type"],
                "message": message,
            }
        )
    return errors
