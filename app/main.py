"""FastAPI entrypoint wiring the movie store, validation and origin policy."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from app.core.config import Settings, get_settings
from app.core.cors import OriginMiddleware, OriginPolicy, get_origin_policy
from app.models import Movie
from app.services.validation import (
    MovieValidationError,
    format_error_list,
    validate_movie,
    validate_partial_movie,
)
from app.store import MissingGenre, MovieNotFound, MovieStore, get_store

MOVIE_NOT_FOUND = "Movie not found"

router = APIRouter(prefix="/movies", tags=["movies"])


@router.api_route("", methods=["GET", "HEAD"], response_model=list[Movie])
def list_movies(store: MovieStore = Depends(get_store)) -> list[Movie]:
    return store.list_all()


@router.api_route("/search", methods=["GET", "HEAD"], response_model=list[Movie])
def search_movies(
    genre: str | None = None,
    store: MovieStore = Depends(get_store),
) -> list[Movie]:
    """Movies whose genre list contains ``genre``, ignoring case."""

    try:
        return store.filter_by_genre(genre)
    except MissingGenre as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Query parameter "genre" is required',
        ) from exc


@router.api_route("/{movie_id}", methods=["GET", "HEAD"], response_model=Movie)
def get_movie(movie_id: str, store: MovieStore = Depends(get_store)) -> Movie:
    try:
        return store.find_by_id(movie_id)
    except MovieNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MOVIE_NOT_FOUND) from exc


@router.post("", response_model=Movie, status_code=status.HTTP_201_CREATED)
def create_movie(
    payload: Any = Body(default=None),
    store: MovieStore = Depends(get_store),
) -> Movie:
    try:
        fields = validate_movie(payload)
    except MovieValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.errors) from exc
    return store.create(fields)


@router.patch("/{movie_id}", response_model=Movie)
def update_movie(
    movie_id: str,
    payload: Any = Body(default=None),
    store: MovieStore = Depends(get_store),
) -> Movie:
    """Merge the supplied fields over the stored movie."""

    try:
        fields = validate_partial_movie(payload)
    except MovieValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.errors) from exc

    try:
        return store.update_partial(movie_id, fields)
    except MovieNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MOVIE_NOT_FOUND) from exc


@router.delete("/{movie_id}")
def delete_movie(movie_id: str, store: MovieStore = Depends(get_store)) -> dict[str, str]:
    try:
        store.delete(movie_id)
    except MovieNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MOVIE_NOT_FOUND) from exc
    return {"message": "Movie deleted"}


@router.options("")
@router.options("/{movie_id}")
def preflight_movies(
    request: Request,
    policy: OriginPolicy = Depends(get_origin_policy),
) -> Response:
    headers = policy.preflight_headers(
        request.headers.get("origin"),
        request.headers.get("access-control-request-headers"),
    )
    return PlainTextResponse("OK", status_code=status.HTTP_200_OK, headers=headers)


def not_found() -> PlainTextResponse:
    return PlainTextResponse("Resource not found", status_code=status.HTTP_404_NOT_FOUND)


async def request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON bodies are client errors like any other invalid field.
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": format_error_list(exc.errors())},
    )


def create_app(
    settings: Settings | None = None,
    store: MovieStore | None = None,
    policy: OriginPolicy | None = None,
) -> FastAPI:
    """Build an application owning its own store and origin policy."""

    settings = settings or get_settings()
    app = FastAPI(title="Movies API")
    app.state.settings = settings
    app.state.store = store if store is not None else MovieStore.from_file(settings.seed_file)
    app.state.origin_policy = policy or OriginPolicy(settings.allowed_origins)

    app.add_middleware(OriginMiddleware)
    app.add_exception_handler(RequestValidationError, request_validation_error)
    app.include_router(router)
    # Registered last so it only sees requests no movie route accepted,
    # including unsupported methods on known paths.
    app.add_api_route(
        "/{path:path}",
        not_found,
        methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        include_in_schema=False,
    )
    return app


app = create_app()
