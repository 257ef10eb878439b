"""
Homebase Backend: Movie Route Handlers
======================================

What:  CRUD endpoints for the caller's movie list. PUT replaces the whole
       movie, so its body has the same required fields as POST.
"""

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from homebase.auth import CurrentUser
from homebase.database import get_db_session
from homebase.routes import parse_resource_id
from homebase.schemas.common import ErrorResponse
from homebase.schemas.movie import MovieInput, MovieResponse
from homebase.services.movie_service import movie_service

router = APIRouter(prefix="/api/movies", tags=["Movies"])

_UNAUTHORIZED = {401: {"description": "Missing or invalid bearer token", "model": ErrorResponse}}
_BAD_REQUEST = {400: {"description": "Invalid id, missing field or rating out of range", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "Movie not found", "model": ErrorResponse}}
_FORBIDDEN = {403: {"description": "Movie belongs to another user", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[MovieResponse],
    responses={**_UNAUTHORIZED},
    summary="List the caller's movies",
)
async def list_movies(
    user: CurrentUser,
    db: AsyncSession = Depends(get_db_session),
) -> List[MovieResponse]:
    return await movie_service.list_movies(db, user.user_id)


@router.get(
    "/{movie_id}",
    response_model=MovieResponse,
    responses={**_BAD_REQUEST, **_UNAUTHORIZED, **_NOT_FOUND},
    summary="Get one of the caller's movies",
)
async def get_movie(
    movie_id: str,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db_session),
) -> MovieResponse:
    mid = parse_resource_id(movie_id, "movie")
    return await movie_service.get_movie(db, user.user_id, mid)


@router.post(
    "",
    status_code=201,
    response_model=MovieResponse,
    responses={**_BAD_REQUEST, **_UNAUTHORIZED},
    summary="Add a movie",
    description="title, imdbLink and rating (1-5) are required; summary is optional.",
)
async def create_movie(
    payload: MovieInput,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db_session),
) -> MovieResponse:
    return await movie_service.create_movie(db, user.user_id, payload)


@router.put(
    "/{movie_id}",
    response_model=MovieResponse,
    responses={**_BAD_REQUEST, **_UNAUTHORIZED, **_FORBIDDEN, **_NOT_FOUND},
    summary="Replace a movie",
)
async def replace_movie(
    movie_id: str,
    payload: MovieInput,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db_session),
) -> MovieResponse:
    mid = parse_resource_id(movie_id, "movie")
    return await movie_service.replace_movie(db, user.user_id, mid, payload)


@router.delete(
    "/{movie_id}",
    status_code=204,
    response_class=Response,
    responses={**_BAD_REQUEST, **_UNAUTHORIZED, **_FORBIDDEN, **_NOT_FOUND},
    summary="Delete a movie",
)
async def delete_movie(
    movie_id: str,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    mid = parse_resource_id(movie_id, "movie")
    await movie_service.delete_movie(db, user.user_id, mid)
    return Response(status_code=204)
