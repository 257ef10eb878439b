"""
Homebase Backend: Movie Service
===============================

What:  Business rules for movies: title, imdbLink and rating are required on
       both create and replace, and rating must be between 1 and 5.
"""

from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from homebase.exceptions import ValidationError
from homebase.models.movie import MAX_RATING, MIN_RATING, Movie
from homebase.schemas.movie import MovieInput, MovieResponse
from homebase.services.owned_resource import OwnedResourceService


def validate_movie(payload: MovieInput) -> Dict[str, Any]:
    """
    Checks a movie body and returns the column values to write.

    Raises:
        ValidationError: on the first missing field or an out-of-range rating
    """
    title = (payload.title or "").strip()
    if not title:
        raise ValidationError(message="title is required", field="title")

    imdb_link = (payload.imdb_link or "").strip()
    if not imdb_link:
        raise ValidationError(message="imdbLink is required", field="imdbLink")

    if payload.rating is None:
        raise ValidationError(message="rating is required", field="rating")
    if not MIN_RATING <= payload.rating <= MAX_RATING:
        raise ValidationError(
            message=f"rating must be an integer between {MIN_RATING} and {MAX_RATING}",
            field="rating",
            context={"rating": payload.rating},
        )

    return {
        "title": title,
        "summary": payload.summary or None,
        "imdb_link": imdb_link,
        "rating": payload.rating,
    }


class MovieService(OwnedResourceService[Movie]):
    model = Movie
    resource = "movie"

    def primary_key(self):
        return Movie.movie_id

    async def list_movies(self, db: AsyncSession, user_id: int) -> List[MovieResponse]:
        rows = await self.list_owned(db, user_id)
        return [MovieResponse.model_validate(row) for row in rows]

    async def get_movie(self, db: AsyncSession, user_id: int, movie_id: int) -> MovieResponse:
        row = await self.get_owned(db, user_id, movie_id)
        return MovieResponse.model_validate(row)

    async def create_movie(self, db: AsyncSession, user_id: int, payload: MovieInput) -> MovieResponse:
        values = validate_movie(payload)
        row = await self.insert(db, Movie(user_id=user_id, **values))
        return MovieResponse.model_validate(row)

    async def replace_movie(
        self,
        db: AsyncSession,
        user_id: int,
        movie_id: int,
        payload: MovieInput,
    ) -> MovieResponse:
        """Overwrites every field of one of the caller's movies."""
        values = validate_movie(payload)
        row = await self.update_owned(db, user_id, movie_id, values)
        return MovieResponse.model_validate(row)

    async def delete_movie(self, db: AsyncSession, user_id: int, movie_id: int) -> None:
        await self.delete_owned(db, user_id, movie_id)


movie_service = MovieService()
