"""
Homebase Backend: Movie Schemas
===============================

POST and PUT share one body: PUT replaces every field, so it has the same
required fields as create. Required fields are checked by MovieService.
"""

from typing import Optional

from homebase.schemas.common import CamelModel, WholeNumber


class MovieInput(CamelModel):
    """Body of POST /api/movies and PUT /api/movies/{id}."""
    title: Optional[str] = None
    summary: Optional[str] = None
    imdb_link: Optional[str] = None
    rating: Optional[WholeNumber] = None


class MovieResponse(CamelModel):
    """A full `movies` row."""
    movie_id: int
    user_id: int
    title: str
    summary: Optional[str] = None
    imdb_link: str
    rating: int
