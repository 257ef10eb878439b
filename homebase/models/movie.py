"""
Homebase Backend: Movie Model
=============================

What:  ORM model for the `movies` table.

The primary key column is "movieId" everywhere: lookups, owner filters and
RETURNING clauses all use it.
"""

from typing import Optional

from sqlalchemy import CheckConstraint, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from homebase.database import Base

MIN_RATING = 1
MAX_RATING = 5


class Movie(Base):
    """A movie on one user's list, rated 1 to 5."""

    __tablename__ = "movies"

    movie_id: Mapped[int] = mapped_column("movieId", Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column("userId", Integer, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    imdb_link: Mapped[str] = mapped_column("imdbLink", Text, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint(
            f"rating BETWEEN {MIN_RATING} AND {MAX_RATING}",
            name="ck_movies_rating_range",
        ),
        Index("idx_movies_user_id", user_id),
    )

    def __repr__(self) -> str:
        return f"<Movie(movie_id={self.movie_id}, user_id={self.user_id}, title='{self.title}')>"
