# moviecat/database/repos/_mapping.py
from __future__ import annotations
from typing import Optional

from moviecat.database.models.movie import Movie as DBMovie, Rating as DBRating
from moviecat.domain.entities.rating import Rating as DomainRating
from moviecat.domain.dataclasses.catalog import MovieView


def to_movie_view(
    row: DBMovie,
    *,
    rating: Optional[float] = None,
    user_rating: Optional[int] = None,
) -> MovieView:
    return MovieView(
        id=row.id,
        title=row.title,
        year_of_release=row.year_of_release,
        slug=row.slug,
        genres=tuple(sorted(row.genre_names)),
        rating=rating,
        user_rating=user_rating,
    )


def to_domain_rating(row: DBRating, slug: Optional[str] = None) -> DomainRating:
    return DomainRating(
        movie_id=row.movie_id,
        user_id=row.user_id,
        score=int(row.score),
        rated_at=row.rated_at,
        slug=slug,
    )
