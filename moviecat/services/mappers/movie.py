# moviecat/services/mappers/movie.py
from __future__ import annotations

from moviecat.domain.dataclasses.catalog import MoviePage, MovieView
from moviecat.domain.entities.rating import Rating
from moviecat.services.schemas.movie import MovieRead, MoviesPage
from moviecat.services.schemas.rating import RatingRead

def to_read_schema(view: MovieView) -> MovieRead:
    return MovieRead(
        id=view.id,
        title=view.title,
        year_of_release=view.year_of_release,
        slug=view.slug,
        genres=list(view.genres),
        rating=view.rating,
        user_rating=view.user_rating,
    )

def to_page_schema(page: MoviePage) -> MoviesPage:
    return MoviesPage(
        items=[to_read_schema(it) for it in page.items],
        page=page.page,
        page_size=page.page_size,
        total=page.total_count,
    )

def to_rating_schema(rating: Rating) -> RatingRead:
    return RatingRead(
        movie_id=rating.movie_id,
        slug=rating.slug,
        rating=rating.score,
        rated_at=rating.rated_at,
    )
