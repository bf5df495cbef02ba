# moviecat/database/models/__init__.py

from moviecat.database.models.movie import (
    Base,
    Movie,
    MovieGenre,
    Rating,
)

__all__ = [
    "Base",
    "Movie",
    "MovieGenre",
    "Rating",
]
