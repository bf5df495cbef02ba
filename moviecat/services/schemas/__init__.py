from moviecat.services.schemas.movie import (
    MovieCreate,
    MovieUpdate,
    MovieRead,
    MoviesPage,
)
from moviecat.services.schemas.rating import (
    RatingRead,
    RatingCreate
)
__all__ = [
    "MovieCreate",
    "MovieUpdate",
    "MovieRead",
    "MoviesPage",
    "RatingRead",
    "RatingCreate",
]
