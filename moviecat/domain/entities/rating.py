# moviecat/domain/entities/rating.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from moviecat.domain.errors import ValidationError

MIN_SCORE = 1
MAX_SCORE = 5


def validate_score(score) -> int:
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValidationError.for_field("score", "score must be an int")
    if score < MIN_SCORE or score > MAX_SCORE:
        raise ValidationError.for_field("score", f"score must be between {MIN_SCORE} and {MAX_SCORE} inclusive")
    return score


@dataclass
class Rating:
    """
    One user's rating of one movie. The DB enforces a single row per
    (movie_id, user_id); a new submission replaces the score.
    """
    movie_id: UUID = None  # required
    user_id: UUID = None   # required
    score: int = 0         # 1..5 inclusive
    rated_at: Optional[datetime] = None
    slug: Optional[str] = None  # filled in when listing a user's ratings

    def __post_init__(self):
        if self.movie_id is None:
            raise ValidationError.for_field("movie_id", "Rating.movie_id is required")
        if self.user_id is None:
            raise ValidationError.for_field("user_id", "Rating.user_id is required")
        validate_score(self.score)
