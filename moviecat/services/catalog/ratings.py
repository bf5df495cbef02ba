# moviecat/services/catalog/ratings.py
from __future__ import annotations

from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from moviecat.database.repos.rating_repo import RatingRepo
from moviecat.database.repos._mapping import to_domain_rating
from moviecat.domain.entities.rating import Rating


class RatingAggregator:
    """
    Read side of ratings: the shared average and the caller's own score.
    Holds no state; the session is passed per call. The batched forms are
    what listings use so a page of N movies costs one query, not N.
    """

    def aggregate_for(self, db: Session, movie_id: UUID) -> Optional[float]:
        return RatingRepo(db).aggregate_for(movie_id)

    def user_rating_for(self, db: Session, movie_id: UUID, user_id: Optional[UUID]) -> Optional[int]:
        if user_id is None:
            return None
        row = RatingRepo(db).get(movie_id, user_id)
        return int(row.score) if row else None

    def aggregates_for(self, db: Session, movie_ids: Iterable[UUID]) -> dict[UUID, float]:
        return RatingRepo(db).batch_aggregates(movie_ids)

    def user_ratings_for(
        self, db: Session, movie_ids: Iterable[UUID], user_id: Optional[UUID]
    ) -> dict[UUID, int]:
        if user_id is None:
            return {}
        return RatingRepo(db).batch_user_ratings(movie_ids, user_id)

    def ratings_for_user(self, db: Session, user_id: UUID) -> List[Rating]:
        return [to_domain_rating(r, slug=slug) for (r, slug) in RatingRepo(db).list_for_user(user_id)]
