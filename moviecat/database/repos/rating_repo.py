# moviecat/database/repos/rating_repo.py
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, func, delete as sa_delete
from sqlalchemy.orm import Session

from moviecat.database.models import Movie as DBMovie, Rating as DBRating


class RatingRepo:
    """
    Per-user ratings. One row per (movie_id, user_id); the aggregate is
    always computed on read, never stored.
    """

    def __init__(self, session: Session) -> None:
        self.db = session

    # -------- reads --------

    def get(self, movie_id: UUID, user_id: UUID) -> Optional[DBRating]:
        return self.db.get(DBRating, (movie_id, user_id))

    def aggregate_for(self, movie_id: UUID) -> Optional[float]:
        stmt = select(func.avg(DBRating.score)).where(DBRating.movie_id == movie_id)
        avg = self.db.execute(stmt).scalar_one_or_none()
        return float(avg) if avg is not None else None

    def batch_aggregates(self, movie_ids: Iterable[UUID]) -> dict[UUID, float]:
        ids = list(movie_ids)
        if not ids:
            return {}
        stmt = (
            select(DBRating.movie_id, func.avg(DBRating.score))
            .where(DBRating.movie_id.in_(ids))
            .group_by(DBRating.movie_id)
        )
        return {mid: float(avg) for (mid, avg) in self.db.execute(stmt).all()}

    def batch_user_ratings(self, movie_ids: Iterable[UUID], user_id: UUID) -> dict[UUID, int]:
        ids = list(movie_ids)
        if not ids:
            return {}
        stmt = select(DBRating.movie_id, DBRating.score).where(
            DBRating.movie_id.in_(ids),
            DBRating.user_id == user_id,
        )
        return {mid: int(score) for (mid, score) in self.db.execute(stmt).all()}

    def list_for_user(self, user_id: UUID) -> List[Tuple[DBRating, str]]:
        """All of a user's ratings with the rated movie's slug, newest first."""
        stmt = (
            select(DBRating, DBMovie.slug)
            .join(DBMovie, DBMovie.id == DBRating.movie_id)
            .where(DBRating.user_id == user_id)
            .order_by(DBRating.rated_at.desc().nullslast(), DBMovie.slug.asc())
        )
        return [(r, slug) for (r, slug) in self.db.execute(stmt).all()]

    # -------- writes (caller controls commit) --------

    def upsert(self, movie_id: UUID, user_id: UUID, score: int) -> DBRating:
        # one rating per (movie, user): replace the score when it already exists
        rating = self.get(movie_id, user_id)
        if rating:
            rating.score = score
        else:
            rating = DBRating(movie_id=movie_id, user_id=user_id, score=score)
            self.db.add(rating)

        self.db.flush()
        self.db.refresh(rating)
        return rating

    def delete(self, movie_id: UUID, user_id: UUID) -> bool:
        rating = self.get(movie_id, user_id)
        if not rating:
            return False
        self.db.delete(rating)
        self.db.flush()
        return True

    def delete_for_movie(self, movie_id: UUID) -> int:
        res = self.db.execute(
            sa_delete(DBRating)
            .where(DBRating.movie_id == movie_id)
            .execution_options(synchronize_session="fetch")
        )
        return int(res.rowcount or 0)
