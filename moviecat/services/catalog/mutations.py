# moviecat/services/catalog/mutations.py
from __future__ import annotations

from typing import Iterable, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from moviecat.common.logging import get_logger
from moviecat.database.core.transaction import after_commit
from moviecat.database.repos.movie_repo import SqlAlchemyMovieRepo
from moviecat.database.repos.rating_repo import RatingRepo
from moviecat.database.repos._mapping import to_domain_rating, to_movie_view
from moviecat.domain.dataclasses.catalog import MovieView
from moviecat.domain.entities.movie import Movie
from moviecat.domain.entities.rating import Rating, validate_score
from moviecat.domain.errors import ConflictError, NotFoundError
from moviecat.domain.ports.cache import ListingCachePort
from moviecat.services.catalog.ratings import RatingAggregator

log = get_logger(__name__)


class CatalogMutationService:
    """
    The only writer of movies and ratings.

    Every operation: validate -> write + flush in the caller's transaction ->
    invalidate the listing tag -> return the entity. The tag is invalidated
    a second time once the transaction commits, so a listing computed while
    the write was still uncommitted cannot outlive it. If the first
    invalidation raises, the error propagates and the write is rolled back.
    """

    def __init__(
        self,
        ratings: RatingAggregator,
        cache: Optional[ListingCachePort] = None,
        *,
        tag: str = "movies",
    ) -> None:
        self.ratings = ratings
        self.cache = cache
        self.tag = tag

    # ---------------- movies ----------------

    def create_movie(
        self, db: Session, *, title: str, year_of_release: int, genres: Iterable[str]
    ) -> MovieView:
        movie = Movie(title=title, year_of_release=year_of_release, genres=frozenset(genres or ()))
        row = SqlAlchemyMovieRepo(db).create_movie(movie)
        log.info("Created movie %s (%s)", row.id, row.slug)
        self._invalidate(db)
        return to_movie_view(row)

    def update_movie(
        self,
        db: Session,
        movie_id: UUID,
        *,
        title: str,
        year_of_release: int,
        genres: Iterable[str],
        user_id: Optional[UUID] = None,
    ) -> MovieView:
        movie = Movie(id=movie_id, title=title, year_of_release=year_of_release, genres=frozenset(genres or ()))
        row = SqlAlchemyMovieRepo(db).update_movie(movie_id, movie)
        if row is None:
            raise NotFoundError(f"Movie {movie_id} not found")
        log.info("Updated movie %s (%s)", row.id, row.slug)
        self._invalidate(db)
        return to_movie_view(
            row,
            rating=self.ratings.aggregate_for(db, row.id),
            user_rating=self.ratings.user_rating_for(db, row.id, user_id),
        )

    def delete_movie(self, db: Session, movie_id: UUID) -> None:
        repo = SqlAlchemyMovieRepo(db)
        if repo.get(movie_id) is None:
            raise NotFoundError(f"Movie {movie_id} not found")
        # ratings go first; the FK cascade covers anything written concurrently
        removed = RatingRepo(db).delete_for_movie(movie_id)
        repo.delete_movie(movie_id)
        log.info("Deleted movie %s and %d rating(s)", movie_id, removed)
        self._invalidate(db)

    # ---------------- ratings ----------------

    def rate_movie(self, db: Session, movie_id: UUID, user_id: UUID, score: int) -> Rating:
        validate_score(score)
        movie = SqlAlchemyMovieRepo(db).get(movie_id)
        if movie is None:
            raise NotFoundError(f"Movie {movie_id} not found")
        try:
            row = RatingRepo(db).upsert(movie_id, user_id, score)
        except IntegrityError as e:
            # two first-time submissions for the same (movie, user) raced
            raise ConflictError("Rating changed concurrently, retry the request", retryable=True) from e
        log.info("User %s rated movie %s: %d", user_id, movie_id, score)
        self._invalidate(db)
        return to_domain_rating(row, slug=movie.slug)

    def delete_rating(self, db: Session, movie_id: UUID, user_id: UUID) -> None:
        if not RatingRepo(db).delete(movie_id, user_id):
            raise NotFoundError(f"No rating by this user for movie {movie_id}")
        log.info("User %s removed rating of movie %s", user_id, movie_id)
        self._invalidate(db)

    # ---------------- cache ----------------

    def _invalidate(self, db: Session) -> None:
        if self.cache is None:
            return
        self.cache.invalidate_all(self.tag)
        after_commit(db, self._invalidate_after_commit)

    def _invalidate_after_commit(self) -> None:
        try:
            self.cache.invalidate_all(self.tag)
        except Exception:
            # the write is already committed; entries still expire on their TTL
            log.error("Post-commit cache invalidation failed for tag %s", self.tag, exc_info=True)
