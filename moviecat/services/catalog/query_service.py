# moviecat/services/catalog/query_service.py
from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from moviecat.common.logging import get_logger
from moviecat.database.models import Movie as DBMovie
from moviecat.database.repos.movie_query import MovieQueryRepo
from moviecat.database.repos._mapping import to_movie_view
from moviecat.domain.dataclasses.catalog import MoviePage, MovieView, QuerySpecification
from moviecat.domain.errors import NotFoundError
from moviecat.domain.ports.cache import ListingCachePort
from moviecat.services.catalog.ratings import RatingAggregator

log = get_logger(__name__)


class CatalogQueryService:
    """
    Listing and lookup of movies.

    Listings go cache-first. The cached page only carries aggregate ratings;
    the caller's own ratings are looked up for the page's ids (one query) and
    overlaid on hits and misses alike. A broken cache never fails a read: the
    error is logged and the store is queried directly.
    """

    def __init__(
        self,
        ratings: RatingAggregator,
        cache: Optional[ListingCachePort] = None,
        *,
        tag: str = "movies",
        ttl_seconds: Optional[float] = None,
    ) -> None:
        self.ratings = ratings
        self.cache = cache
        self.tag = tag
        self.ttl_seconds = ttl_seconds

    # ---------------- listings ----------------

    def list_movies(self, db: Session, spec: QuerySpecification) -> MoviePage:
        shared = self._cache_lookup(spec)
        if shared is None:
            generation = self._cache_generation()
            shared = self._query_shared(db, spec)
            self._cache_store(spec, shared, generation)

        if spec.user_id is None or not shared.items:
            return shared
        ids = [it.id for it in shared.items]
        return shared.overlay(self.ratings.user_ratings_for(db, ids, spec.user_id))

    def _query_shared(self, db: Session, spec: QuerySpecification) -> MoviePage:
        rows, total = MovieQueryRepo(db).search(spec)
        aggregates = self.ratings.aggregates_for(db, [r.id for r in rows])
        items = tuple(to_movie_view(r, rating=aggregates.get(r.id)) for r in rows)
        return MoviePage(items=items, page=spec.page, page_size=spec.page_size, total_count=total)

    # ---------------- single movie ----------------

    def get_by_id(self, db: Session, movie_id: UUID, user_id: Optional[UUID] = None) -> MovieView:
        row = MovieQueryRepo(db).get_by_id(movie_id)
        if not row:
            raise NotFoundError(f"Movie {movie_id} not found")
        return self._single_view(db, row, user_id)

    def get_by_slug(self, db: Session, slug: str, user_id: Optional[UUID] = None) -> MovieView:
        row = MovieQueryRepo(db).get_by_slug(slug)
        if not row:
            raise NotFoundError(f"Movie {slug!r} not found")
        return self._single_view(db, row, user_id)

    def get_by_id_or_slug(self, db: Session, id_or_slug: str, user_id: Optional[UUID] = None) -> MovieView:
        try:
            movie_id = UUID(id_or_slug)
        except ValueError:
            return self.get_by_slug(db, id_or_slug, user_id)
        row = MovieQueryRepo(db).get_by_id(movie_id)
        if row is None:
            # all-hex slugs like "deadbeef...-2010" also parse as UUIDs
            return self.get_by_slug(db, id_or_slug, user_id)
        return self._single_view(db, row, user_id)

    def _single_view(self, db: Session, row: DBMovie, user_id: Optional[UUID]) -> MovieView:
        return to_movie_view(
            row,
            rating=self.ratings.aggregate_for(db, row.id),
            user_rating=self.ratings.user_rating_for(db, row.id, user_id),
        )

    # ---------------- cache (fail-open) ----------------

    def _cache_generation(self) -> Optional[int]:
        if self.cache is None:
            return None
        try:
            return self.cache.generation(self.tag)
        except Exception:
            log.warning("Cache generation read failed; page will not be cached", exc_info=True)
            return None

    def _cache_lookup(self, spec: QuerySpecification) -> Optional[MoviePage]:
        if self.cache is None:
            return None
        try:
            page = self.cache.lookup(spec)
        except Exception:
            log.warning("Cache lookup failed; querying the store directly", exc_info=True)
            return None
        log.debug("Cache %s for %s", "hit" if page is not None else "miss", spec.cache_key())
        return page

    def _cache_store(self, spec: QuerySpecification, page: MoviePage, generation: Optional[int]) -> None:
        if self.cache is None or generation is None:
            return
        try:
            self.cache.store(spec, page, ttl=self.ttl_seconds, tag=self.tag, generation=generation)
        except Exception:
            log.warning("Cache store failed for %s", spec.cache_key(), exc_info=True)
