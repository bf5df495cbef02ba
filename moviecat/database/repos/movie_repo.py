# moviecat/database/repos/movie_repo.py
from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from moviecat.database.models.movie import Movie as DBMovie, MovieGenre as DBMovieGenre
from moviecat.domain.entities.movie import Movie as DomainMovie
from moviecat.domain.errors import ConflictError
from moviecat.common.logging import get_logger


logger = get_logger(__name__)


class SqlAlchemyMovieRepo:
    """
    SQLAlchemy-backed writes for movies. The caller owns the transaction;
    every method flushes so constraint violations surface here as ConflictError.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, movie_id: UUID) -> Optional[DBMovie]:
        return self.db.get(DBMovie, movie_id)

    def _slug_owner(self, slug: str) -> Optional[UUID]:
        stmt = select(DBMovie.id).where(DBMovie.slug == slug).limit(1)
        return self.db.execute(stmt).scalar_one_or_none()

    def _ensure_slug_free(self, slug: str, *, exclude_id: Optional[UUID] = None) -> None:
        owner = self._slug_owner(slug)
        if owner is not None and owner != exclude_id:
            raise ConflictError(f"A movie with slug {slug!r} already exists")

    def _flush(self, slug: str) -> None:
        # unique constraint on slug is the final word when two writers race
        try:
            self.db.flush()
        except IntegrityError as e:
            logger.info("Slug conflict on flush for %s: %s", slug, e.orig)
            raise ConflictError(f"A movie with slug {slug!r} already exists") from e

    def create_movie(self, movie: DomainMovie) -> DBMovie:
        slug = movie.slug
        self._ensure_slug_free(slug)

        orm = DBMovie(
            title=movie.title,
            year_of_release=movie.year_of_release,
            slug=slug,
            genres=[DBMovieGenre(name=g) for g in sorted(movie.genres)],
        )
        if movie.id is not None:
            orm.id = movie.id
        self.db.add(orm)
        self._flush(slug)
        self.db.refresh(orm)
        return orm

    def update_movie(self, movie_id: UUID, movie: DomainMovie) -> Optional[DBMovie]:
        """Replace title/year/genres; the slug follows. Returns None if not found."""
        orm = self.get(movie_id)
        if not orm:
            return None

        slug = movie.slug
        self._ensure_slug_free(slug, exclude_id=movie_id)

        orm.title = movie.title
        orm.year_of_release = movie.year_of_release
        orm.slug = slug

        existing = {g.name: g for g in orm.genres}
        for name in existing.keys() - movie.genres:
            orm.genres.remove(existing[name])
        for name in sorted(movie.genres - existing.keys()):
            orm.genres.append(DBMovieGenre(name=name))

        self._flush(slug)
        self.db.refresh(orm)
        return orm

    def delete_movie(self, movie_id: UUID) -> bool:
        obj = self.get(movie_id)
        if not obj:
            return False
        self.db.delete(obj)
        self.db.flush()
        return True
