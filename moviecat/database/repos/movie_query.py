# moviecat/database/repos/movie_query.py
from __future__ import annotations
from typing import Optional, List, Tuple
from uuid import UUID
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from moviecat.database.models import Movie as DBMovie
from moviecat.domain.dataclasses.catalog import QuerySpecification
from moviecat.domain.enums import SortField, SortOrder

_SORT_COLUMNS = {
    SortField.title: DBMovie.title,
    SortField.year: DBMovie.year_of_release,
}


class MovieQueryRepo:
    """
    Read-only queries for Movie. Returns ORM rows; genres are eager-loaded
    with one extra SELECT ... IN per page.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, movie_id: UUID) -> Optional[DBMovie]:
        return self.session.get(DBMovie, movie_id)

    def get_by_slug(self, slug: str) -> Optional[DBMovie]:
        stmt = select(DBMovie).where(DBMovie.slug == slug).limit(1)
        return self.session.execute(stmt).scalars().first()

    @staticmethod
    def _filters(spec: QuerySpecification) -> list:
        conds = []
        if spec.title:
            conds.append(DBMovie.title.icontains(spec.title, autoescape=True))
        if spec.year is not None:
            conds.append(DBMovie.year_of_release == spec.year)
        return conds

    @staticmethod
    def _order_by(spec: QuerySpecification) -> tuple:
        """
        Total order: requested column, then id in the same direction, so a
        descending listing is exactly the reverse of the ascending one.
        Unsorted listings fall back to creation order.
        """
        if spec.sort_field is None or spec.sort_order == SortOrder.unsorted:
            return (DBMovie.date_created.asc(), DBMovie.id.asc())
        col = _SORT_COLUMNS[spec.sort_field]
        if spec.sort_order == SortOrder.descending:
            return (col.desc(), DBMovie.id.desc())
        return (col.asc(), DBMovie.id.asc())

    def count_movies(self, spec: QuerySpecification) -> int:
        stmt = select(func.count()).select_from(DBMovie).where(*self._filters(spec))
        return int(self.session.execute(stmt).scalar_one())

    def list_movies(self, spec: QuerySpecification) -> List[DBMovie]:
        stmt = (
            select(DBMovie)
            .where(*self._filters(spec))
            .order_by(*self._order_by(spec))
            .offset(spec.offset)
            .limit(spec.page_size)
        )
        return list(self.session.execute(stmt).scalars().all())

    def search(self, spec: QuerySpecification) -> Tuple[List[DBMovie], int]:
        """(page of rows, total matching the filters before pagination)."""
        total = self.count_movies(spec)
        if total == 0 or spec.offset >= total:
            return [], total
        return self.list_movies(spec), total
