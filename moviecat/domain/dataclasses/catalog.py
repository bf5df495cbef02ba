# moviecat/domain/dataclasses/catalog.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Mapping, Optional, Tuple
from uuid import UUID

from moviecat.domain.enums import SortField, SortOrder


# ---------------------------------------------------------------------------
# Resolved listing request
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class QuerySpecification:
    """
    Immutable, validated shape of a listing request. Built by
    `resolve_query_options`; never constructed straight from raw input.

    `user_id` only drives the caller-rating overlay. It does not change
    which movies match, so it is left out of `cache_key()`.
    """
    title: Optional[str] = None
    year: Optional[int] = None
    sort_field: Optional[SortField] = None
    sort_order: SortOrder = SortOrder.unsorted
    page: int = 1
    page_size: int = 10
    user_id: Optional[UUID] = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def cache_key(self) -> Tuple:
        return (
            self.title.lower() if self.title else None,
            self.year,
            self.sort_field.value if self.sort_field else None,
            self.sort_order.value,
            self.page,
            self.page_size,
        )


# ---------------------------------------------------------------------------
# Read models
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class MovieView:
    id: UUID
    title: str
    year_of_release: int
    slug: str
    genres: Tuple[str, ...] = ()
    rating: Optional[float] = None       # aggregate over all users
    user_rating: Optional[int] = None    # the caller's own score

    def with_user_rating(self, score: Optional[int]) -> "MovieView":
        return replace(self, user_rating=score)


@dataclass(frozen=True)
class MoviePage:
    items: Tuple[MovieView, ...] = field(default_factory=tuple)
    page: int = 1
    page_size: int = 10
    total_count: int = 0

    def shared(self) -> "MoviePage":
        """Copy with caller ratings removed, safe to hand to the shared cache."""
        if all(it.user_rating is None for it in self.items):
            return self
        return replace(self, items=tuple(it.with_user_rating(None) for it in self.items))

    def overlay(self, user_ratings: Mapping[UUID, int]) -> "MoviePage":
        return replace(
            self,
            items=tuple(it.with_user_rating(user_ratings.get(it.id)) for it in self.items),
        )
