# moviecat/domain/entities/movie.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import FrozenSet, Iterable, Optional
from uuid import UUID

from moviecat.common.naming.slugger import movie_slug
from moviecat.domain.errors import ValidationError

# First publicly screened film; anything earlier is a typo.
MIN_YEAR_OF_RELEASE = 1888


def normalize_genres(genres: Iterable[str] | None) -> FrozenSet[str]:
    if not genres:
        return frozenset()
    return frozenset(g.strip() for g in genres if g and g.strip())


@dataclass
class Movie:
    """
    Core domain entity for a catalog movie. Persistence concerns (DB IDs,
    timestamps) are optional so the entity can be built before it is stored.

    Invariants that we keep here:
      - title is non-empty
      - year_of_release in [1888, current year]
      - at least one genre
    Slug uniqueness is enforced at the DB layer.
    """

    # Persistence (optional)
    id: Optional[UUID] = None
    date_created: Optional[datetime] = None
    last_updated: Optional[datetime] = None

    title: str = ""
    year_of_release: int = 0
    genres: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        self.title = (self.title or "").strip()
        self.genres = normalize_genres(self.genres)

        errors: dict[str, list[str]] = {}
        if not self.title:
            errors.setdefault("title", []).append("title is required")
        current_year = datetime.now(timezone.utc).year
        if not isinstance(self.year_of_release, int) or isinstance(self.year_of_release, bool):
            errors.setdefault("year_of_release", []).append("year_of_release must be an int")
        elif not (MIN_YEAR_OF_RELEASE <= self.year_of_release <= current_year):
            errors.setdefault("year_of_release", []).append(
                f"year_of_release must be between {MIN_YEAR_OF_RELEASE} and {current_year}"
            )
        if not self.genres:
            errors.setdefault("genres", []).append("at least one genre is required")
        if errors:
            raise ValidationError("Invalid movie", errors)

    @property
    def slug(self) -> str:
        return movie_slug(self.title, self.year_of_release)
