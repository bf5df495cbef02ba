# moviecat/services/schemas/movie.py
from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------- Create / Update ----------
class MovieCreate(_CamelModel):
    title: str
    year_of_release: int
    genres: List[str] = Field(default_factory=list)


class MovieUpdate(MovieCreate):
    pass


# ---------- Read ----------
class MovieRead(_CamelModel):
    id: UUID
    title: str
    year_of_release: int
    slug: str
    genres: List[str] = Field(default_factory=list)
    rating: Optional[float] = None
    user_rating: Optional[int] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class MoviesPage(_CamelModel):
    items: List[MovieRead] = Field(default_factory=list)
    page: int
    page_size: int
    total: int
