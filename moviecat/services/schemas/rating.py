from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class RatingCreate(BaseModel):
    rating: int  # 1..5

class RatingRead(BaseModel):
    movie_id: UUID
    slug: Optional[str] = None
    rating: int
    rated_at: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
