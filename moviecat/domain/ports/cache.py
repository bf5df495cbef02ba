from __future__ import annotations
from typing import Optional, Protocol
from moviecat.domain.dataclasses.catalog import MoviePage, QuerySpecification

class ListingCachePort(Protocol):
    def generation(self, tag: Optional[str] = None) -> int: ...

    def lookup(self, spec: QuerySpecification) -> Optional[MoviePage]: ...

    def store(
        self,
        spec: QuerySpecification,
        page: MoviePage,
        ttl: Optional[float] = None,
        tag: Optional[str] = None,
        generation: Optional[int] = None,
    ) -> bool: ...

    def invalidate_all(self, tag: Optional[str] = None) -> int: ...
