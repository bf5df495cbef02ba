# moviecat/domain/errors.py
from __future__ import annotations

from typing import Dict, List, Optional


class CatalogError(Exception):
    """Base class for errors the catalog reports to its callers."""


class ValidationError(CatalogError, ValueError):
    """
    Rejected input: bad sort field, bad paging, invalid score, empty title...
    `errors` maps a field name to its messages.
    """

    def __init__(self, message: str, errors: Optional[Dict[str, List[str]]] = None) -> None:
        super().__init__(message)
        self.errors: Dict[str, List[str]] = errors or {}

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, {field: [message]})


class NotFoundError(CatalogError, LookupError):
    """No movie (or rating) matches the requested id / slug."""


class ConflictError(CatalogError):
    """
    The store refused the write because of a uniqueness rule.
    `retryable` tells the caller whether resubmitting the same request is safe.
    """

    def __init__(self, message: str, *, retryable: bool = False) -> None:
        super().__init__(message)
        self.retryable = retryable
