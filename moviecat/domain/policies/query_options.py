# moviecat/domain/policies/query_options.py
from __future__ import annotations

from typing import Dict, List, Optional
from uuid import UUID

from moviecat.common.settings import get_settings
from moviecat.domain.dataclasses.catalog import QuerySpecification
from moviecat.domain.entities.movie import MIN_YEAR_OF_RELEASE
from moviecat.domain.enums import SortField, SortOrder
from moviecat.domain.errors import ValidationError

# Upper bound for the year filter; keeps the value inside a 32-bit INTEGER.
MAX_YEAR_FILTER = 9999


def parse_sort_directive(sort_by: Optional[str]) -> tuple[Optional[SortField], SortOrder]:
    """
    "title" / "+title" -> (title, ascending)
    "-year"            -> (year, descending)
    None               -> (None, unsorted)

    Raises ValidationError for an empty or unknown field name.
    """
    if sort_by is None:
        return None, SortOrder.unsorted

    raw = sort_by.strip()
    order = SortOrder.descending if raw.startswith("-") else SortOrder.ascending
    name = raw.lstrip("+-")
    if not name:
        raise ValidationError.for_field("sortBy", "sortBy must name a field")

    sort_field = SortField.parse(name)
    if sort_field is None:
        allowed = ", ".join(f.value for f in SortField)
        raise ValidationError.for_field(
            "sortBy", f"You can only sort by {allowed} (got {name!r})"
        )
    return sort_field, order


def resolve_query_options(
    *,
    title: Optional[str] = None,
    year: Optional[int] = None,
    sort_by: Optional[str] = None,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
    user_id: Optional[UUID] = None,
    max_page_size: Optional[int] = None,
) -> QuerySpecification:
    """
    Normalize raw listing parameters into a QuerySpecification.

    Absent page / page_size fall back to the configured defaults. Every
    problem is collected and reported together; nothing is silently clamped.
    """
    cfg = get_settings().catalog
    max_size = max_page_size if max_page_size is not None else cfg.max_page_size
    page = cfg.default_page if page is None else page
    page_size = cfg.default_page_size if page_size is None else page_size

    errors: Dict[str, List[str]] = {}

    try:
        sort_field, sort_order = parse_sort_directive(sort_by)
    except ValidationError as e:
        errors.update(e.errors)
        sort_field, sort_order = None, SortOrder.unsorted

    if year is not None and not (MIN_YEAR_OF_RELEASE <= year <= MAX_YEAR_FILTER):
        errors.setdefault("year", []).append(
            f"year must be between {MIN_YEAR_OF_RELEASE} and {MAX_YEAR_FILTER}"
        )
    if page < 1:
        errors.setdefault("page", []).append("page must be >= 1")
    if page_size < 1 or page_size > max_size:
        errors.setdefault("pageSize", []).append(f"pageSize must be between 1 and {max_size}")

    if errors:
        raise ValidationError("Invalid listing options", errors)

    needle = title.strip() if title else None
    return QuerySpecification(
        title=needle or None,
        year=year,
        sort_field=sort_field,
        sort_order=sort_order,
        page=page,
        page_size=page_size,
        user_id=user_id,
    )
