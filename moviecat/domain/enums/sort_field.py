from __future__ import annotations
from enum import StrEnum
from typing import Optional


class SortField(StrEnum):
    title = "title"
    year = "year"

    @classmethod
    def parse(cls, raw: str) -> Optional["SortField"]:
        """Case-insensitive lookup including the long year spellings; None if unknown."""
        key = raw.strip().lower()
        return _ALIASES.get(key)


_ALIASES = {
    "title": SortField.title,
    "year": SortField.year,
    "yearofrelease": SortField.year,
    "year_of_release": SortField.year,
}
