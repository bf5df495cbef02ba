from __future__ import annotations
from enum import StrEnum

class SortOrder(StrEnum):
    unsorted = "unsorted"
    ascending = "ascending"
    descending = "descending"
