from moviecat.domain.enums.sort_field import SortField
from moviecat.domain.enums.sort_order import SortOrder
__all__ = [
    "SortField",
    "SortOrder",
]
