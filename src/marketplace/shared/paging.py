"""Server-side pagination over Protean querysets."""

import math
from dataclasses import dataclass

from protean.exceptions import ValidationError

MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = 20

    def __post_init__(self):
        if self.page < 1:
            raise ValidationError({"page": ["Page must be 1 or greater"]})
        if not 1 <= self.limit <= MAX_PAGE_SIZE:
            raise ValidationError({"limit": [f"Limit must be between 1 and {MAX_PAGE_SIZE}"]})

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def apply(self, queryset):
        """Slice the queryset in the store and return the resulting ResultSet."""
        return queryset.offset(self.offset).limit(self.limit).all()


def pagination(result, page_request: PageRequest) -> dict:
    """Pagination metadata for a ResultSet produced by `PageRequest.apply`."""
    total_pages = math.ceil(result.total / page_request.limit) if result.total else 0
    return {
        "current": page_request.page,
        "total": total_pages,
        "count": len(result.items),
        "total_items": result.total,
        "has_next": page_request.page < total_pages,
        "has_prev": page_request.page > 1,
    }


def scan(queryset, batch_size: int = MAX_PAGE_SIZE):
    """Yield every row of a filtered queryset, fetching one page at a time."""
    offset = 0
    while True:
        result = queryset.offset(offset).limit(batch_size).all()
        yield from result.items
        if not result.has_next:
            return
        offset += batch_size
