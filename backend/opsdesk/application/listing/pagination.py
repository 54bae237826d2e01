"""Paginator — fixed-size zero-based pages with clamped navigation."""

import math
from collections.abc import Sequence

from opsdesk.domain.entities import Page, PageNavigation, Record
from opsdesk.domain.exceptions import ValidationError

ALLOWED_PAGE_SIZES: tuple[int, ...] = (10, 20, 50, 100)
DEFAULT_PAGE_SIZE = 20


def total_pages(total_count: int, page_size: int) -> int:
    return math.ceil(total_count / page_size) if page_size > 0 else 0


def validate_page_size(page_size: int) -> int:
    if page_size not in ALLOWED_PAGE_SIZES:
        raise ValidationError(
            f"Page size must be one of {', '.join(map(str, ALLOWED_PAGE_SIZES))}",
            field="page_size",
        )
    return page_size


def paginate(records: Sequence[Record], page_index: int, page_size: int) -> Page:
    """Slice ``records`` into the requested page.

    A page index past the last page yields an empty page rather than an error.
    """
    if page_index < 0:
        raise ValidationError("Page index cannot be negative", field="page_index")
    if page_size < 1:
        raise ValidationError("Page size must be positive", field="page_size")

    total_count = len(records)
    start = page_index * page_size
    return Page(
        items=list(records[start : start + page_size]),
        total_count=total_count,
        total_pages=total_pages(total_count, page_size),
        page_index=page_index,
        page_size=page_size,
    )


def last_page_index(total_count: int, page_size: int) -> int:
    return max(total_pages(total_count, page_size) - 1, 0)


def navigation_target(
    navigation: PageNavigation | str,
    page_index: int,
    page_size: int,
    total_count: int,
) -> int:
    """Resolve first/previous/next/last to a page index, clamped to valid pages."""
    navigation = PageNavigation(navigation)
    last = last_page_index(total_count, page_size)

    if navigation is PageNavigation.FIRST:
        return 0
    if navigation is PageNavigation.PREVIOUS:
        return max(page_index - 1, 0)
    if navigation is PageNavigation.NEXT:
        if (page_index + 1) * page_size >= total_count:
            return min(page_index, last)
        return page_index + 1
    return last
