"""Bounded paged fetching for catalog-sized listings."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from productwise.config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 1000
MAX_RECORDS = 100_000


@dataclass
class PagedResult(Generic[T]):
    """Items fetched plus where to resume if the cap was hit."""

    items: list[T] = field(default_factory=list)
    next_offset: int = 0
    truncated: bool = False


async def fetch_all_pages(
    fetch_page: Callable[[int, int], Awaitable[list[T]]],
    page_size: int = DEFAULT_PAGE_SIZE,
    max_records: int = MAX_RECORDS,
    start_offset: int = 0,
) -> PagedResult[T]:
    """
    Fetch fixed-size pages until a short page or max_records is reached.

    Args:
        fetch_page: Callable taking (limit, offset) and returning one page.
        page_size: Records requested per page.
        max_records: Hard cap on records fetched by this call.
        start_offset: Offset to resume from.

    Returns:
        PagedResult; truncated is True when the cap stopped the fetch, in
        which case next_offset resumes where it left off.
    """
    if page_size <= 0:
        raise ValueError("page_size must be positive")

    result: PagedResult[T] = PagedResult(next_offset=start_offset)
    while len(result.items) < max_records:
        limit = min(page_size, max_records - len(result.items))
        page = await fetch_page(limit, result.next_offset)
        result.items.extend(page)
        result.next_offset += len(page)
        if len(page) < limit:
            return result

    result.truncated = True
    logger.warning(
        "paged_fetch_truncated",
        max_records=max_records,
        next_offset=result.next_offset,
    )
    return result
