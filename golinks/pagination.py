import math
from typing import Optional, Sequence, List, Tuple

from .schemas import Link, PageMeta

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def normalize_page(page: Optional[int]) -> int:
    if page is None or page < 1:
        return DEFAULT_PAGE
    return page


def normalize_page_size(page_size: Optional[int]) -> int:
    if page_size is None:
        return DEFAULT_PAGE_SIZE
    return max(1, min(page_size, MAX_PAGE_SIZE))


def paginate(
    items: Sequence[Link],
    page: Optional[int] = None,
    page_size: Optional[int] = None,
) -> Tuple[List[Link], PageMeta]:
    page = normalize_page(page)
    page_size = normalize_page_size(page_size)

    total_items = len(items)
    total_pages = math.ceil(total_items / page_size) if total_items else 0

    start = (page - 1) * page_size
    # Out-of-range pages are empty, not an error
    if start >= total_items:
        window: List[Link] = []
    else:
        end = min(start + page_size, total_items)
        window = list(items[start:end])

    meta = PageMeta(
        page=page,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
    )
    return window, meta
