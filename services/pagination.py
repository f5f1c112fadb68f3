# services/pagination.py
"""
Offset/limit arithmetic shared by every listing.

Post listings take ``page``/``limit``; comment listings take ``skip``/``limit``.
Missing or non-positive values fall back to the defaults.
"""
from typing import Optional, Tuple

from schema.social import PagePagination, SkipPagination

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def page_params(page: Optional[int], limit: Optional[int]) -> Tuple[int, int, int]:
    """Return ``(page, limit, skip)`` with ``skip = (page - 1) * limit``."""
    page = page if page and page > 0 else DEFAULT_PAGE
    limit = limit if limit and limit > 0 else DEFAULT_LIMIT
    return page, limit, (page - 1) * limit


def skip_params(skip: Optional[int], limit: Optional[int]) -> Tuple[int, int]:
    skip = skip if skip and skip > 0 else 0
    limit = limit if limit and limit > 0 else DEFAULT_LIMIT
    return skip, limit


def page_pagination(total: int, page: int, limit: int, skip: int, returned: int) -> PagePagination:
    return PagePagination(page=page, limit=limit, total=total, has_more=skip + returned < total)


def skip_pagination(total: int, skip: int, limit: int) -> SkipPagination:
    return SkipPagination(skip=skip, limit=limit, total=total, has_more=skip + limit < total)
