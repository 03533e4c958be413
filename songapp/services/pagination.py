"""
Pagination metadata

songapp/services/pagination.py
"""
import math
from songapp.models.song import PaginationMeta
from songapp.services.query import SongQuery


def build_pagination(total: int, query: SongQuery) -> PaginationMeta:
    """Metadata for the requested page; the page number is echoed, never clamped"""
    total_pages = max(math.ceil(total / query.limit), 1)
    return PaginationMeta(
        total=total,
        page=query.page,
        limit=query.limit,
        totalPages=total_pages,
        hasNextPage=query.page < total_pages,
        hasPrevPage=query.page > 1,
        sortBy=query.sort_by,
        sortOrder=query.sort_order,
    )
