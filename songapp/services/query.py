"""
Query normalizer for song list requests

songapp/services/query.py

Raw query parameters never cause an error: every malformed value degrades
to its default.
"""
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional
from songapp.core.config import settings

# API sort names -> stored document fields
SORT_FIELDS = {
    "title": "title",
    "artist": "artist",
    "album": "album",
    "genre": "genre",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}
DEFAULT_SORT_BY = "createdAt"
# Largest skip a BSON int64 can carry
MAX_SKIP = 2 ** 63 - 1
FILTER_FIELDS = ("artist", "album", "genre")


@dataclass(frozen=True)
class SongQuery:
    page: int = 1
    limit: int = settings.DEFAULT_PAGE_SIZE
    sort_by: str = DEFAULT_SORT_BY
    sort_order: str = "desc"
    artist: Optional[str] = None
    album: Optional[str] = None
    genre: Optional[str] = None
    search: Optional[str] = None

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def sort_field(self) -> str:
        return SORT_FIELDS[self.sort_by]

    @property
    def sort_direction(self) -> int:
        return 1 if self.sort_order == "asc" else -1

    @property
    def filters(self) -> Dict[str, str]:
        """Active per-field filters"""
        return {
            field: getattr(self, field)
            for field in FILTER_FIELDS
            if getattr(self, field) is not None
        }


def _positive_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    try:
        number = int(str(value).strip())
    except ValueError:
        return None
    return number if number > 0 else None


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def normalize_query(params: Mapping[str, Any]) -> SongQuery:
    """Build a bounded SongQuery from raw, possibly-string request parameters"""
    page = _positive_int(params.get("page")) or 1

    limit = _positive_int(params.get("limit")) or settings.DEFAULT_PAGE_SIZE
    limit = min(limit, settings.MAX_PAGE_SIZE)
    page = min(page, MAX_SKIP // limit + 1)

    sort_by = params.get("sortBy")
    if not isinstance(sort_by, str) or sort_by not in SORT_FIELDS:
        sort_by = DEFAULT_SORT_BY

    sort_order = _text(params.get("sortOrder"))
    sort_order = "asc" if sort_order and sort_order.lower() == "asc" else "desc"

    return SongQuery(
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
        artist=_text(params.get("artist")),
        album=_text(params.get("album")),
        genre=_text(params.get("genre")),
        search=_text(params.get("search")),
    )
