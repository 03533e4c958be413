"""
Catalogue UI state and its reducer

songapp/client/state.py

State is immutable; every transition goes through reduce(), which returns
a new CatalogueState and never performs I/O.
"""
from dataclasses import dataclass, field, replace
import math
from typing import Any, Dict, Mapping, Optional, Tuple

Song = Dict[str, Any]

DEFAULT_FILTERS = {"page": 1, "limit": 10, "sortBy": "createdAt", "sortOrder": "desc"}


@dataclass(frozen=True)
class CatalogueState:
    songs: Tuple[Song, ...] = ()
    statistics: Optional[Dict[str, Any]] = None
    selected_song: Optional[Song] = None
    filters: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_FILTERS))
    pagination: Optional[Dict[str, Any]] = None
    is_fetching: bool = False
    is_mutating: bool = False
    error: Optional[str] = None


# Actions

@dataclass(frozen=True)
class FetchSongsRequested:
    filters: Mapping[str, Any] = field(default_factory=dict)
    # Refresh without showing the loading state
    silent: bool = False

@dataclass(frozen=True)
class SongsLoaded:
    data: Tuple[Song, ...]
    pagination: Dict[str, Any]

@dataclass(frozen=True)
class SongsFailed:
    error: str

@dataclass(frozen=True)
class CreateSongRequested:
    data: Mapping[str, str]

@dataclass(frozen=True)
class SongCreated:
    song: Song

@dataclass(frozen=True)
class UpdateSongRequested:
    song_id: str
    data: Mapping[str, str]

@dataclass(frozen=True)
class SongUpdated:
    song: Song

@dataclass(frozen=True)
class DeleteSongRequested:
    song_id: str

@dataclass(frozen=True)
class SongDeleted:
    song_id: str

@dataclass(frozen=True)
class MutationFailed:
    error: str

@dataclass(frozen=True)
class FetchStatisticsRequested:
    pass

@dataclass(frozen=True)
class StatisticsLoaded:
    statistics: Dict[str, Any]

@dataclass(frozen=True)
class StatisticsFailed:
    error: str

@dataclass(frozen=True)
class SongSelected:
    song: Optional[Song]

@dataclass(frozen=True)
class FiltersChanged:
    filters: Mapping[str, Any]


def merge_filters(current: Mapping[str, Any], incoming: Mapping[str, Any]) -> Dict[str, Any]:
    """None removes a filter, anything else sets it"""
    merged = dict(current)
    for key, value in incoming.items():
        if value is None:
            merged.pop(key, None)
        else:
            merged[key] = value
    return merged


def _after_create(state: CatalogueState, song: Song) -> CatalogueState:
    songs = (song,) + state.songs
    pagination = state.pagination
    if pagination:
        pagination = dict(pagination)
        limit, page = pagination.get("limit"), pagination.get("page", 1)
        if limit and len(songs) > limit:
            songs = songs[:limit]
        total = pagination.get("total", 0) + 1
        pagination["total"] = total
        if limit:
            pagination["totalPages"] = math.ceil(total / limit)
            pagination["hasNextPage"] = page < pagination["totalPages"]
        else:
            pagination["totalPages"] = 1
            pagination["hasNextPage"] = False
        pagination["hasPrevPage"] = page > 1
    return replace(state, is_mutating=False, songs=songs, pagination=pagination)


def _after_delete(state: CatalogueState, song_id: str) -> CatalogueState:
    songs = tuple(song for song in state.songs if song.get("_id") != song_id)
    pagination = state.pagination
    filters = state.filters
    if pagination:
        pagination = dict(pagination)
        limit = pagination.get("limit")
        previous_page = pagination.get("page", 1)
        total = max(pagination.get("total", 0) - 1, 0)
        pagination["total"] = total

        # Step back when the last song of a trailing page goes away
        page = previous_page
        if total == 0:
            page = 1
        elif not songs and previous_page > 1:
            page = previous_page - 1
        pagination["page"] = page
        filters = {**filters, "page": page}

        if limit:
            total_pages = 1 if total == 0 else max(math.ceil(total / limit), 1)
            pagination["totalPages"] = total_pages
            pagination["hasNextPage"] = page < total_pages and total > 0
        else:
            pagination["totalPages"] = 1
            pagination["hasNextPage"] = False
        pagination["hasPrevPage"] = page > 1
    return replace(
        state, is_mutating=False, songs=songs, pagination=pagination, filters=filters
    )


def reduce(state: CatalogueState, action: Any) -> CatalogueState:
    if isinstance(action, FetchSongsRequested):
        return replace(
            state,
            is_fetching=not action.silent,
            error=None,
            filters=merge_filters(state.filters, action.filters),
        )
    if isinstance(action, SongsLoaded):
        pagination = action.pagination
        filters = {**state.filters, "page": pagination["page"], "limit": pagination["limit"]}
        for key in ("sortBy", "sortOrder"):
            if pagination.get(key):
                filters[key] = pagination[key]
        return replace(
            state,
            is_fetching=False,
            songs=tuple(action.data),
            pagination=dict(pagination),
            filters=filters,
        )
    if isinstance(action, SongsFailed):
        return replace(state, is_fetching=False, error=action.error)

    if isinstance(action, (CreateSongRequested, UpdateSongRequested, DeleteSongRequested)):
        return replace(state, is_mutating=True, error=None)
    if isinstance(action, SongCreated):
        return _after_create(state, action.song)
    if isinstance(action, SongUpdated):
        songs = tuple(
            action.song if song.get("_id") == action.song.get("_id") else song
            for song in state.songs
        )
        return replace(state, is_mutating=False, songs=songs, selected_song=None)
    if isinstance(action, SongDeleted):
        return _after_delete(state, action.song_id)
    if isinstance(action, MutationFailed):
        return replace(state, is_mutating=False, error=action.error)

    if isinstance(action, FetchStatisticsRequested):
        return replace(state, error=None)
    if isinstance(action, StatisticsLoaded):
        return replace(state, statistics=action.statistics)
    if isinstance(action, StatisticsFailed):
        return replace(state, error=action.error)

    if isinstance(action, SongSelected):
        return replace(state, selected_song=action.song)
    if isinstance(action, FiltersChanged):
        return replace(state, filters=merge_filters(state.filters, action.filters))
    return state
