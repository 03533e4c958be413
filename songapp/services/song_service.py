"""
Song operations shared by the API routes and the seed script

songapp/services/song_service.py
"""
import asyncio
import logging
from typing import Any, Mapping, Union

from pydantic import ValidationError as PydanticValidationError

from songapp.core.exceptions import NotFoundError, ValidationError
from songapp.models.song import (
    SongBase,
    SongCreate,
    SongListResponse,
    SongResponse,
    SongStatistics,
    SongUpdate,
)
from songapp.services.pagination import build_pagination
from songapp.services.predicates import build_predicate
from songapp.services.query import SongQuery
from songapp.services.ranking import build_ordering
from songapp.services.statistics import compute_statistics
from songapp.stores.base import SongStore

logger = logging.getLogger(__name__)

SongInput = Union[SongBase, Mapping[str, Any]]


def validate_song(data: SongInput, model=SongCreate) -> SongBase:
    if isinstance(data, SongBase):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError("Title, artist, album and genre are required") from e


class SongService:
    def __init__(self, store: SongStore):
        self.store = store

    async def list_songs(self, query: SongQuery) -> SongListResponse:
        """One page of matching songs, ranked by relevance when searching.

        The count and the page fetch are independent reads and are not a
        consistent snapshot under concurrent writes.
        """
        predicate = build_predicate(query)
        ordering = build_ordering(query)

        total, docs = await asyncio.gather(
            self.store.count(predicate),
            self.store.find(predicate, ordering, skip=query.skip, limit=query.limit),
        )

        return SongListResponse(
            data=[SongResponse(**doc) for doc in docs],
            pagination=build_pagination(total, query),
        )

    async def get_song(self, song_id: str) -> SongResponse:
        doc = await self.store.get(song_id)
        if not doc:
            raise NotFoundError("Song not found")
        return SongResponse(**doc)

    async def create_song(self, data: SongInput) -> SongResponse:
        song = validate_song(data, SongCreate)
        doc = await self.store.insert(song.model_dump())
        logger.info(f"Created song {doc['_id']} '{song.title}' by {song.artist}")
        return SongResponse(**doc)

    async def update_song(self, song_id: str, data: SongInput) -> SongResponse:
        song = validate_song(data, SongUpdate)
        doc = await self.store.update(song_id, song.model_dump())
        if not doc:
            raise NotFoundError("Song not found")
        logger.info(f"Updated song {song_id}")
        return SongResponse(**doc)

    async def delete_song(self, song_id: str) -> SongResponse:
        doc = await self.store.delete(song_id)
        if not doc:
            raise NotFoundError("Song not found")
        logger.info(f"Deleted song {song_id}")
        return SongResponse(**doc)

    async def get_statistics(self) -> SongStatistics:
        return await compute_statistics(self.store)
