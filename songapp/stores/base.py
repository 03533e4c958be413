"""
Record store contract

songapp/stores/base.py
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional
from songapp.services.expressions import Expression, Ordering

# Stored song as a plain mapping: _id (str), title, artist, album, genre,
# created_at, updated_at, and score on ranked results
SongDocument = Dict[str, Any]


class SongStore(ABC):
    """Document collection of songs.

    Backends raise StoreError for any failure of the underlying engine.
    """

    @abstractmethod
    async def find(
        self,
        predicate: Expression,
        ordering: Ordering,
        skip: int = 0,
        limit: int = 0,
    ) -> List[SongDocument]:
        """Matching songs in order; a relevance ordering adds a score to each"""

    @abstractmethod
    async def count(self, predicate: Expression) -> int:
        ...

    @abstractmethod
    async def distinct(self, field: str) -> List[Any]:
        ...

    @abstractmethod
    async def group_count(
        self, field: str, representative: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """[{"_id": value, "count": n, (representative): value}] by count descending"""

    @abstractmethod
    async def insert(self, fields: Mapping[str, Any]) -> SongDocument:
        ...

    @abstractmethod
    async def get(self, song_id: str) -> Optional[SongDocument]:
        ...

    @abstractmethod
    async def update(self, song_id: str, fields: Mapping[str, Any]) -> Optional[SongDocument]:
        ...

    @abstractmethod
    async def delete(self, song_id: str) -> Optional[SongDocument]:
        ...

    @abstractmethod
    async def clear(self) -> int:
        """Remove every song, returning how many were removed"""

    async def close(self) -> None:
        pass
