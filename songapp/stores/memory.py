"""
In-memory song store

songapp/stores/memory.py

Evaluates the same expressions the MongoDB backend compiles, over a dict of
documents. Backs the test suite and STORE_BACKEND=memory.
"""
from copy import deepcopy
from typing import Any, Dict, List, Mapping, Optional
import logging

from bson import ObjectId

from songapp.models.base import utcnow
from songapp.services.expressions import Expression, Ordering, evaluate, score
from songapp.stores.base import SongDocument, SongStore

logger = logging.getLogger(__name__)


class InMemorySongStore(SongStore):
    def __init__(self):
        # Insertion order doubles as "store order"
        self._documents: Dict[str, SongDocument] = {}

    async def find(
        self,
        predicate: Expression,
        ordering: Ordering,
        skip: int = 0,
        limit: int = 0,
    ) -> List[SongDocument]:
        docs = [deepcopy(doc) for doc in self._documents.values() if evaluate(predicate, doc)]

        # Stable sorts applied from the least to the most significant key
        for field, direction in reversed(ordering.keys):
            docs.sort(key=lambda doc: doc.get(field), reverse=direction < 0)
        if ordering.relevance is not None:
            for doc in docs:
                doc["score"] = score(ordering.relevance, doc)
            docs.sort(key=lambda doc: doc["score"], reverse=True)

        docs = docs[skip:]
        return docs[:limit] if limit else docs

    async def count(self, predicate: Expression) -> int:
        return sum(1 for doc in self._documents.values() if evaluate(predicate, doc))

    async def distinct(self, field: str) -> List[Any]:
        values: List[Any] = []
        for doc in self._documents.values():
            value = doc.get(field)
            if value not in values:
                values.append(value)
        return values

    async def group_count(
        self, field: str, representative: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        groups: Dict[Any, Dict[str, Any]] = {}
        for doc in self._documents.values():
            key = doc.get(field)
            group = groups.get(key)
            if group is None:
                group = groups[key] = {"_id": key, "count": 0}
                if representative:
                    group[representative] = doc.get(representative)
            group["count"] += 1
        return sorted(groups.values(), key=lambda group: group["count"], reverse=True)

    async def insert(self, fields: Mapping[str, Any]) -> SongDocument:
        now = utcnow()
        song_id = str(ObjectId())
        self._documents[song_id] = {
            "_id": song_id,
            **fields,
            "created_at": now,
            "updated_at": now,
        }
        return deepcopy(self._documents[song_id])

    async def get(self, song_id: str) -> Optional[SongDocument]:
        doc = self._documents.get(song_id)
        return deepcopy(doc) if doc else None

    async def update(self, song_id: str, fields: Mapping[str, Any]) -> Optional[SongDocument]:
        doc = self._documents.get(song_id)
        if doc is None:
            return None
        doc.update(fields)
        doc["updated_at"] = utcnow()
        return deepcopy(doc)

    async def delete(self, song_id: str) -> Optional[SongDocument]:
        return self._documents.pop(song_id, None)

    async def clear(self) -> int:
        removed = len(self._documents)
        self._documents.clear()
        logger.info(f"Cleared {removed} songs from memory")
        return removed
