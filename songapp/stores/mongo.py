"""
MongoDB song store (motor)

songapp/stores/mongo.py
"""
from contextlib import contextmanager
from typing import Any, Dict, List, Mapping, Optional
import logging
import re

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from songapp.core.exceptions import StoreError
from songapp.models.base import utcnow
from songapp.services.expressions import (
    And,
    Expression,
    MatchAll,
    MatchMode,
    Or,
    Ordering,
    Relevance,
    TextMatch,
)
from songapp.stores.base import SongDocument, SongStore

logger = logging.getLogger(__name__)

SCORE_FIELD = "_score"


def regex_pattern(match: TextMatch) -> str:
    """Literal regex for a text match; user input never acts as pattern syntax"""
    escaped = re.escape(match.value)
    if match.mode is MatchMode.EXACT:
        return f"^{escaped}$"
    if match.mode is MatchMode.PREFIX:
        return f"^{escaped}"
    return escaped


def compile_filter(expression: Expression) -> Dict[str, Any]:
    """Translate a predicate into a MongoDB query document"""
    if isinstance(expression, MatchAll):
        return {}
    if isinstance(expression, TextMatch):
        return {expression.field: {"$regex": regex_pattern(expression), "$options": "i"}}
    if isinstance(expression, And):
        return {"$and": [compile_filter(clause) for clause in expression.clauses]}
    if isinstance(expression, Or):
        return {"$or": [compile_filter(clause) for clause in expression.clauses]}
    raise TypeError(f"Unsupported expression: {expression!r}")


def compile_condition(expression: Expression) -> Any:
    """Translate a predicate into an aggregation boolean expression"""
    if isinstance(expression, MatchAll):
        return True
    if isinstance(expression, TextMatch):
        return {
            "$regexMatch": {
                "input": {"$ifNull": [f"${expression.field}", ""]},
                "regex": regex_pattern(expression),
                "options": "i",
            }
        }
    if isinstance(expression, And):
        return {"$and": [compile_condition(clause) for clause in expression.clauses]}
    if isinstance(expression, Or):
        return {"$or": [compile_condition(clause) for clause in expression.clauses]}
    raise TypeError(f"Unsupported expression: {expression!r}")


def compile_relevance(relevance: Relevance) -> Dict[str, Any]:
    """Translate a relevance expression into a summed $switch per rule"""
    return {
        "$add": [
            {
                "$switch": {
                    "branches": [
                        {"case": compile_condition(condition), "then": points}
                        for condition, points in rule.branches
                    ],
                    "default": 0,
                }
            }
            for rule in relevance.rules
        ]
    }


def compile_pipeline(
    predicate: Expression, ordering: Ordering, skip: int, limit: int
) -> List[Dict[str, Any]]:
    """Aggregation pipeline for a relevance-ranked find"""
    sort: Dict[str, int] = {SCORE_FIELD: -1}
    sort.update(ordering.keys)
    pipeline = [
        {"$match": compile_filter(predicate)},
        {"$addFields": {SCORE_FIELD: compile_relevance(ordering.relevance)}},
        {"$sort": sort},
    ]
    if skip:
        pipeline.append({"$skip": skip})
    if limit:
        pipeline.append({"$limit": limit})
    return pipeline


def serialize(doc: Dict[str, Any]) -> SongDocument:
    doc["_id"] = str(doc["_id"])
    if SCORE_FIELD in doc:
        doc["score"] = doc.pop(SCORE_FIELD)
    return doc


@contextmanager
def translate_errors(operation: str):
    try:
        yield
    except PyMongoError as e:
        logger.error(f"MongoDB {operation} failed: {e}")
        raise StoreError(f"{operation} failed") from e


class MongoSongStore(SongStore):
    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def find(
        self,
        predicate: Expression,
        ordering: Ordering,
        skip: int = 0,
        limit: int = 0,
    ) -> List[SongDocument]:
        with translate_errors("find"):
            if ordering.relevance is not None:
                pipeline = compile_pipeline(predicate, ordering, skip, limit)
                cursor = self.collection.aggregate(pipeline)
            else:
                cursor = self.collection.find(compile_filter(predicate))
                cursor = cursor.sort(list(ordering.keys)).skip(skip).limit(limit)
            docs = await cursor.to_list(length=None)
        return [serialize(doc) for doc in docs]

    async def count(self, predicate: Expression) -> int:
        with translate_errors("count"):
            return await self.collection.count_documents(compile_filter(predicate))

    async def distinct(self, field: str) -> List[Any]:
        with translate_errors("distinct"):
            return await self.collection.distinct(field)

    async def group_count(
        self, field: str, representative: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        group: Dict[str, Any] = {"_id": f"${field}", "count": {"$sum": 1}}
        if representative:
            group[representative] = {"$first": f"${representative}"}
        pipeline = [
            {"$group": group},
            {"$sort": {"count": -1}},
        ]
        with translate_errors("aggregate"):
            return await self.collection.aggregate(pipeline).to_list(length=None)

    async def insert(self, fields: Mapping[str, Any]) -> SongDocument:
        now = utcnow()
        doc = {**fields, "created_at": now, "updated_at": now}
        with translate_errors("insert"):
            result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize(doc)

    async def get(self, song_id: str) -> Optional[SongDocument]:
        if not ObjectId.is_valid(song_id):
            return None
        with translate_errors("find_one"):
            doc = await self.collection.find_one({"_id": ObjectId(song_id)})
        return serialize(doc) if doc else None

    async def update(self, song_id: str, fields: Mapping[str, Any]) -> Optional[SongDocument]:
        if not ObjectId.is_valid(song_id):
            return None
        update = {**fields, "updated_at": utcnow()}
        with translate_errors("update"):
            doc = await self.collection.find_one_and_update(
                {"_id": ObjectId(song_id)},
                {"$set": update},
                return_document=ReturnDocument.AFTER,
            )
        return serialize(doc) if doc else None

    async def delete(self, song_id: str) -> Optional[SongDocument]:
        if not ObjectId.is_valid(song_id):
            return None
        with translate_errors("delete"):
            doc = await self.collection.find_one_and_delete({"_id": ObjectId(song_id)})
        return serialize(doc) if doc else None

    async def clear(self) -> int:
        with translate_errors("delete_many"):
            result = await self.collection.delete_many({})
        return result.deleted_count
