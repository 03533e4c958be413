"""
Song store backends

songapp/stores/__init__.py
"""
from songapp.core.config import settings
from songapp.core.database import get_database
from songapp.stores.base import SongDocument, SongStore
from songapp.stores.memory import InMemorySongStore
from songapp.stores.mongo import MongoSongStore


def create_song_store() -> SongStore:
    """Store for the configured backend; MongoDB must already be connected"""
    if settings.STORE_BACKEND == "memory":
        return InMemorySongStore()
    return MongoSongStore(get_database()[settings.SONGS_COLLECTION])


__all__ = [
    "SongDocument",
    "SongStore",
    "InMemorySongStore",
    "MongoSongStore",
    "create_song_store",
]
