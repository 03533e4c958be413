"""
Seed the catalogue with demo songs

songapp/seed.py

Usage: python -m songapp.seed
"""
import asyncio
import logging
from songapp.core.config import settings
from songapp.core.database import close_mongo_connection, connect_to_mongo
from songapp.services.song_service import SongService
from songapp.stores import create_song_store
from songapp.stores.base import SongStore

logger = logging.getLogger(__name__)

SEED_SONGS = [
    {"title": "Neon Mirage", "artist": "Aurora Bloom", "album": "Midnight Canvas", "genre": "Synthwave"},
    {"title": "Chromatic Dreams", "artist": "Aurora Bloom", "album": "Electric Pulse", "genre": "Indie Pop"},
    {"title": "Skyline Reverie", "artist": "Aurora Bloom", "album": "City Lights", "genre": "Ambient"},
    {"title": "Pulse Runner", "artist": "Neon Drift", "album": "Electric Pulse", "genre": "Synthwave"},
    {"title": "Strobe Horizon", "artist": "Neon Drift", "album": "Waves of Glass", "genre": "Alternative Rock"},
    {"title": "Static Love", "artist": "Neon Drift", "album": "Celestial Lines", "genre": "Indie Pop"},
    {"title": "Rainy Avenue", "artist": "Echo Street", "album": "City Lights", "genre": "Jazz Fusion"},
    {"title": "Late Night Signals", "artist": "Echo Street", "album": "Midnight Canvas", "genre": "Alternative Rock"},
    {"title": "Concrete Lanterns", "artist": "Echo Street", "album": "Electric Pulse", "genre": "Indie Pop"},
    {"title": "Satin Sunsets", "artist": "Velvet Horizon", "album": "Waves of Glass", "genre": "Ambient"},
    {"title": "Golden Paradox", "artist": "Velvet Horizon", "album": "Celestial Lines", "genre": "Jazz Fusion"},
    {"title": "Ivory Echo", "artist": "Velvet Horizon", "album": "City Lights", "genre": "Synthwave"},
    {"title": "Tidal Bloom", "artist": "Solaris Tide", "album": "Celestial Lines", "genre": "Ambient"},
    {"title": "Luminary Drift", "artist": "Solaris Tide", "album": "Waves of Glass", "genre": "Jazz Fusion"},
    {"title": "Orbital Trails", "artist": "Solaris Tide", "album": "Midnight Canvas", "genre": "Alternative Rock"},
]


async def seed_songs(store: SongStore) -> int:
    """Replace the catalogue with SEED_SONGS, returning the inserted count"""
    removed = await store.clear()
    logger.info(f"Removed {removed} existing songs")

    service = SongService(store)
    for song in SEED_SONGS:
        await service.create_song(song)
    return len(SEED_SONGS)


async def main():
    if settings.STORE_BACKEND == "mongo":
        await connect_to_mongo()
    store = create_song_store()
    try:
        count = await seed_songs(store)
        logger.info(f"Seeded {count} songs successfully.")
    finally:
        await store.close()
        if settings.STORE_BACKEND == "mongo":
            await close_mongo_connection()
            logger.info("Database connection closed.")


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    asyncio.run(main())
