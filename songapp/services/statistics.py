"""
Statistics aggregator

songapp/services/statistics.py

Computed over the whole collection on every request; filters never apply.
"""
import asyncio
import logging
from songapp.models.song import SongStatistics
from songapp.services.expressions import MatchAll
from songapp.stores.base import SongStore

logger = logging.getLogger(__name__)


async def compute_statistics(store: SongStore) -> SongStatistics:
    """
    Totals and grouped counts for the catalogue.

    The reads run concurrently; if any one of them fails the exception
    propagates and no partial statistics are returned.
    """
    (
        total_songs,
        artists,
        albums,
        genres,
        by_genre,
        by_artist,
        by_album,
    ) = await asyncio.gather(
        store.count(MatchAll()),
        store.distinct("artist"),
        store.distinct("album"),
        store.distinct("genre"),
        store.group_count("genre"),
        store.group_count("artist"),
        store.group_count("album", representative="artist"),
    )

    return SongStatistics(
        totalSongs=total_songs,
        totalArtists=len(artists),
        totalAlbums=len(albums),
        totalGenres=len(genres),
        songsByGenre=by_genre,
        songsByArtist=by_artist,
        songsByAlbum=by_album,
    )
