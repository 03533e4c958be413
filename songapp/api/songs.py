"""
Song CRUD, listing and statistics endpoints

songapp/api/songs.py

"""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
import logging

from songapp.api.deps import get_song_service
from songapp.core.exceptions import NotFoundError, StoreError, ValidationError
from songapp.models.song import (
    SongCreate,
    SongDeleteResponse,
    SongListResponse,
    SongResponse,
    SongStatistics,
    SongUpdate,
)
from songapp.services.query import normalize_query
from songapp.services.song_service import SongService

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("", response_model=SongResponse, response_model_exclude_none=True, status_code=status.HTTP_201_CREATED)
async def create_song(
    song: SongCreate,
    service: SongService = Depends(get_song_service)
):
    """Create a new song"""
    try:
        return await service.create_song(song)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create song"
        )

@router.get("", response_model=SongListResponse, response_model_exclude_none=True)
async def list_songs(
    artist: Optional[str] = Query(None, description="Substring of the artist name"),
    genre: Optional[str] = Query(None, description="Substring of the genre"),
    album: Optional[str] = Query(None, description="Substring of the album title"),
    search: Optional[str] = Query(None, description="Free-text search, ranked by relevance"),
    sortBy: Optional[str] = Query(None, description="title, artist, album, genre, createdAt or updatedAt"),
    sortOrder: Optional[str] = Query(None, description="asc or desc"),
    page: Optional[str] = Query(None, description="Page number, starting at 1"),
    limit: Optional[str] = Query(None, description="Page size, at most 50"),
    service: SongService = Depends(get_song_service)
):
    """
    List songs with filters, search, sorting and pagination

    - Malformed paging or sort values fall back to their defaults
    - Filters are case-insensitive substring matches
    - A search term orders results by relevance first
    """
    query = normalize_query({
        "artist": artist,
        "genre": genre,
        "album": album,
        "search": search,
        "sortBy": sortBy,
        "sortOrder": sortOrder,
        "page": page,
        "limit": limit,
    })
    try:
        return await service.list_songs(query)
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch songs"
        )

@router.get("/stats", response_model=SongStatistics)
async def get_statistics(service: SongService = Depends(get_song_service)):
    """Totals and grouped counts over the whole catalogue"""
    try:
        return await service.get_statistics()
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get statistics"
        )

@router.get("/{song_id}", response_model=SongResponse, response_model_exclude_none=True)
async def get_song(
    song_id: str,
    service: SongService = Depends(get_song_service)
):
    """Get a specific song by ID"""
    try:
        return await service.get_song(song_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch song"
        )

@router.put("/{song_id}", response_model=SongResponse, response_model_exclude_none=True)
async def update_song(
    song_id: str,
    song_update: SongUpdate,
    service: SongService = Depends(get_song_service)
):
    """Replace the descriptive fields of a song"""
    try:
        return await service.update_song(song_id, song_update)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update song"
        )

@router.delete("/{song_id}", response_model=SongDeleteResponse, response_model_exclude_none=True)
async def delete_song(
    song_id: str,
    service: SongService = Depends(get_song_service)
):
    """Delete a song"""
    try:
        song = await service.delete_song(song_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete song"
        )
    return SongDeleteResponse(message="Song deleted successfully", song=song)
