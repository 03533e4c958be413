#songapp/api/deps.py

from fastapi import Depends, Request
from songapp.services.song_service import SongService
from songapp.stores.base import SongStore

def get_song_store(request: Request) -> SongStore:
    """Store created by the application lifespan"""
    return request.app.state.song_store

def get_song_service(store: SongStore = Depends(get_song_store)) -> SongService:
    return SongService(store)
