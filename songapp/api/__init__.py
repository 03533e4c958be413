"""
API routers

songapp/api/__init__.py
"""
from fastapi import APIRouter

# Create the main API router
api_router = APIRouter()

from songapp.api.songs import router as songs_router

api_router.include_router(songs_router, prefix="/songs", tags=["songs"])
