"""
songapp/models/song.py

"""


from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict
from songapp.models.base import BaseDocument

class SongBase(BaseModel):
    """Descriptive song fields, all required and non-empty after trimming"""
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    artist: str = Field(..., min_length=1, max_length=200)
    album: str = Field(..., min_length=1, max_length=200)
    genre: str = Field(..., min_length=1, max_length=100)

class SongCreate(SongBase):
    """Create song request model"""

class SongUpdate(SongBase):
    """Update song request model (replaces every descriptive field)"""

class SongResponse(SongBase, BaseDocument):
    """Song response model"""
    # Only set on ranked search results
    score: Optional[int] = None

class PaginationMeta(BaseModel):
    total: int
    page: int
    limit: int
    totalPages: int
    hasNextPage: bool
    hasPrevPage: bool
    sortBy: str
    sortOrder: str

class SongListResponse(BaseModel):
    data: List[SongResponse]
    pagination: PaginationMeta

class SongDeleteResponse(BaseModel):
    message: str
    song: SongResponse

class CategoryCount(BaseModel):
    """Number of songs sharing one field value"""
    model_config = ConfigDict(populate_by_name=True)

    key: str = Field(alias="_id")
    count: int

class AlbumCount(CategoryCount):
    # Artist of whichever album member the store surfaced first
    artist: Optional[str] = None

class SongStatistics(BaseModel):
    totalSongs: int
    totalArtists: int
    totalAlbums: int
    totalGenres: int
    songsByGenre: List[CategoryCount]
    songsByArtist: List[CategoryCount]
    songsByAlbum: List[AlbumCount]
