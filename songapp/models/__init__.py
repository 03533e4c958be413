"""

songapp/models/__init__.py

"""


from songapp.models.base import *
from songapp.models.song import *

__all__ = [
    # Base
    "PyObjectId",
    "BaseDocument",
    "utcnow",

    # Song models
    "SongBase",
    "SongCreate",
    "SongUpdate",
    "SongResponse",
    "SongDeleteResponse",
    "PaginationMeta",
    "SongListResponse",

    # Statistics models
    "CategoryCount",
    "AlbumCount",
    "SongStatistics",
]
