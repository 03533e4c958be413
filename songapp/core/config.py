"""

songapp/core/config.py

"""


from pydantic_settings import BaseSettings
from typing import List, Literal

class Settings(BaseSettings):
    # App
    APP_NAME: str = "Song Manager API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Database
    MONGODB_URL: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "songdb"
    SONGS_COLLECTION: str = "songs"

    # "memory" runs the API without MongoDB
    STORE_BACKEND: Literal["mongo", "memory"] = "mongo"

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Pagination
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 50

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
