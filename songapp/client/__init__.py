"""
Catalogue client: HTTP API wrapper and request-scoped UI state

songapp/client/__init__.py
"""
from songapp.client.api import ApiError, SongApiClient
from songapp.client.state import CatalogueState, reduce
from songapp.client.store import CatalogueStore

__all__ = ["ApiError", "SongApiClient", "CatalogueState", "reduce", "CatalogueStore"]
