"""
Domain errors raised by the services and store adapters

songapp/core/exceptions.py
"""


class SongAppError(Exception):
    """Base class for all catalogue errors"""


class ValidationError(SongAppError):
    """A required descriptive field is missing or empty (HTTP 400)"""


class NotFoundError(SongAppError):
    """No record matches the identifier (HTTP 404)"""


class StoreError(SongAppError):
    """The record store failed to read, write or aggregate (HTTP 500)"""
