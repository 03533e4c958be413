"""
songapp/models/base.py
"""


from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

# ObjectIds travel as strings; conversion happens in the store layer
PyObjectId = str


def utcnow() -> datetime:
    """Current UTC time at the millisecond precision BSON dates store"""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class BaseDocument(BaseModel):
    """Base model for stored documents with common fields"""
    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    id: Optional[PyObjectId] = Field(default=None, alias="_id")
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")
    updated_at: datetime = Field(default_factory=utcnow, alias="updatedAt")
