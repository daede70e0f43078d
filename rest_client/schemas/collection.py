"""
Pydantic schemas for collections of saved requests.
"""

from pydantic import BaseModel, Field

from .request import RequestDraft


class Collection(BaseModel):
    """A named, ordered set of saved drafts."""
    id: str
    name: str
    requests: list[RequestDraft] = []


class CollectionCreate(BaseModel):
    """Schema for creating a new collection."""
    name: str = Field(min_length=1)


class CollectionUpdate(BaseModel):
    """Schema for renaming a collection."""
    name: str = Field(min_length=1)
