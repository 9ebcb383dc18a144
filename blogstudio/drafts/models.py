"""Pydantic request/response schemas for the drafts module."""

from typing import Optional

from blogstudio.schemas import ApiModel


class DraftSave(ApiModel):
    """Create (no id) or overwrite (with id) a draft. Required fields are checked by the route."""
    id: Optional[int] = None
    title: Optional[str] = None
    content: Optional[str] = None
    topic: Optional[str] = None
    tone: Optional[str] = None
    length: Optional[str] = None


class DraftResponse(ApiModel):
    id: int
    title: str
    content: str
    topic: Optional[str] = None
    tone: Optional[str] = None
    length: Optional[str] = None
    author_id: int
    created_at: str
    updated_at: str
