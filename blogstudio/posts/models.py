"""Pydantic request/response schemas for posts and ratings."""

from typing import Optional

from blogstudio.schemas import ApiModel


class PostCreate(ApiModel):
    """Request body for creating a post. Title, content and slug are checked by the route."""
    title: Optional[str] = None
    content: Optional[str] = None
    summary: Optional[str] = None
    slug: Optional[str] = None
    published: bool = False


class PostUpdate(ApiModel):
    """Partial update of an owned post; omitted fields keep their value."""
    title: Optional[str] = None
    content: Optional[str] = None
    summary: Optional[str] = None
    slug: Optional[str] = None
    published: Optional[bool] = None


class PostResponse(ApiModel):
    id: int
    title: str
    content: str
    summary: Optional[str] = None
    slug: str
    published: bool
    published_at: Optional[str] = None
    author_id: int
    author_username: Optional[str] = None
    created_at: str
    updated_at: str
    average_rating: float = 0.0
    rating_count: int = 0


class RatingRequest(ApiModel):
    post_id: Optional[int] = None
    value: Optional[int] = None


class RatingResponse(ApiModel):
    id: int
    user_id: int
    post_id: int
    value: int
    created_at: str
    updated_at: str


class RatingSummary(ApiModel):
    """Aggregate rating for a post plus the caller's own rating, if any."""
    average: float
    count: int
    user_rating: Optional[int] = None
