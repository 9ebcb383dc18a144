"""FastAPI router for post and rating endpoints."""

import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query

from blogstudio.auth import get_current_user, get_optional_user
from blogstudio.posts import database as db
from blogstudio.posts.models import (
    PostCreate, PostUpdate, PostResponse,
    RatingRequest, RatingResponse, RatingSummary,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["posts"])


def _visible(post: Optional[dict], user_id: Optional[int]) -> bool:
    """Published posts are public; unpublished ones exist only for their author."""
    return bool(post) and (post["published"] or post["author_id"] == user_id)


@router.get("/posts", response_model=Union[PostResponse, List[PostResponse]])
async def get_posts(
    id: Optional[int] = None,
    sort: str = "latest",
    current_user: Optional[dict] = Depends(get_optional_user),
):
    """List published posts, or fetch one post (unpublished posts only for their author)."""
    try:
        if id is None:
            return await db.list_published_posts(sort=sort)
        post = await db.get_post(id)
    except Exception:
        logger.exception("Error fetching posts")
        raise HTTPException(status_code=500, detail="Failed to fetch posts")

    user_id = current_user["user_id"] if current_user else None
    if not _visible(post, user_id):
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.post("/posts", response_model=PostResponse, status_code=201)
async def create_post(
    body: PostCreate,
    current_user: dict = Depends(get_current_user),
):
    """Create a post owned by the caller."""
    if not body.title or not body.content or not body.slug:
        raise HTTPException(status_code=400, detail="Title, content, and slug are required")

    try:
        post_id = await db.insert_post(
            author_id=current_user["user_id"],
            title=body.title,
            content=body.content,
            slug=body.slug,
            summary=body.summary,
            published=body.published,
        )
        post = await db.get_post(post_id)
    except Exception:
        logger.exception("Error creating post for user %s", current_user["user_id"])
        raise HTTPException(status_code=500, detail="Failed to create post")

    logger.info("Post created: %s by user %s", post_id, current_user["user_id"])
    return post


@router.put("/posts", response_model=PostResponse)
async def update_post(
    body: PostUpdate,
    id: Optional[int] = None,
    current_user: dict = Depends(get_current_user),
):
    """Partially update one of the caller's posts, e.g. to publish or unpublish it."""
    if id is None:
        raise HTTPException(status_code=400, detail="Post ID is required")
    for field in ("title", "content", "slug"):
        if getattr(body, field) is not None and not getattr(body, field).strip():
            raise HTTPException(status_code=400, detail=f"{field.capitalize()} cannot be empty")

    try:
        updated = await db.update_post(id, current_user["user_id"], **body.model_dump())
        post = await db.get_post(id) if updated else None
    except Exception:
        logger.exception("Error updating post %s", id)
        raise HTTPException(status_code=500, detail="Failed to update post")

    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.delete("/posts")
async def delete_post(
    id: Optional[int] = None,
    current_user: dict = Depends(get_current_user),
):
    """Delete one of the caller's posts."""
    if id is None:
        raise HTTPException(status_code=400, detail="Post ID is required")

    try:
        deleted = await db.delete_post(id, current_user["user_id"])
    except Exception:
        logger.exception("Error deleting post %s", id)
        raise HTTPException(status_code=500, detail="Failed to delete post")

    if not deleted:
        raise HTTPException(status_code=404, detail="Post not found")
    return {"success": True}


@router.post("/posts/rate", response_model=RatingResponse)
async def rate_post(
    body: RatingRequest,
    current_user: dict = Depends(get_current_user),
):
    """Set or replace the caller's 1-5 rating for a post."""
    if body.post_id is None or body.value is None or not 1 <= body.value <= 5:
        raise HTTPException(status_code=400, detail="Invalid rating data")

    try:
        post = await db.get_post(body.post_id)
        visible = _visible(post, current_user["user_id"])
        if visible:
            rating = await db.upsert_rating(current_user["user_id"], body.post_id, body.value)
    except Exception:
        logger.exception("Error rating post %s", body.post_id)
        raise HTTPException(status_code=500, detail="Failed to rate post")

    if not visible:
        raise HTTPException(status_code=404, detail="Post not found")
    return rating


@router.get("/posts/ratings", response_model=RatingSummary)
async def get_ratings(
    post_id: Optional[int] = Query(None, alias="postId"),
    current_user: Optional[dict] = Depends(get_optional_user),
):
    """Average rating and count for a post, plus the caller's own rating if signed in."""
    if post_id is None:
        raise HTTPException(status_code=400, detail="postId is required")

    user_id = current_user["user_id"] if current_user else None
    try:
        post = await db.get_post(post_id)
        summary = await db.get_rating_summary(post_id, user_id=user_id) if _visible(post, user_id) else None
    except Exception:
        logger.exception("Error fetching ratings for post %s", post_id)
        raise HTTPException(status_code=500, detail="Failed to fetch ratings")

    if summary is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return summary
