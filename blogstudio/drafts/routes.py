"""FastAPI router for draft endpoints. Every draft is private to its author."""

import logging
from typing import List, Literal, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Response

from blogstudio.auth import get_current_user
from blogstudio.drafts import database as db
from blogstudio.drafts.models import DraftSave, DraftResponse
from blogstudio.export import html_to_markdown, html_to_text, export_filename
from blogstudio.posts.models import PostResponse
from blogstudio.posts.publisher import publish_draft

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["drafts"])

EXPORT_FORMATS = {
    "markdown": ("md", "text/markdown", html_to_markdown),
    "text": ("txt", "text/plain", html_to_text),
}


async def _owned_draft(draft_id: int, user_id: int) -> dict:
    """Fetch a draft owned by the caller or raise 404."""
    try:
        draft = await db.get_draft(draft_id, user_id)
    except Exception:
        logger.exception("Error fetching draft %s", draft_id)
        raise HTTPException(status_code=500, detail="Failed to fetch drafts")
    if not draft:
        raise HTTPException(status_code=404, detail="Draft not found")
    return draft


@router.get("/drafts", response_model=Union[DraftResponse, List[DraftResponse]])
async def get_drafts(
    id: Optional[int] = None,
    sort: str = "latest",
    current_user: dict = Depends(get_current_user),
):
    """Get one of the caller's drafts by id, or all of them in the requested order."""
    user_id = current_user["user_id"]
    if id is not None:
        return await _owned_draft(id, user_id)

    try:
        return await db.list_drafts(user_id, sort=sort)
    except Exception:
        logger.exception("Error fetching drafts for user %s", user_id)
        raise HTTPException(status_code=500, detail="Failed to fetch drafts")


@router.post("/drafts", response_model=DraftResponse)
async def save_draft(
    body: DraftSave,
    response: Response,
    current_user: dict = Depends(get_current_user),
):
    """Create a draft, or overwrite one of the caller's drafts when an id is given."""
    if not body.title or not body.content:
        raise HTTPException(status_code=400, detail="Title and content are required")

    user_id = current_user["user_id"]
    fields = dict(
        title=body.title,
        content=body.content,
        topic=body.topic,
        tone=body.tone,
        length=body.length,
    )
    try:
        if body.id is not None:
            updated = await db.update_draft(body.id, user_id, **fields)
            draft_id = body.id
        else:
            draft_id = await db.insert_draft(user_id, **fields)
            updated = True
            response.status_code = 201
        draft = await db.get_draft(draft_id, user_id) if updated else None
    except Exception:
        logger.exception("Error saving draft for user %s", user_id)
        raise HTTPException(status_code=500, detail="Failed to save draft")

    if not draft:
        raise HTTPException(status_code=404, detail="Draft not found")
    return draft


@router.delete("/drafts")
async def delete_draft(
    id: Optional[int] = None,
    current_user: dict = Depends(get_current_user),
):
    """Delete one of the caller's drafts."""
    if id is None:
        raise HTTPException(status_code=400, detail="Draft ID is required")

    try:
        deleted = await db.delete_draft(id, current_user["user_id"])
    except Exception:
        logger.exception("Error deleting draft %s", id)
        raise HTTPException(status_code=500, detail="Failed to delete draft")

    if not deleted:
        raise HTTPException(status_code=404, detail="Draft not found")
    return {"success": True}


@router.post("/drafts/{draft_id}/publish", response_model=PostResponse, status_code=201)
async def publish_draft_endpoint(
    draft_id: int,
    current_user: dict = Depends(get_current_user),
):
    """Copy a draft into a new public post. The draft itself is left untouched."""
    draft = await _owned_draft(draft_id, current_user["user_id"])
    try:
        return await publish_draft(draft, author_id=current_user["user_id"])
    except Exception:
        logger.exception("Error publishing draft %s", draft_id)
        raise HTTPException(status_code=500, detail="Failed to publish draft")


@router.get("/drafts/{draft_id}/export")
async def export_draft(
    draft_id: int,
    format: Literal["markdown", "text"] = "markdown",
    current_user: dict = Depends(get_current_user),
):
    """Download a draft as Markdown or plain text."""
    draft = await _owned_draft(draft_id, current_user["user_id"])
    extension, media_type, convert = EXPORT_FORMATS[format]
    filename = export_filename(draft["title"], extension)
    return Response(
        content=convert(draft["content"]),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
