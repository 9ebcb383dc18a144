"""FastAPI router for AI article generation."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from blogstudio.auth import get_current_user
from blogstudio.generation.gateway import GenerationGateway
from blogstudio.generation.models import GenerateRequest, GenerationResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["generation"])


def get_gateway(request: Request) -> GenerationGateway:
    """The gateway built at startup (overridable in tests)."""
    return request.app.state.gateway


@router.post("/generate", response_model=GenerationResult)
def generate_article(
    body: GenerateRequest,
    current_user: dict = Depends(get_current_user),
    gateway: GenerationGateway = Depends(get_gateway),
):
    """Generate article HTML + summary; degrades to templated content on backend failure."""
    if not body.title or not body.title.strip():
        raise HTTPException(status_code=400, detail="Blog title is required")

    try:
        return gateway.generate(body)
    except Exception:
        logger.exception("Error generating content for user %s", current_user["user_id"])
        raise HTTPException(status_code=500, detail="Failed to generate content")
