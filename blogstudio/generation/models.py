"""Pydantic request/response schemas for the generation module."""

from typing import Literal, Optional

from blogstudio.schemas import ApiModel

Tone = Literal["professional", "casual", "academic", "conversational"]
Length = Literal["short", "medium", "long"]


class GenerateRequest(ApiModel):
    """Request body for AI article generation. Title presence is checked by the route."""
    title: Optional[str] = None
    topic: Optional[str] = None
    tone: Tone = "professional"
    length: Length = "medium"


class GenerationResult(ApiModel):
    """Generated article: HTML content, effective title, plain-text summary."""
    content: str
    title: str
    summary: str
    is_fallback: bool = False
