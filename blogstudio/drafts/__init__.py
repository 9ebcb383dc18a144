"""Drafts module — private, editable articles."""

from blogstudio.drafts.routes import router as drafts_router
from blogstudio.drafts.database import create_drafts_table

__all__ = ["drafts_router", "create_drafts_table"]
