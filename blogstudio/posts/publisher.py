"""
Draft → post publishing.

A published post is a copy of the draft's title and content; nothing links the
two afterwards, so later draft edits do not touch the post.
"""

import re
from typing import Any, Dict

from blogstudio.config import PUBLISH_SUMMARY_CHARS
from blogstudio.export import html_to_text
from blogstudio.posts import database as db


def generate_slug(title: str) -> str:
    """Convert a title to a URL-friendly slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    return slug[:80] or "post"


def build_summary(content: str, limit: int = PUBLISH_SUMMARY_CHARS) -> str:
    """First `limit` characters of the article text, tags stripped."""
    text = " ".join(html_to_text(content, separator=" ").split())
    return text[:limit]


async def publish_draft(draft: Dict[str, Any], author_id: int) -> Dict[str, Any]:
    """Create a published post from a draft's title and content. Returns the post."""
    post_id = await db.insert_post(
        author_id=author_id,
        title=draft["title"],
        content=draft["content"],
        slug=generate_slug(draft["title"]),
        summary=build_summary(draft["content"]),
        published=True,
    )
    return await db.get_post(post_id)
