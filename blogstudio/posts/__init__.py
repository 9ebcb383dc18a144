"""Posts module — public articles and their ratings."""

from blogstudio.posts.routes import router as posts_router
from blogstudio.posts.database import create_posts_table, create_ratings_table

__all__ = ["posts_router", "create_posts_table", "create_ratings_table"]
