"""SQLite CRUD operations for the posts and ratings tables."""

from typing import Optional, List, Dict, Any

from blogstudio.auth.database import get_db, utc_now

# Post rows joined with the author's name and the rating aggregate
POST_SELECT = """
    SELECT p.id, p.title, p.content, p.summary, p.slug, p.published, p.published_at,
           p.author_id, u.username AS author_username, p.created_at, p.updated_at,
           COALESCE(AVG(r.value), 0) AS average_rating, COUNT(r.id) AS rating_count
    FROM posts p
    LEFT JOIN users u ON u.id = p.author_id
    LEFT JOIN ratings r ON r.post_id = p.id
"""

# Unrated posts average 0, so "highest-rated" degrades to "latest" among them
POST_ORDER = {
    "latest": "p.published_at DESC, p.id DESC",
    "earliest": "p.published_at ASC, p.id ASC",
    "highest-rated": "average_rating DESC, p.published_at DESC, p.id DESC",
}


async def create_posts_table():
    """Create the posts table if it doesn't exist. Called from init_db()."""
    db = await get_db()
    try:
        await db.executescript("""
            CREATE TABLE IF NOT EXISTS posts (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                content TEXT NOT NULL,
                summary TEXT,
                slug TEXT NOT NULL,
                published INTEGER NOT NULL DEFAULT 0,
                published_at TEXT,
                author_id INTEGER NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                FOREIGN KEY (author_id) REFERENCES users(id)
            );
            CREATE INDEX IF NOT EXISTS idx_posts_author ON posts(author_id);
            CREATE INDEX IF NOT EXISTS idx_posts_slug ON posts(slug);
            CREATE INDEX IF NOT EXISTS idx_posts_published ON posts(published, published_at);
        """)
        await db.commit()
    finally:
        await db.close()


async def create_ratings_table():
    """Create the ratings table if it doesn't exist. Called from init_db()."""
    db = await get_db()
    try:
        await db.executescript("""
            CREATE TABLE IF NOT EXISTS ratings (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                post_id INTEGER NOT NULL,
                value INTEGER NOT NULL CHECK (value BETWEEN 1 AND 5),
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                UNIQUE (user_id, post_id),
                FOREIGN KEY (user_id) REFERENCES users(id),
                FOREIGN KEY (post_id) REFERENCES posts(id) ON DELETE CASCADE
            );
            CREATE INDEX IF NOT EXISTS idx_ratings_post ON ratings(post_id);
        """)
        await db.commit()
    finally:
        await db.close()


async def insert_post(
    author_id: int,
    title: str,
    content: str,
    slug: str,
    summary: Optional[str] = None,
    published: bool = False,
) -> int:
    """Insert a new post. published_at is stamped only for published posts."""
    now = utc_now()
    db = await get_db()
    try:
        cursor = await db.execute(
            """INSERT INTO posts
               (title, content, summary, slug, published, published_at, author_id, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (title, content, summary, slug, int(published), now if published else None,
             author_id, now, now),
        )
        await db.commit()
        return cursor.lastrowid
    finally:
        await db.close()


async def get_post(post_id: int) -> Optional[Dict[str, Any]]:
    """Get a single post with its rating aggregate, regardless of owner."""
    db = await get_db()
    try:
        cursor = await db.execute(
            POST_SELECT + " WHERE p.id = ? GROUP BY p.id",
            (post_id,),
        )
        row = await cursor.fetchone()
        return _row_to_post(row) if row else None
    finally:
        await db.close()


async def list_published_posts(sort: str = "latest") -> List[Dict[str, Any]]:
    """All published posts. Unknown sort keys order like "latest"."""
    order_by = POST_ORDER.get(sort, POST_ORDER["latest"])
    db = await get_db()
    try:
        rows = await db.execute_fetchall(
            POST_SELECT + f" WHERE p.published = 1 GROUP BY p.id ORDER BY {order_by}"
        )
        return [_row_to_post(r) for r in rows]
    finally:
        await db.close()


async def update_post(post_id: int, author_id: int, **changes: Any) -> bool:
    """
    Apply a partial update to an owned post. Returns False when the post is
    missing or owned by someone else.

    Publishing stamps published_at (kept if already published); unpublishing
    clears it.
    """
    db = await get_db()
    try:
        cursor = await db.execute(
            "SELECT title, content, summary, slug, published, published_at "
            "FROM posts WHERE id = ? AND author_id = ?",
            (post_id, author_id),
        )
        row = await cursor.fetchone()
        if not row:
            return False

        current = dict(row)
        current.update({k: v for k, v in changes.items() if v is not None})

        now = utc_now()
        published = bool(current["published"])
        if not published:
            published_at = None
        else:
            published_at = row["published_at"] or now

        await db.execute(
            """UPDATE posts
               SET title = ?, content = ?, summary = ?, slug = ?,
                   published = ?, published_at = ?, updated_at = ?
               WHERE id = ? AND author_id = ?""",
            (current["title"], current["content"], current["summary"], current["slug"],
             int(published), published_at, now, post_id, author_id),
        )
        await db.commit()
        return True
    finally:
        await db.close()


async def delete_post(post_id: int, author_id: int) -> bool:
    """Delete an owned post (its ratings cascade). Returns True if deleted."""
    db = await get_db()
    try:
        cursor = await db.execute(
            "DELETE FROM posts WHERE id = ? AND author_id = ?",
            (post_id, author_id),
        )
        await db.commit()
        return cursor.rowcount > 0
    finally:
        await db.close()


async def upsert_rating(user_id: int, post_id: int, value: int) -> Dict[str, Any]:
    """Set the user's rating for a post; a second rating replaces the first."""
    now = utc_now()
    db = await get_db()
    try:
        await db.execute(
            """INSERT INTO ratings (user_id, post_id, value, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?)
               ON CONFLICT (user_id, post_id)
               DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at""",
            (user_id, post_id, value, now, now),
        )
        await db.commit()
        cursor = await db.execute(
            """SELECT id, user_id, post_id, value, created_at, updated_at
               FROM ratings WHERE user_id = ? AND post_id = ?""",
            (user_id, post_id),
        )
        return dict(await cursor.fetchone())
    finally:
        await db.close()


async def get_rating_summary(post_id: int, user_id: Optional[int] = None) -> Dict[str, Any]:
    """Average and count of a post's ratings, plus user_id's own rating when given."""
    db = await get_db()
    try:
        rows = await db.execute_fetchall(
            "SELECT user_id, value FROM ratings WHERE post_id = ?",
            (post_id,),
        )
        values = [r["value"] for r in rows]
        user_rating = None
        if user_id is not None:
            user_rating = next((r["value"] for r in rows if r["user_id"] == user_id), None)
        return {
            "average": sum(values) / len(values) if values else 0,
            "count": len(values),
            "user_rating": user_rating,
        }
    finally:
        await db.close()


def _row_to_post(r) -> Dict[str, Any]:
    """Convert a raw SQLite row to a post dict."""
    post = dict(r)
    post["published"] = bool(post["published"])
    post["average_rating"] = float(post["average_rating"] or 0)
    return post
