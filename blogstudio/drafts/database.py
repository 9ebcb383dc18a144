"""SQLite CRUD operations for the drafts table. Every query is scoped to the author."""

from typing import Optional, List, Dict, Any

from blogstudio.auth.database import get_db, utc_now

DRAFT_COLUMNS = "id, title, content, topic, tone, length, author_id, created_at, updated_at"

# Drafts are never rated, so "highest-rated" orders like "latest"
DRAFT_ORDER = {
    "latest": "updated_at DESC, id DESC",
    "earliest": "updated_at ASC, id ASC",
    "highest-rated": "updated_at DESC, id DESC",
}


async def create_drafts_table():
    """Create the drafts table if it doesn't exist. Called from init_db()."""
    db = await get_db()
    try:
        await db.executescript("""
            CREATE TABLE IF NOT EXISTS drafts (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                content TEXT NOT NULL,
                topic TEXT,
                tone TEXT,
                length TEXT,
                author_id INTEGER NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                FOREIGN KEY (author_id) REFERENCES users(id)
            );
            CREATE INDEX IF NOT EXISTS idx_drafts_author ON drafts(author_id);
        """)
        await db.commit()
    finally:
        await db.close()


async def insert_draft(
    author_id: int,
    title: str,
    content: str,
    topic: Optional[str] = None,
    tone: Optional[str] = None,
    length: Optional[str] = None,
) -> int:
    """Insert a new draft. Returns the draft ID."""
    now = utc_now()
    db = await get_db()
    try:
        cursor = await db.execute(
            """INSERT INTO drafts
               (title, content, topic, tone, length, author_id, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            (title, content, topic, tone, length, author_id, now, now),
        )
        await db.commit()
        return cursor.lastrowid
    finally:
        await db.close()


async def get_draft(draft_id: int, author_id: int) -> Optional[Dict[str, Any]]:
    """Get a draft owned by author_id, or None (missing and not-owned look the same)."""
    db = await get_db()
    try:
        cursor = await db.execute(
            f"SELECT {DRAFT_COLUMNS} FROM drafts WHERE id = ? AND author_id = ?",
            (draft_id, author_id),
        )
        row = await cursor.fetchone()
        return dict(row) if row else None
    finally:
        await db.close()


async def list_drafts(author_id: int, sort: str = "latest") -> List[Dict[str, Any]]:
    """All drafts of one author. Unknown sort keys order like "latest"."""
    order_by = DRAFT_ORDER.get(sort, DRAFT_ORDER["latest"])
    db = await get_db()
    try:
        rows = await db.execute_fetchall(
            f"SELECT {DRAFT_COLUMNS} FROM drafts WHERE author_id = ? ORDER BY {order_by}",
            (author_id,),
        )
        return [dict(r) for r in rows]
    finally:
        await db.close()


async def update_draft(
    draft_id: int,
    author_id: int,
    title: str,
    content: str,
    topic: Optional[str] = None,
    tone: Optional[str] = None,
    length: Optional[str] = None,
) -> bool:
    """Overwrite an owned draft. Returns True if a row was updated."""
    db = await get_db()
    try:
        cursor = await db.execute(
            """UPDATE drafts
               SET title = ?, content = ?, topic = ?, tone = ?, length = ?, updated_at = ?
               WHERE id = ? AND author_id = ?""",
            (title, content, topic, tone, length, utc_now(), draft_id, author_id),
        )
        await db.commit()
        return cursor.rowcount > 0
    finally:
        await db.close()


async def delete_draft(draft_id: int, author_id: int) -> bool:
    """Delete an owned draft. Returns True if deleted."""
    db = await get_db()
    try:
        cursor = await db.execute(
            "DELETE FROM drafts WHERE id = ? AND author_id = ?",
            (draft_id, author_id),
        )
        await db.commit()
        return cursor.rowcount > 0
    finally:
        await db.close()
