from datetime import datetime, timezone

import aiosqlite

from blogstudio import config


async def get_db() -> aiosqlite.Connection:
    db = await aiosqlite.connect(config.SQLITE_DB_PATH)
    db.row_factory = aiosqlite.Row
    await db.execute("PRAGMA foreign_keys = ON")
    return db


def utc_now() -> str:
    """ISO-8601 UTC timestamp with microseconds, so recency sorts stay stable."""
    return datetime.now(timezone.utc).isoformat()


async def init_db():
    config.SQLITE_DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    db = await get_db()
    try:
        await db.executescript("""
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                username TEXT UNIQUE NOT NULL,
                hashed_password TEXT NOT NULL,
                created_at TEXT NOT NULL
            );
        """)
        await db.commit()
    finally:
        await db.close()

    # Drafts and posts reference users; ratings reference posts
    from blogstudio.drafts.database import create_drafts_table
    await create_drafts_table()

    from blogstudio.posts.database import create_posts_table, create_ratings_table
    await create_posts_table()
    await create_ratings_table()
