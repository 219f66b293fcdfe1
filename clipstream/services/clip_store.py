"""
Clip Store Service
SQLite-backed persistence for clips, comments and likes.
"""

import asyncio
import json
import sqlite3
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

import aiosqlite

from ..config import get_settings
from ..models.clip import Clip
from ..models.comment import Comment
from ..models.like import Like, LikeKind
from ..utils.logger import get_logger

logger = get_logger()

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS clips (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        payload TEXT NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_clips_created_at ON clips(created_at)",
    "CREATE INDEX IF NOT EXISTS idx_clips_user_id ON clips(user_id)",
    """
    CREATE TABLE IF NOT EXISTS comments (
        id TEXT PRIMARY KEY,
        clip_id TEXT NOT NULL,
        user_id TEXT NOT NULL,
        payload TEXT NOT NULL,
        created_at TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_comments_clip_id ON comments(clip_id)",
    """
    CREATE TABLE IF NOT EXISTS likes (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        target_id TEXT NOT NULL,
        kind TEXT NOT NULL,
        created_at TEXT NOT NULL,
        UNIQUE (user_id, target_id, kind)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_likes_target ON likes(target_id, kind)",
)


class ClipStore:
    """Persistent storage for clips and their engagement records."""

    def __init__(self, db_path: str):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialized = False
        self._init_lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()

    async def initialize(self):
        """Initialize database schema."""
        if self._initialized:
            return

        async with self._init_lock:
            if self._initialized:
                return

            async with aiosqlite.connect(self.db_path) as conn:
                await conn.execute("PRAGMA journal_mode=WAL")
                await conn.execute("PRAGMA synchronous=NORMAL")
                for statement in _SCHEMA:
                    await conn.execute(statement)
                await conn.commit()

            self._initialized = True
            logger.info(f"Clip store initialized at {self.db_path}")

    @staticmethod
    def _to_json(model) -> str:
        return json.dumps(model.model_dump(mode="json"), ensure_ascii=False)

    async def _fetch_all(self, query: str, params: tuple = ()) -> list:
        await self.initialize()
        async with aiosqlite.connect(self.db_path) as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            await cursor.close()
        return rows

    async def _fetch_value(self, query: str, params: tuple = ()):
        rows = await self._fetch_all(query, params)
        return rows[0][0] if rows else None

    async def _write(self, query: str, params: tuple = ()) -> int:
        await self.initialize()
        async with self._write_lock:
            async with aiosqlite.connect(self.db_path) as conn:
                cursor = await conn.execute(query, params)
                await conn.commit()
                return cursor.rowcount

    # =========================================================================
    # Clips
    # =========================================================================

    async def save_clip(self, clip: Clip):
        """Insert a new clip record."""
        await self._write(
            "INSERT INTO clips (id, user_id, payload, created_at) VALUES (?, ?, ?, ?)",
            (clip.id, clip.user_id, self._to_json(clip), clip.created_at.isoformat()),
        )

    async def get_clip(self, clip_id: str) -> Optional[Clip]:
        payload = await self._fetch_value("SELECT payload FROM clips WHERE id = ?", (clip_id,))
        return Clip(**json.loads(payload)) if payload else None

    async def list_clips(self, offset: int = 0, limit: int = 10) -> List[Clip]:
        """Return a window of clips, newest first."""
        rows = await self._fetch_all(
            "SELECT payload FROM clips ORDER BY created_at DESC, rowid DESC LIMIT ? OFFSET ?",
            (limit, offset),
        )
        return self._load_clips(rows)

    async def list_clips_by_user(self, user_id: str) -> List[Clip]:
        rows = await self._fetch_all(
            "SELECT payload FROM clips WHERE user_id = ? ORDER BY created_at DESC, rowid DESC",
            (user_id,),
        )
        return self._load_clips(rows)

    async def count_clips(self, user_id: Optional[str] = None) -> int:
        if user_id is None:
            return await self._fetch_value("SELECT COUNT(*) FROM clips")
        return await self._fetch_value("SELECT COUNT(*) FROM clips WHERE user_id = ?", (user_id,))

    @staticmethod
    def _load_clips(rows) -> List[Clip]:
        clips: List[Clip] = []
        for (payload,) in rows:
            try:
                clips.append(Clip(**json.loads(payload)))
            except Exception as exc:
                logger.warning(f"Skipping invalid stored clip payload: {exc}")
        return clips

    async def delete_clip_cascade(self, clip_id: str) -> Dict[str, int]:
        """
        Delete a clip with its comments, its likes and the likes on its
        comments in a single transaction.
        """
        await self.initialize()
        async with self._write_lock:
            async with aiosqlite.connect(self.db_path) as conn:
                try:
                    cursor = await conn.execute(
                        """
                        DELETE FROM likes
                        WHERE kind = ? AND target_id IN (SELECT id FROM comments WHERE clip_id = ?)
                        """,
                        (LikeKind.COMMENT.value, clip_id),
                    )
                    comment_likes = cursor.rowcount
                    cursor = await conn.execute("DELETE FROM comments WHERE clip_id = ?", (clip_id,))
                    comments = cursor.rowcount
                    cursor = await conn.execute(
                        "DELETE FROM likes WHERE target_id = ? AND kind = ?",
                        (clip_id, LikeKind.CLIP.value),
                    )
                    clip_likes = cursor.rowcount
                    cursor = await conn.execute("DELETE FROM clips WHERE id = ?", (clip_id,))
                    clips = cursor.rowcount
                    await conn.commit()
                except Exception:
                    await conn.rollback()
                    raise

        return {
            "clips": clips,
            "comments": comments,
            "clip_likes": clip_likes,
            "comment_likes": comment_likes,
        }

    # =========================================================================
    # Comments
    # =========================================================================

    async def save_comment(self, comment: Comment):
        await self._write(
            "INSERT INTO comments (id, clip_id, user_id, payload, created_at) VALUES (?, ?, ?, ?, ?)",
            (
                comment.id,
                comment.clip_id,
                comment.user_id,
                self._to_json(comment),
                comment.created_at.isoformat(),
            ),
        )

    async def get_comment(self, comment_id: str) -> Optional[Comment]:
        payload = await self._fetch_value("SELECT payload FROM comments WHERE id = ?", (comment_id,))
        return Comment(**json.loads(payload)) if payload else None

    async def list_comments(self, clip_id: str) -> List[Comment]:
        """Return comments on a clip, newest first."""
        rows = await self._fetch_all(
            "SELECT payload FROM comments WHERE clip_id = ? ORDER BY created_at DESC, rowid DESC",
            (clip_id,),
        )
        comments: List[Comment] = []
        for (payload,) in rows:
            try:
                comments.append(Comment(**json.loads(payload)))
            except Exception as exc:
                logger.warning(f"Skipping invalid stored comment payload: {exc}")
        return comments

    async def count_comments(self, clip_id: str) -> int:
        return await self._fetch_value("SELECT COUNT(*) FROM comments WHERE clip_id = ?", (clip_id,))

    # =========================================================================
    # Likes
    # =========================================================================

    async def find_like(self, user_id: str, target_id: str, kind: LikeKind) -> Optional[Like]:
        rows = await self._fetch_all(
            """
            SELECT id, user_id, target_id, kind, created_at FROM likes
            WHERE user_id = ? AND target_id = ? AND kind = ?
            """,
            (user_id, target_id, LikeKind(kind).value),
        )
        if not rows:
            return None
        like_id, user_id, target_id, kind_value, created_at = rows[0]
        return Like(id=like_id, user_id=user_id, target_id=target_id, kind=kind_value, created_at=created_at)

    async def add_like(self, like: Like) -> bool:
        """Insert a like. Returns False when the (user, target, kind) triple already exists."""
        try:
            await self._write(
                "INSERT INTO likes (id, user_id, target_id, kind, created_at) VALUES (?, ?, ?, ?, ?)",
                (like.id, like.user_id, like.target_id, LikeKind(like.kind).value, like.created_at.isoformat()),
            )
        except sqlite3.IntegrityError:
            logger.info(f"Duplicate like ignored for {like.kind} {like.target_id} by {like.user_id}")
            return False
        return True

    async def delete_like(self, like_id: str) -> bool:
        return await self._write("DELETE FROM likes WHERE id = ?", (like_id,)) > 0

    async def count_likes(self, target_id: str, kind: LikeKind) -> int:
        return await self._fetch_value(
            "SELECT COUNT(*) FROM likes WHERE target_id = ? AND kind = ?",
            (target_id, LikeKind(kind).value),
        )

    async def liked_target_ids(self, user_id: str, target_ids: Iterable[str], kind: LikeKind) -> Set[str]:
        """Return the subset of target_ids this user has liked."""
        ids = list(dict.fromkeys(target_ids))
        if not ids:
            return set()

        placeholders = ", ".join("?" for _ in ids)
        rows = await self._fetch_all(
            f"SELECT target_id FROM likes WHERE user_id = ? AND kind = ? AND target_id IN ({placeholders})",
            (user_id, LikeKind(kind).value, *ids),
        )
        return {target_id for (target_id,) in rows}


_clip_store: Optional[ClipStore] = None


def get_clip_store() -> ClipStore:
    """Return singleton clip store."""
    global _clip_store
    if _clip_store is None:
        settings = get_settings()
        db_path = Path(settings.data_dir) / settings.database_name
        _clip_store = ClipStore(str(db_path))
    return _clip_store
