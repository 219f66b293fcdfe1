"""
Engagement Aggregator
Live like/comment counts and per-viewer like state, computed on read.

Counts are never denormalized onto clips or comments, so every enriched item
costs a couple of COUNT queries. Feed pages are small enough for that.
"""

import asyncio
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set

from ..models.clip import Clip, EnrichedClip
from ..models.comment import Comment, EnrichedComment
from ..models.like import LikeKind
from .clip_store import ClipStore


@dataclass
class EngagementCounts:
    likes_count: int
    comments_count: Optional[int] = None


class EngagementAggregator:
    """Enriches clips and comments with engagement data"""

    def __init__(self, store: ClipStore):
        self.store = store

    async def counts_for(self, target_id: str, kind: LikeKind) -> EngagementCounts:
        if kind == LikeKind.CLIP:
            likes, comments = await asyncio.gather(
                self.store.count_likes(target_id, kind),
                self.store.count_comments(target_id),
            )
            return EngagementCounts(likes_count=likes, comments_count=comments)

        likes = await self.store.count_likes(target_id, kind)
        return EngagementCounts(likes_count=likes)

    async def viewer_liked_set(
        self,
        viewer_id: Optional[str],
        target_ids: Sequence[str],
        kind: LikeKind
    ) -> Set[str]:
        """Targets the viewer has liked; empty for anonymous viewers."""
        if not viewer_id or not target_ids:
            return set()
        return await self.store.liked_target_ids(viewer_id, target_ids, kind)

    async def enrich_clips(self, clips: Sequence[Clip], viewer_id: Optional[str] = None) -> List[EnrichedClip]:
        """Attach counts and is_liked to each clip, preserving order."""
        ids = [clip.id for clip in clips]
        counts, liked = await asyncio.gather(
            asyncio.gather(*(self.counts_for(clip_id, LikeKind.CLIP) for clip_id in ids)),
            self.viewer_liked_set(viewer_id, ids, LikeKind.CLIP),
        )

        return [
            EnrichedClip(
                **clip.model_dump(),
                likes_count=count.likes_count,
                comments_count=count.comments_count or 0,
                is_liked=clip.id in liked,
            )
            for clip, count in zip(clips, counts)
        ]

    async def enrich_comments(
        self,
        comments: Sequence[Comment],
        viewer_id: Optional[str] = None
    ) -> List[EnrichedComment]:
        """Attach like counts and is_liked to each comment, preserving order."""
        ids = [comment.id for comment in comments]
        counts, liked = await asyncio.gather(
            asyncio.gather(*(self.counts_for(comment_id, LikeKind.COMMENT) for comment_id in ids)),
            self.viewer_liked_set(viewer_id, ids, LikeKind.COMMENT),
        )

        return [
            EnrichedComment(
                **comment.model_dump(),
                likes_count=count.likes_count,
                is_liked=comment.id in liked,
            )
            for comment, count in zip(comments, counts)
        ]
