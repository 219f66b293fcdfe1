"""
Feed Assembler
Composes store reads and engagement data into viewer-aware responses, and owns
the write paths for clips, likes and comments.
"""

import math
from typing import List, Optional

from ..config import get_settings
from ..models.clip import Clip, ClipCreate, EnrichedClip, FeedPage
from ..models.comment import Comment, EnrichedComment, MAX_COMMENT_LENGTH
from ..models.like import Like, LikeKind, LikeToggleResult
from ..utils.exceptions import ForbiddenError, NotFoundError, ValidationError
from ..utils.logger import get_logger
from .clip_store import ClipStore, get_clip_store
from .engagement import EngagementAggregator
from .metadata_extractor import VideoMetadataExtractor

logger = get_logger()


class FeedAssembler:
    """Clip feeds, engagement toggles and cascading deletes"""

    def __init__(
        self,
        store: ClipStore,
        extractor: Optional[VideoMetadataExtractor] = None,
        aggregator: Optional[EngagementAggregator] = None
    ):
        self.store = store
        self.extractor = extractor or VideoMetadataExtractor()
        self.aggregator = aggregator or EngagementAggregator(store)
        self.settings = get_settings()

    # =========================================================================
    # Clips
    # =========================================================================

    async def create_clip(self, owner_id: str, request: ClipCreate) -> Clip:
        """Extract metadata for the submitted URL and store the clip."""
        media = await self.extractor.extract(request.youtube_url, request.start_time, request.end_time)
        clip = Clip.from_media(owner_id, request, media)
        await self.store.save_clip(clip)
        logger.info(f"Clip {clip.id} created by {owner_id} for video {clip.youtube_video_id}")
        return clip

    async def list_page(self, page: int = 1, limit: Optional[int] = None, viewer_id: Optional[str] = None) -> FeedPage:
        limit = limit if limit is not None else self.settings.default_page_size
        if page < 1:
            raise ValidationError("Page must be 1 or greater", page=page)
        if limit < 1:
            raise ValidationError("Limit must be 1 or greater", limit=limit)
        limit = min(limit, self.settings.max_page_size)

        total = await self.store.count_clips()
        offset = (page - 1) * limit
        items = []
        # Pages past the end never reach SQLite, whose OFFSET is a 64-bit integer
        if offset < total:
            clips = await self.store.list_clips(offset=offset, limit=limit)
            items = await self.aggregator.enrich_clips(clips, viewer_id)

        return FeedPage(
            clips=items,
            page=page,
            total_pages=math.ceil(total / limit),
            total_clips=total,
            has_more=page * limit < total,
        )

    async def get_one(self, clip_id: str, viewer_id: Optional[str] = None) -> EnrichedClip:
        clip = await self._require_clip(clip_id)
        enriched = await self.aggregator.enrich_clips([clip], viewer_id)
        return enriched[0]

    async def list_by_author(self, user_id: str) -> List[EnrichedClip]:
        # Author pages are public and never personalized
        clips = await self.store.list_clips_by_user(user_id)
        return await self.aggregator.enrich_clips(clips)

    async def delete_clip(self, owner_id: str, clip_id: str):
        clip = await self._require_clip(clip_id)
        if clip.user_id != owner_id:
            raise ForbiddenError("User not authorized to delete this clip", clip_id=clip_id)

        removed = await self.store.delete_clip_cascade(clip_id)
        logger.info(
            f"Clip {clip_id} deleted with {removed['comments']} comments, "
            f"{removed['clip_likes']} likes and {removed['comment_likes']} comment likes"
        )

    async def _require_clip(self, clip_id: str) -> Clip:
        clip = await self.store.get_clip(clip_id)
        if clip is None:
            raise NotFoundError("Clip", clip_id)
        return clip

    # =========================================================================
    # Likes
    # =========================================================================

    async def toggle_like(self, viewer_id: str, clip_id: str) -> LikeToggleResult:
        await self._require_clip(clip_id)
        return await self._toggle(viewer_id, clip_id, LikeKind.CLIP)

    async def toggle_comment_like(self, viewer_id: str, comment_id: str) -> LikeToggleResult:
        if await self.store.get_comment(comment_id) is None:
            raise NotFoundError("Comment", comment_id)
        return await self._toggle(viewer_id, comment_id, LikeKind.COMMENT)

    async def _toggle(self, viewer_id: str, target_id: str, kind: LikeKind) -> LikeToggleResult:
        """
        Remove the viewer's like if present, otherwise add one.

        The existence check is only a shortcut: two identical toggles racing
        can both miss it, and the store's unique index then rejects the second
        insert, which still reports the target as liked.
        """
        existing = await self.store.find_like(viewer_id, target_id, kind)
        if existing:
            await self.store.delete_like(existing.id)
            is_liked = False
        else:
            await self.store.add_like(Like(user_id=viewer_id, target_id=target_id, kind=kind))
            is_liked = True

        likes_count = await self.store.count_likes(target_id, kind)
        logger.info(f"{viewer_id} {'liked' if is_liked else 'unliked'} {kind.value} {target_id}")
        return LikeToggleResult(is_liked=is_liked, likes_count=likes_count)

    # =========================================================================
    # Comments
    # =========================================================================

    async def add_comment(self, viewer_id: str, clip_id: str, content: str) -> Comment:
        text = (content or "").strip()
        if not text or len(text) > MAX_COMMENT_LENGTH:
            raise ValidationError(
                f"Comment cannot be empty and must be less than {MAX_COMMENT_LENGTH} characters"
            )

        await self._require_clip(clip_id)
        comment = Comment(user_id=viewer_id, clip_id=clip_id, content=text)
        await self.store.save_comment(comment)
        return comment

    async def list_comments(self, clip_id: str, viewer_id: Optional[str] = None) -> List[EnrichedComment]:
        comments = await self.store.list_comments(clip_id)
        return await self.aggregator.enrich_comments(comments, viewer_id)


_feed_assembler: Optional[FeedAssembler] = None


def get_feed_assembler() -> FeedAssembler:
    """Return singleton feed assembler."""
    global _feed_assembler
    if _feed_assembler is None:
        _feed_assembler = FeedAssembler(get_clip_store())
    return _feed_assembler
