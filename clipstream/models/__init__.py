"""Models package initialization"""
from .clip import Clip, ClipCreate, ClipMedia, EnrichedClip, FeedPage
from .comment import Comment, CommentCreate, EnrichedComment
from .like import Like, LikeKind, LikeToggleResult

__all__ = [
    "Clip",
    "ClipCreate",
    "ClipMedia",
    "EnrichedClip",
    "FeedPage",
    "Comment",
    "CommentCreate",
    "EnrichedComment",
    "Like",
    "LikeKind",
    "LikeToggleResult",
]
