"""
Clips Router
Clip creation, public feeds, likes, comments and owner deletes.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ..models.clip import ClipCreate
from ..models.comment import CommentCreate
from ..services.auth import optional_viewer, require_user
from ..services.feed import FeedAssembler, get_feed_assembler

router = APIRouter(prefix="/api/clips", tags=["clips"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_clip(
    request: ClipCreate,
    user_id: str = Depends(require_user),
    feed: FeedAssembler = Depends(get_feed_assembler),
):
    """Create a clip from a YouTube URL and optional trim window."""
    clip = await feed.create_clip(user_id, request)
    return {"message": "Clip created successfully", "clip": clip.to_response()}


@router.get("")
async def list_clips(
    page: int = Query(1),
    limit: Optional[int] = Query(None),
    viewer_id: Optional[str] = Depends(optional_viewer),
    feed: FeedAssembler = Depends(get_feed_assembler),
):
    """List clips newest first, personalized when a valid token is sent."""
    result = await feed.list_page(page, limit, viewer_id)
    return result.to_response()


@router.get("/user/{user_id}")
async def list_user_clips(user_id: str, feed: FeedAssembler = Depends(get_feed_assembler)):
    """List one author's clips."""
    clips = await feed.list_by_author(user_id)
    return {"clips": [clip.to_response() for clip in clips]}


@router.get("/{clip_id}")
async def get_clip(
    clip_id: str,
    viewer_id: Optional[str] = Depends(optional_viewer),
    feed: FeedAssembler = Depends(get_feed_assembler),
):
    clip = await feed.get_one(clip_id, viewer_id)
    return {"clip": clip.to_response()}


@router.delete("/{clip_id}")
async def delete_clip(
    clip_id: str,
    user_id: str = Depends(require_user),
    feed: FeedAssembler = Depends(get_feed_assembler),
):
    """Delete a clip with its comments and likes. Owner only."""
    await feed.delete_clip(user_id, clip_id)
    return {"message": "Clip deleted successfully"}


@router.post("/{clip_id}/like")
async def toggle_clip_like(
    clip_id: str,
    user_id: str = Depends(require_user),
    feed: FeedAssembler = Depends(get_feed_assembler),
):
    """Like the clip, or unlike it if already liked."""
    result = await feed.toggle_like(user_id, clip_id)
    message = "Clip liked successfully" if result.is_liked else "Clip unliked successfully"
    return {"message": message, **result.to_response()}


@router.post("/comments/{comment_id}/like")
async def toggle_comment_like(
    comment_id: str,
    user_id: str = Depends(require_user),
    feed: FeedAssembler = Depends(get_feed_assembler),
):
    result = await feed.toggle_comment_like(user_id, comment_id)
    message = "Comment liked successfully" if result.is_liked else "Comment unliked successfully"
    return {"message": message, **result.to_response()}


@router.post("/{clip_id}/comments", status_code=status.HTTP_201_CREATED)
async def add_comment(
    clip_id: str,
    request: CommentCreate,
    user_id: str = Depends(require_user),
    feed: FeedAssembler = Depends(get_feed_assembler),
):
    comment = await feed.add_comment(user_id, clip_id, request.content)
    return {"message": "Comment added successfully", "comment": comment.to_response()}


@router.get("/{clip_id}/comments")
async def list_comments(
    clip_id: str,
    viewer_id: Optional[str] = Depends(optional_viewer),
    feed: FeedAssembler = Depends(get_feed_assembler),
):
    comments = await feed.list_comments(clip_id, viewer_id)
    return {"comments": [comment.to_response() for comment in comments]}
