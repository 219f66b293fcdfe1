"""Tests for the SQLite clip store"""
import asyncio

import pytest

from clipstream.models.comment import Comment
from clipstream.models.like import Like, LikeKind


@pytest.mark.asyncio
async def test_clip_round_trips_through_store(store, clip_factory):
    clip = await clip_factory(user_id="alice", title="Chorus")

    loaded = await store.get_clip(clip.id)

    assert loaded == clip
    assert await store.get_clip("missing") is None
    assert await store.count_clips() == 1
    assert await store.count_clips(user_id="bob") == 0


@pytest.mark.asyncio
async def test_list_clips_newest_first_with_window(store, clip_factory):
    clips = [await clip_factory() for _ in range(5)]

    window = await store.list_clips(offset=1, limit=2)

    assert [c.id for c in window] == [clips[3].id, clips[2].id]


@pytest.mark.asyncio
async def test_duplicate_like_rejected(store, clip_factory):
    clip = await clip_factory()

    assert await store.add_like(Like(user_id="u1", target_id=clip.id, kind=LikeKind.CLIP)) is True
    assert await store.add_like(Like(user_id="u1", target_id=clip.id, kind=LikeKind.CLIP)) is False
    # same target under the other kind is a different like
    assert await store.add_like(Like(user_id="u1", target_id=clip.id, kind=LikeKind.COMMENT)) is True

    assert await store.count_likes(clip.id, LikeKind.CLIP) == 1


@pytest.mark.asyncio
async def test_concurrent_duplicate_likes_store_one_row(store, clip_factory):
    clip = await clip_factory()

    results = await asyncio.gather(*(
        store.add_like(Like(user_id="u1", target_id=clip.id, kind=LikeKind.CLIP))
        for _ in range(8)
    ))

    assert results.count(True) == 1
    assert await store.count_likes(clip.id, LikeKind.CLIP) == 1


@pytest.mark.asyncio
async def test_liked_target_ids_filters_by_viewer_and_kind(store, clip_factory):
    first, second, third = [await clip_factory() for _ in range(3)]
    await store.add_like(Like(user_id="viewer", target_id=first.id, kind=LikeKind.CLIP))
    await store.add_like(Like(user_id="viewer", target_id=second.id, kind=LikeKind.COMMENT))
    await store.add_like(Like(user_id="other", target_id=third.id, kind=LikeKind.CLIP))

    liked = await store.liked_target_ids("viewer", [first.id, second.id, third.id], LikeKind.CLIP)

    assert liked == {first.id}
    assert await store.liked_target_ids("viewer", [], LikeKind.CLIP) == set()


@pytest.mark.asyncio
async def test_cascade_removes_comments_and_all_related_likes(store, clip_factory):
    clip = await clip_factory()
    survivor = await clip_factory()
    comment = Comment(user_id="u2", clip_id=clip.id, content="nice")
    await store.save_comment(comment)
    await store.save_comment(Comment(user_id="u2", clip_id=survivor.id, content="keep"))
    await store.add_like(Like(user_id="u1", target_id=clip.id, kind=LikeKind.CLIP))
    await store.add_like(Like(user_id="u1", target_id=comment.id, kind=LikeKind.COMMENT))
    await store.add_like(Like(user_id="u1", target_id=survivor.id, kind=LikeKind.CLIP))

    removed = await store.delete_clip_cascade(clip.id)

    assert removed == {"clips": 1, "comments": 1, "clip_likes": 1, "comment_likes": 1}
    assert await store.get_clip(clip.id) is None
    assert await store.list_comments(clip.id) == []
    assert await store.count_likes(clip.id, LikeKind.CLIP) == 0
    assert await store.count_likes(comment.id, LikeKind.COMMENT) == 0
    assert await store.count_comments(survivor.id) == 1
    assert await store.count_likes(survivor.id, LikeKind.CLIP) == 1
