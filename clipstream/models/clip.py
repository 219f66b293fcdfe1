"""
Clip Data Models
A user-authored pointer into a YouTube video with a trim window
"""

from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime
import uuid

from .base import CamelModel, utcnow


class ClipMedia(CamelModel):
    """Normalized video metadata produced by the extractor"""
    video_id: str = Field(min_length=11, max_length=11)
    title: str
    thumbnail_url: str = ""
    duration: str = ""
    start_time_seconds: int = Field(default=0, ge=0)
    end_time_seconds: Optional[int] = Field(default=None, ge=0)


class ClipCreate(CamelModel):
    """Request model for creating a clip"""
    youtube_url: str = Field(min_length=1, description="YouTube URL to clip")
    title: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)
    start_time: Optional[str] = Field(default="0:00", description="mm:ss or hh:mm:ss")
    end_time: Optional[str] = Field(default="", description="mm:ss or hh:mm:ss")

    @field_validator("youtube_url", "title", "description", mode="before")
    @classmethod
    def strip_text(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value


class Clip(CamelModel):
    """Stored clip"""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    title: str
    description: str = ""
    youtube_url: str
    youtube_video_id: str
    thumbnail_url: str = ""
    duration: str = ""
    start_time_seconds: int = 0
    end_time_seconds: Optional[int] = None
    created_at: datetime = Field(default_factory=utcnow)

    @classmethod
    def from_media(cls, user_id: str, request: ClipCreate, media: ClipMedia) -> "Clip":
        return cls(
            user_id=user_id,
            title=request.title,
            description=request.description,
            youtube_url=request.youtube_url,
            youtube_video_id=media.video_id,
            thumbnail_url=media.thumbnail_url,
            duration=media.duration,
            start_time_seconds=media.start_time_seconds,
            end_time_seconds=media.end_time_seconds,
        )


class EnrichedClip(Clip):
    """Clip with live engagement counts, response only"""
    likes_count: int = Field(default=0, ge=0)
    comments_count: int = Field(default=0, ge=0)
    is_liked: bool = False


class FeedPage(CamelModel):
    """One page of the public clip feed"""
    clips: List[EnrichedClip]
    page: int
    total_pages: int
    total_clips: int
    has_more: bool
