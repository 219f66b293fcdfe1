"""
Comment Data Models
"""

from pydantic import Field, field_validator
from datetime import datetime
import uuid

from .base import CamelModel, utcnow

MAX_COMMENT_LENGTH = 500


class CommentCreate(CamelModel):
    """Request model for adding a comment"""
    content: str = Field(min_length=1, max_length=MAX_COMMENT_LENGTH)

    @field_validator("content", mode="before")
    @classmethod
    def strip_content(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value


class Comment(CamelModel):
    """Stored comment on a clip"""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    clip_id: str
    content: str
    created_at: datetime = Field(default_factory=utcnow)


class EnrichedComment(Comment):
    """Comment with live like count, response only"""
    likes_count: int = Field(default=0, ge=0)
    is_liked: bool = False
