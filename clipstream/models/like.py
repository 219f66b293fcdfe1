"""
Like Data Models
Independent (user, target, kind) records
"""

from pydantic import Field
from enum import Enum
from datetime import datetime
import uuid

from .base import CamelModel, utcnow


class LikeKind(str, Enum):
    """Which entity a like applies to"""
    CLIP = "clip"
    COMMENT = "comment"


class Like(CamelModel):
    """A single like; unique per (user_id, target_id, kind)"""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    target_id: str
    kind: LikeKind
    created_at: datetime = Field(default_factory=utcnow)


class LikeToggleResult(CamelModel):
    """Outcome of a like toggle"""
    is_liked: bool
    likes_count: int = Field(ge=0)
