"""Utils package initialization"""
from .logger import setup_logger, get_logger
from .exceptions import (
    ClipStreamError,
    ValidationError,
    InvalidTimeCodeError,
    InvalidReferenceError,
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    ExtractionFailedError
)
from .retry import retry_async

__all__ = [
    "setup_logger",
    "get_logger",
    "ClipStreamError",
    "ValidationError",
    "InvalidTimeCodeError",
    "InvalidReferenceError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "ExtractionFailedError",
    "retry_async"
]
