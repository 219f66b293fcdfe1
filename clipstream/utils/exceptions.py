"""
Custom Exceptions for ClipStream
Structured error handling with HTTP status and recovery hints
"""

from typing import Optional, Dict, Any


class ClipStreamError(Exception):
    """Base exception for all ClipStream errors"""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        status_code: int = 500,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to JSON-serializable dict"""
        return {
            "error": self.code,
            "message": self.message,
            "recoverable": self.recoverable,
            "recovery_hint": self.recovery_hint,
            "details": self.details
        }


# ============================================================================
# Input Errors
# ============================================================================

class ValidationError(ClipStreamError):
    """Malformed user input"""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR", **kwargs):
        super().__init__(
            message=message,
            code=code,
            status_code=400,
            recoverable=True,
            recovery_hint="Check your input parameters and try again.",
            details=kwargs
        )


class InvalidTimeCodeError(ValidationError):
    """Time string is not mm:ss or hh:mm:ss"""

    def __init__(self, value: str):
        super().__init__(
            message=f"Invalid time format: '{value}'. Use mm:ss or hh:mm:ss",
            code="INVALID_TIME_CODE",
            value=value
        )


class InvalidReferenceError(ValidationError):
    """URL does not reference a YouTube video"""

    def __init__(self, url: str):
        super().__init__(
            message="Invalid YouTube URL",
            code="INVALID_REFERENCE",
            url=url
        )


# ============================================================================
# Access Errors
# ============================================================================

class AuthenticationError(ClipStreamError):
    """Missing or invalid bearer credential"""

    def __init__(self, message: str = "No token, authorization denied"):
        super().__init__(
            message=message,
            code="AUTHENTICATION_ERROR",
            status_code=401,
            recoverable=True,
            recovery_hint="Sign in again to obtain a fresh token."
        )


class ForbiddenError(ClipStreamError):
    """Caller does not own the resource"""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            code="FORBIDDEN",
            status_code=403,
            recoverable=False,
            details=kwargs
        )


class NotFoundError(ClipStreamError):
    """Referenced entity does not exist"""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            message=f"{entity} not found",
            code="NOT_FOUND",
            status_code=404,
            recoverable=False,
            details={"entity": entity.lower(), "id": entity_id}
        )


# ============================================================================
# Ingestion Errors
# ============================================================================

class ExtractionFailedError(ClipStreamError):
    """Metadata provider or network failure during clip ingestion"""

    def __init__(self, url: Optional[str] = None):
        super().__init__(
            message="Failed to extract YouTube video information. Please check the URL and try again.",
            code="EXTRACTION_FAILED",
            status_code=400,
            recoverable=True,
            recovery_hint="Check if the video URL is valid and publicly accessible.",
            details={"url": url}
        )
