"""
VoiceCRM Exception Classes
Provides consistent error envelopes across routes and services
"""

from typing import Any, Dict, List, Optional


class VoiceCrmException(Exception):
    """Base exception for the VoiceCRM backend"""

    def __init__(
        self,
        message: str,
        error_code: str = "VOICECRM_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the response envelope"""
        body = {
            "success": False,
            "error": self.error_code,
            "message": self.message,
        }
        body.update(self.details)
        return body


class AuthenticationError(VoiceCrmException):
    """Authentication, role and approval failures"""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: str = "AUTH_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=401,
            details=details
        )


class ValidationError(VoiceCrmException):
    """Input validation errors"""

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[List[str]] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        details = details or {}
        if field:
            details["field"] = field
        if errors:
            details["errors"] = errors
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=400,
            details=details
        )


class DuplicateError(VoiceCrmException):
    """Uniqueness violations reported as bad requests (emails, GST, PAN, names)"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="DUPLICATE",
            status_code=400,
            details=details
        )


class ConflictError(VoiceCrmException):
    """Resource already exists and must be updated instead"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="CONFLICT",
            status_code=409,
            details=details
        )


class NotFoundError(VoiceCrmException):
    """Resource lookups that came back empty"""

    def __init__(self, resource: str, message: Optional[str] = None):
        super().__init__(
            message=message or f"{resource} not found",
            error_code="NOT_FOUND",
            status_code=404,
            details={"resource": resource}
        )


class DatabaseError(VoiceCrmException):
    """Database operation errors"""

    def __init__(
        self,
        message: str = "Database operation failed",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            error_code="DATABASE_ERROR",
            status_code=500,
            details=details
        )


class ExternalServiceError(VoiceCrmException):
    """Failures of S3, the TTS provider, Google or the bot API"""

    def __init__(
        self,
        service: str,
        message: str = "External service error",
        details: Optional[Dict[str, Any]] = None
    ):
        details = details or {}
        details["service"] = service
        super().__init__(
            message=message,
            error_code=f"{service.upper()}_ERROR",
            status_code=500,
            details=details
        )
