"""
Core module for the VoiceCRM backend
"""

from .config import settings, get_settings
from .logging import setup_logging, get_logger
from .exceptions import (
    VoiceCrmException,
    AuthenticationError,
    ValidationError,
    DuplicateError,
    ConflictError,
    NotFoundError,
    DatabaseError,
    ExternalServiceError
)

__all__ = [
    "settings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "VoiceCrmException",
    "AuthenticationError",
    "ValidationError",
    "DuplicateError",
    "ConflictError",
    "NotFoundError",
    "DatabaseError",
    "ExternalServiceError"
]
