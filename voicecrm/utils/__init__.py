"""VoiceCRM Utilities"""

from .helpers import (
    parse_datetime,
    clean_str,
    is_blank,
)

__all__ = [
    "parse_datetime",
    "clean_str",
    "is_blank",
]
