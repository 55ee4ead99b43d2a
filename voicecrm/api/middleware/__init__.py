"""
API Middleware Module
"""

from .auth import (
    get_bearer_token,
    require_client,
    require_client_account,
    require_admin,
    require_superadmin,
    optional_admin,
    require_superadmin_key
)

__all__ = [
    "get_bearer_token",
    "require_client",
    "require_client_account",
    "require_admin",
    "require_superadmin",
    "optional_admin",
    "require_superadmin_key"
]
