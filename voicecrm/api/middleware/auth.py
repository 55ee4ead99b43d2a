"""
Authentication Middleware
Bearer JWT validation and identity resolution per user type
"""

import hmac
from typing import Any, Dict, Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from voicecrm.core.config import settings
from voicecrm.core.logging import get_logger
from voicecrm.core.exceptions import AuthenticationError, NotFoundError
from voicecrm.core.jwt_auth import (
    USER_TYPE_ADMIN,
    USER_TYPE_CLIENT,
    USER_TYPE_SUPERADMIN,
    JWTValidator,
    decode_jwt_token,
    extract_bearer_token,
)
from voicecrm.db import get_db, Admin, Client

logger = get_logger(__name__)

client_validator = JWTValidator([USER_TYPE_CLIENT])
admin_validator = JWTValidator([USER_TYPE_ADMIN, USER_TYPE_SUPERADMIN])
superadmin_validator = JWTValidator([USER_TYPE_SUPERADMIN])


async def get_bearer_token(
    authorization: Optional[str] = Header(None)
) -> str:
    """
    Extract the bearer token from the Authorization header

    Raises:
        AuthenticationError: If the header is missing or not a bearer token
    """
    if not authorization:
        raise AuthenticationError("Authorization header is required", error_code="AUTH_HEADER_MISSING")

    token = extract_bearer_token(authorization)
    if not token:
        raise AuthenticationError("Token expired or invalid", error_code="INVALID_TOKEN")
    return token


async def require_client(token: str = Depends(get_bearer_token)) -> str:
    """
    Dependency that requires a client token
    Returns the client id carried by the token
    """
    payload = client_validator.validate(token)
    logger.debug("Client token validated", client_id=payload["id"])
    return payload["id"]


async def require_client_account(
    client_id: str = Depends(require_client),
    db: Session = Depends(get_db)
) -> Client:
    """Dependency that requires a client token whose client still exists"""
    client = db.query(Client).filter(Client.id == client_id).first()
    if not client:
        raise NotFoundError("Client")
    return client


async def _load_admin(payload: Dict[str, Any], db: Session) -> Admin:
    admin = db.query(Admin).filter(Admin.id == payload["id"]).first()
    if not admin or admin.role != payload.get("userType"):
        logger.warning("Token for unknown admin", admin_id=payload["id"])
        raise AuthenticationError("Admin not found", error_code="ADMIN_NOT_FOUND")
    return admin


async def require_admin(
    token: str = Depends(get_bearer_token),
    db: Session = Depends(get_db)
) -> Admin:
    """Dependency that requires an admin or superadmin token"""
    return await _load_admin(admin_validator.validate(token), db)


async def require_superadmin(
    token: str = Depends(get_bearer_token),
    db: Session = Depends(get_db)
) -> Admin:
    """Dependency that requires a superadmin token"""
    return await _load_admin(superadmin_validator.validate(token), db)


async def optional_admin(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db)
) -> Optional[Admin]:
    """
    Dependency that optionally resolves an admin
    Returns the admin if a valid admin token is provided, None otherwise
    """
    token = extract_bearer_token(authorization)
    if not token:
        return None

    payload = decode_jwt_token(token)
    if not payload or payload.get("userType") not in (USER_TYPE_ADMIN, USER_TYPE_SUPERADMIN):
        return None

    return db.query(Admin).filter(Admin.id == payload.get("id")).first()


async def require_superadmin_key(
    x_superadmin_key: Optional[str] = Header(None, alias="X-Superadmin-Key")
) -> None:
    """Dependency guarding superadmin bootstrap with a shared secret"""
    expected = settings.superadmin_secret
    if not expected or not x_superadmin_key or not hmac.compare_digest(
        x_superadmin_key.encode("utf-8"), expected.encode("utf-8")
    ):
        logger.warning("Rejected superadmin registration attempt")
        raise AuthenticationError("Invalid superadmin key", error_code="INVALID_SUPERADMIN_KEY")
