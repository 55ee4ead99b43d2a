"""
JWT Authentication Module
Issues and validates role-scoped tokens for admins, clients and human agents
"""

import jwt
from datetime import datetime, timedelta
from typing import Optional, Dict, Any

from .config import settings
from .logging import get_logger
from .exceptions import AuthenticationError

logger = get_logger(__name__)

USER_TYPE_SUPERADMIN = "superadmin"
USER_TYPE_ADMIN = "admin"
USER_TYPE_CLIENT = "client"
USER_TYPE_HUMAN_AGENT = "humanAgent"


def create_jwt_token(
    payload: Dict[str, Any],
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a JWT token with the given payload

    Args:
        payload: Data to encode in the token
        expires_delta: Token expiration time

    Returns:
        Encoded JWT token string
    """
    to_encode = payload.copy()

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(days=settings.jwt_expiration_days)

    to_encode.update({"exp": expire, "iat": datetime.utcnow()})

    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm
    )


def decode_jwt_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode and validate a JWT token

    Returns:
        Decoded payload or None if invalid
    """
    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        logger.warning("JWT token expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid JWT token: {e}")
        return None


def create_user_token(
    user_id: str,
    user_type: str,
    client_id: Optional[str] = None,
    email: Optional[str] = None
) -> str:
    """Mint a token carrying {id, userType, clientId?, email?}"""
    payload: Dict[str, Any] = {"id": user_id, "userType": user_type}
    if client_id:
        payload["clientId"] = client_id
    if email:
        payload["email"] = email
    return create_jwt_token(payload)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Pull the token out of an Authorization header value"""
    if not authorization:
        return None
    if authorization.startswith("Bearer "):
        return authorization[7:].strip() or None
    return None


class JWTValidator:
    """
    Validates tokens against an allowed set of user types
    """

    def __init__(self, allowed_user_types: Optional[list] = None):
        self.allowed_user_types = allowed_user_types or []

    def validate(self, token: str) -> Dict[str, Any]:
        """
        Validate token and return payload

        Raises:
            AuthenticationError: If the token is invalid, expired or has the wrong role
        """
        payload = decode_jwt_token(token)

        if not payload:
            raise AuthenticationError("Token expired or invalid", error_code="INVALID_TOKEN")

        if not payload.get("id"):
            raise AuthenticationError("Missing required claim: id", details={"missing_claim": "id"})

        if self.allowed_user_types and payload.get("userType") not in self.allowed_user_types:
            raise AuthenticationError(
                f"Invalid token: userType must be {' or '.join(self.allowed_user_types)}",
                error_code="INVALID_USER_TYPE"
            )

        return payload
