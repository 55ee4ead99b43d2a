"""
Google Sign-In
Verifies Google ID tokens against the configured OAuth client ids
"""

from typing import Any, Dict, List, Optional

from google.auth.exceptions import GoogleAuthError
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from voicecrm.core.config import settings
from voicecrm.core.logging import get_logger
from voicecrm.core.exceptions import AuthenticationError

logger = get_logger(__name__)


class GoogleTokenVerifier:
    """Process-wide verifier holding the accepted audiences"""

    def __init__(self, audiences: Optional[List[str]] = None):
        self.audiences = audiences if audiences is not None else settings.google_audiences
        self._request = google_requests.Request()

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Verify an ID token and return the identity it asserts

        Returns:
            Dict with email (lowercased), name, picture, emailVerified, googleId

        Raises:
            AuthenticationError: If no audiences are configured, or the token is
                missing, invalid or carries no email
        """
        if not token:
            raise AuthenticationError("Google token is required", error_code="GOOGLE_TOKEN_MISSING")

        # google-auth skips the audience check when audience is None
        if not self.audiences:
            logger.warning("Google sign-in attempted without configured client ids")
            raise AuthenticationError("Google sign-in is not configured", error_code="GOOGLE_NOT_CONFIGURED")

        try:
            payload = id_token.verify_oauth2_token(token, self._request, audience=list(self.audiences))
        except (ValueError, GoogleAuthError) as e:
            logger.warning(f"Google token verification failed: {e}")
            raise AuthenticationError("Invalid Google token", error_code="INVALID_GOOGLE_TOKEN")

        if not payload or not payload.get("email"):
            raise AuthenticationError("Invalid Google token", error_code="INVALID_GOOGLE_TOKEN")

        return {
            "email": payload["email"].lower(),
            "name": payload.get("name") or payload["email"].split("@")[0],
            "picture": payload.get("picture"),
            "emailVerified": bool(payload.get("email_verified", False)),
            "googleId": payload.get("sub"),
        }


_verifier: Optional[GoogleTokenVerifier] = None


def get_google_verifier() -> GoogleTokenVerifier:
    """Get the process-wide Google token verifier"""
    global _verifier
    if _verifier is None:
        _verifier = GoogleTokenVerifier()
    return _verifier
