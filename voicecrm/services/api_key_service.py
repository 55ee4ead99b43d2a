"""
API Key Service
Per-client provider credentials and the provider catalog
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx
from sqlalchemy.orm import Session

from voicecrm.core.config import settings
from voicecrm.core.logging import get_logger
from voicecrm.core.exceptions import ExternalServiceError, NotFoundError, ValidationError
from voicecrm.db.models import (
    ApiKey,
    LLM_PROVIDERS,
    STT_PROVIDERS,
    TELEPHONY_PROVIDERS,
    TTS_PROVIDERS,
)
from voicecrm.utils import is_blank

logger = get_logger(__name__)

PROVIDER_CATEGORIES = {
    "stt": STT_PROVIDERS,
    "tts": TTS_PROVIDERS,
    "llm": LLM_PROVIDERS,
    "telephony": TELEPHONY_PROVIDERS,
}

# provider -> (url, auth header, header value template, extra headers)
KEY_CHECKS = {
    "openai": ("https://api.openai.com/v1/models", "Authorization", "Bearer {key}", {}),
    "anthropic": ("https://api.anthropic.com/v1/models", "x-api-key", "{key}", {"anthropic-version": "2023-06-01"}),
    "deepgram": ("https://api.deepgram.com/v1/projects", "Authorization", "Token {key}", {}),
    "elevenlabs": ("https://api.elevenlabs.io/v1/user", "xi-api-key", "{key}", {}),
}


def known_providers() -> List[str]:
    """Every provider named in any category, first occurrence order"""
    return list(dict.fromkeys(p for providers in PROVIDER_CATEGORIES.values() for p in providers))


def provider_configs() -> List[Dict[str, Any]]:
    """Catalog served to clients when they pick providers for an agent"""
    return [
        {
            "provider": provider,
            "categories": [name for name, members in PROVIDER_CATEGORIES.items() if provider in members],
            "supportsKeyCheck": provider in KEY_CHECKS,
        }
        for provider in known_providers()
    ]


def _require_provider(provider: str) -> str:
    name = (provider or "").strip().lower()
    if name not in known_providers():
        raise ValidationError(
            f"Unsupported provider: {provider}",
            field="provider",
            details={"allowedProviders": known_providers()}
        )
    return name


class ApiKeyService:
    """Keys are unique per (client, provider); setting a key again replaces it"""

    def __init__(self, db: Session, client_id: str):
        self.db = db
        self.client_id = client_id
        self.timeout = settings.http_timeout_seconds

    def _find(self, provider: str) -> Optional[ApiKey]:
        return self.db.query(ApiKey).filter(
            ApiKey.client_id == self.client_id,
            ApiKey.provider == provider
        ).first()

    def list(self) -> List[ApiKey]:
        return (
            self.db.query(ApiKey)
            .filter(ApiKey.client_id == self.client_id)
            .order_by(ApiKey.provider)
            .all()
        )

    def set(
        self,
        provider: str,
        key: Optional[str],
        configuration: Optional[Dict[str, Any]] = None,
        is_active: Optional[bool] = None
    ) -> ApiKey:
        """
        Create or replace the client's key for a provider

        Raises:
            ValidationError: Unknown provider or blank key
        """
        provider = _require_provider(provider)
        if is_blank(key):
            raise ValidationError("API key is required", field="key")

        record = self._find(provider)
        if record is None:
            record = ApiKey(client_id=self.client_id, provider=provider)
            self.db.add(record)

        record.key = key.strip()
        record.configuration = configuration or {}
        record.is_active = True if is_active is None else is_active
        record.last_tested_at = None
        record.last_test_ok = None

        self.db.commit()
        self.db.refresh(record)

        logger.info("API key saved", client_id=self.client_id, provider=provider)
        return record

    def delete(self, provider: str) -> None:
        provider = _require_provider(provider)
        record = self._find(provider)
        if record is None:
            raise NotFoundError("API key", f"No API key stored for {provider}")
        self.db.delete(record)
        self.db.commit()
        logger.info("API key deleted", client_id=self.client_id, provider=provider)

    async def test(self, provider: str, key: Optional[str] = None) -> Dict[str, Any]:
        """
        Check a key against the provider. Without a key in the request the
        stored key is checked and the outcome recorded on it.

        Returns:
            Dict with provider, valid (None when the provider has no live check) and message

        Raises:
            ValidationError: Unknown provider, or no key given and none stored
            ExternalServiceError: The provider could not be reached
        """
        provider = _require_provider(provider)

        stored = None
        if is_blank(key):
            stored = self._find(provider)
            if stored is None:
                raise ValidationError("API key is required", field="key")
            key = stored.key

        check = KEY_CHECKS.get(provider)
        if check is None:
            return {"provider": provider, "valid": None, "message": "Live check not available for this provider"}

        url, header, template, extra = check
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, headers={header: template.format(key=key.strip()), **extra})
        except httpx.HTTPError as e:
            logger.error(f"API key check failed: {e}", provider=provider)
            raise ExternalServiceError(provider, f"Could not reach {provider}: {e}")

        valid = response.status_code == 200
        if stored is not None:
            stored.last_tested_at = datetime.utcnow()
            stored.last_test_ok = valid
            self.db.commit()

        logger.info("API key checked", provider=provider, valid=valid, status=response.status_code)
        return {
            "provider": provider,
            "valid": valid,
            "message": "API key is valid" if valid else f"{provider} rejected the key ({response.status_code})",
        }
