"""
Bot API Proxy
Forwards messages to the fixed downstream bot-messaging API
"""

from typing import Any, Dict, Optional, Tuple

import httpx

from voicecrm.core.config import settings
from voicecrm.core.logging import get_logger
from voicecrm.core.exceptions import ExternalServiceError

logger = get_logger(__name__)


class BotProxyService:

    def __init__(self, base_url: Optional[str] = None):
        self.base_url = base_url if base_url is not None else settings.bot_api_url
        self.timeout = settings.http_timeout_seconds

    async def forward(self, payload: Dict[str, Any], client_id: str) -> Tuple[int, Any]:
        """POST payload downstream; returns (status_code, body)"""
        if not self.base_url:
            raise ExternalServiceError("bot_api", "Bot API URL not configured")

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.base_url,
                    json=payload,
                    headers={"X-Client-Id": client_id}
                )
        except httpx.HTTPError as e:
            logger.error(f"Bot API request failed: {e}", client_id=client_id)
            raise ExternalServiceError("bot_api", f"Bot API request failed: {e}")

        try:
            body = response.json()
        except ValueError:
            body = {"raw": response.text}

        logger.info("Bot API responded", status=response.status_code, client_id=client_id)
        return response.status_code, body


_bot_proxy: Optional[BotProxyService] = None


def get_bot_proxy() -> BotProxyService:
    global _bot_proxy
    if _bot_proxy is None:
        _bot_proxy = BotProxyService()
    return _bot_proxy
