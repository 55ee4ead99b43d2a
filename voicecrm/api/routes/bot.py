"""
Bot Proxy Routes
Relays messages to the downstream bot-messaging API
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from voicecrm.services import BotProxyService, get_bot_proxy
from voicecrm.api.middleware.auth import require_client

router = APIRouter()


@router.post("/bot/message")
async def send_bot_message(
    payload: Dict[str, Any] = Body(...),
    client_id: str = Depends(require_client),
    proxy: BotProxyService = Depends(get_bot_proxy)
):
    """Downstream status code and body are passed through unchanged"""
    status_code, body = await proxy.forward(payload, client_id)
    return JSONResponse(status_code=status_code, content=body)
