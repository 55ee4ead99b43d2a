"""
Client Settings Routes
Account settings, provider catalog and per-provider API keys
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from voicecrm.db import get_db, Client
from voicecrm.services import ApiKeyService, ClientAccountService, provider_configs
from voicecrm.api.schemas import ApiKeyRequest, ApiKeyTestRequest, ClientAccountRequest
from voicecrm.api.middleware.auth import require_client, require_client_account

router = APIRouter()


def get_api_key_service(
    client_id: str = Depends(require_client),
    db: Session = Depends(get_db)
) -> ApiKeyService:
    return ApiKeyService(db, client_id)


@router.get("/")
async def get_client_account(client: Client = Depends(require_client_account)):
    return {"success": True, "data": client.to_dict()}


@router.put("/")
async def update_client_account(
    request: ClientAccountRequest,
    client: Client = Depends(require_client_account),
    db: Session = Depends(get_db)
):
    updated = ClientAccountService(db).update_account(client, request.payload())
    return {
        "success": True,
        "data": updated.to_dict(),
        "message": "Client information updated successfully"
    }


@router.get("/providers")
async def list_providers():
    """Provider catalog; no token needed"""
    return {"success": True, "data": provider_configs()}


@router.get("/api-keys")
async def list_api_keys(service: ApiKeyService = Depends(get_api_key_service)):
    return {"success": True, "data": [k.to_dict() for k in service.list()]}


@router.post("/api-keys/{provider}")
async def set_api_key(
    provider: str,
    request: ApiKeyRequest,
    service: ApiKeyService = Depends(get_api_key_service)
):
    record = service.set(provider, request.key, request.configuration, request.is_active)
    return {"success": True, "data": record.to_dict(), "message": "API key saved successfully"}


@router.post("/api-keys/{provider}/test")
async def test_api_key(
    provider: str,
    request: Optional[ApiKeyTestRequest] = None,
    service: ApiKeyService = Depends(get_api_key_service)
):
    """Without a key in the body the stored key is checked"""
    result = await service.test(provider, request.key if request else None)
    return {"success": True, "data": result}


@router.delete("/api-keys/{provider}")
async def delete_api_key(provider: str, service: ApiKeyService = Depends(get_api_key_service)):
    service.delete(provider)
    return {"success": True, "message": "API key deleted successfully"}
