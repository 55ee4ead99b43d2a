"""
Profile Routes
Business profiles for clients and their human agents
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from voicecrm.core.exceptions import AuthenticationError
from voicecrm.db import get_db, Admin, Client, is_valid_id
from voicecrm.services import ProfileService
from voicecrm.api.schemas import ProfileRequest
from voicecrm.api.middleware.auth import require_admin, require_client, require_client_account

router = APIRouter()


def _check_owner(client_id: str, token_client_id: str) -> None:
    # Malformed ids fall through so the service reports them as 400
    if is_valid_id(client_id) and client_id != token_client_id:
        raise AuthenticationError("Not authorized to access this profile", error_code="FORBIDDEN_PROFILE")


@router.post("/", status_code=201)
async def create_profile(
    request: ProfileRequest,
    client: Client = Depends(require_client_account),
    db: Session = Depends(get_db)
):
    profile = ProfileService(db).create_profile(client, request.fields(), request.human_agent_id)
    return {"success": True, "message": "Profile created successfully", "data": profile.to_dict()}


@router.get("/")
async def list_profiles(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    search: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
    _: Admin = Depends(require_admin)
):
    """Paginated profile listing for back-office use"""
    result = ProfileService(db).list_profiles(page=page, limit=limit, search=search)
    result["profiles"] = [p.to_dict() for p in result["profiles"]]
    return {"success": True, "data": result}


@router.get("/{client_id}")
async def get_profile(
    client_id: str,
    token_client_id: str = Depends(require_client),
    db: Session = Depends(get_db)
):
    _check_owner(client_id, token_client_id)
    result = ProfileService(db).get_profile(client_id)
    return {
        "success": True,
        "data": {"email": result["email"], "profile": result["profile"].to_dict()}
    }


@router.put("/{client_id}")
async def update_profile(
    client_id: str,
    request: ProfileRequest,
    token_client_id: str = Depends(require_client),
    db: Session = Depends(get_db)
):
    _check_owner(client_id, token_client_id)
    profile = ProfileService(db).update_profile(client_id, request.fields())
    return {"success": True, "message": "Profile updated successfully", "data": profile.to_dict()}


@router.delete("/{client_id}")
async def delete_profile(
    client_id: str,
    token_client_id: str = Depends(require_client),
    db: Session = Depends(get_db)
):
    _check_owner(client_id, token_client_id)
    ProfileService(db).delete_profile(client_id)
    return {"success": True, "message": "Profile deleted successfully"}
