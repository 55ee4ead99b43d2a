"""
Group Routes
Contact lists and contacts
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from voicecrm.db import get_db
from voicecrm.services import GroupService
from voicecrm.api.schemas import ContactRequest, GroupRequest
from voicecrm.api.middleware.auth import require_client

router = APIRouter()


def get_group_service(
    client_id: str = Depends(require_client),
    db: Session = Depends(get_db)
) -> GroupService:
    return GroupService(db, client_id)


@router.get("/groups")
async def list_groups(service: GroupService = Depends(get_group_service)):
    return {"success": True, "data": [g.to_dict() for g in service.list()]}


@router.post("/groups", status_code=201)
async def create_group(request: GroupRequest, service: GroupService = Depends(get_group_service)):
    group = service.create(request.name, request.description)
    return {"success": True, "data": group.to_dict()}


@router.get("/groups/{group_id}")
async def get_group(group_id: str, service: GroupService = Depends(get_group_service)):
    return {"success": True, "data": service.get(group_id).to_dict()}


@router.put("/groups/{group_id}")
async def update_group(group_id: str, request: GroupRequest, service: GroupService = Depends(get_group_service)):
    group = service.update(group_id, request.name, request.description)
    return {"success": True, "data": group.to_dict()}


@router.delete("/groups/{group_id}")
async def delete_group(group_id: str, service: GroupService = Depends(get_group_service)):
    service.delete(group_id)
    return {"success": True, "message": "Group deleted successfully"}


@router.post("/groups/{group_id}/contacts", status_code=201)
async def add_contact(group_id: str, request: ContactRequest, service: GroupService = Depends(get_group_service)):
    contact = service.add_contact(group_id, request.name, request.phone, request.email)
    return {"success": True, "data": contact.to_dict()}


@router.delete("/groups/{group_id}/contacts/{contact_id}")
async def delete_contact(group_id: str, contact_id: str, service: GroupService = Depends(get_group_service)):
    service.remove_contact(group_id, contact_id)
    return {"success": True, "message": "Contact deleted successfully"}
