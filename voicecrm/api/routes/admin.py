"""
Admin Routes
Admin login and client administration
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from voicecrm.core.logging import get_logger
from voicecrm.db import get_db, Admin
from voicecrm.services import AdminService
from voicecrm.api.schemas import AdminRegisterRequest, LoginRequest
from voicecrm.api.middleware.auth import require_admin, require_superadmin

logger = get_logger(__name__)
router = APIRouter()


@router.get("/")
async def hello_admin():
    return {"message": "Hello admin"}


@router.post("/login")
async def login_admin(request: LoginRequest, db: Session = Depends(get_db)):
    result = AdminService(db).login(request.email, request.password)
    return {"success": True, **result}


@router.post("/register", status_code=201)
async def register_admin(
    request: AdminRegisterRequest,
    db: Session = Depends(get_db),
    _: Admin = Depends(require_superadmin)
):
    """Admins are created by a superadmin"""
    admin = AdminService(db).register(request.name, request.email, request.password)
    return {"success": True, "message": "Admin registered successfully", "data": admin.to_dict()}


@router.get("/getclients")
async def get_clients(db: Session = Depends(get_db), _: Admin = Depends(require_admin)):
    clients = AdminService(db).list_clients()
    return {"success": True, "data": [c.to_dict() for c in clients]}


@router.get("/getclientbyid/{client_id}")
async def get_client_by_id(client_id: str, db: Session = Depends(get_db), _: Admin = Depends(require_admin)):
    client = AdminService(db).get_client(client_id)
    return {"success": True, "data": client.to_dict()}


@router.delete("/deleteclient/{client_id}")
async def delete_client(client_id: str, db: Session = Depends(get_db), admin: Admin = Depends(require_admin)):
    AdminService(db).delete_client(client_id)
    logger.info("Client removed by admin", client_id=client_id, admin_id=admin.id)
    return {"success": True, "message": "Client deleted successfully"}


@router.get("/get-client-token/{client_id}")
async def get_client_token(client_id: str, db: Session = Depends(get_db), admin: Admin = Depends(require_admin)):
    """Impersonation token for support work"""
    result = AdminService(db).client_token(client_id)
    logger.info("Client token issued", client_id=client_id, admin_id=admin.id)
    return {"success": True, **result}


@router.post("/approve-client/{client_id}")
async def approve_client(client_id: str, db: Session = Depends(get_db), _: Admin = Depends(require_admin)):
    client = AdminService(db).approve_client(client_id)
    return {"success": True, "message": "Client approved successfully", "data": client.to_dict()}
