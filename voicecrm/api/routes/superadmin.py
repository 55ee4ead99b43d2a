"""
Superadmin Routes
Superadmin bootstrap, admin account management and a global client view
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from voicecrm.core.logging import get_logger
from voicecrm.db import get_db, Admin, AdminRole
from voicecrm.services import AdminService
from voicecrm.api.schemas import AdminRegisterRequest, LoginRequest
from voicecrm.api.middleware.auth import require_superadmin, require_superadmin_key

logger = get_logger(__name__)
router = APIRouter()


@router.get("/")
async def hello_superadmin():
    return {"message": "Hello superadmin"}


@router.post("/register", status_code=201, dependencies=[Depends(require_superadmin_key)])
async def register_superadmin(request: AdminRegisterRequest, db: Session = Depends(get_db)):
    """Create a superadmin; requires the X-Superadmin-Key header"""
    admin = AdminService(db).register(
        request.name, request.email, request.password, role=AdminRole.SUPERADMIN.value
    )
    return {"success": True, "message": "Superadmin registered successfully", "data": admin.to_dict()}


@router.post("/login")
async def login_superadmin(request: LoginRequest, db: Session = Depends(get_db)):
    result = AdminService(db).login(request.email, request.password, role=AdminRole.SUPERADMIN.value)
    return {"success": True, **result}


@router.get("/admins")
async def list_admins(db: Session = Depends(get_db), _: Admin = Depends(require_superadmin)):
    admins = AdminService(db).list_admins()
    return {"success": True, "data": [a.to_dict() for a in admins]}


@router.post("/admins", status_code=201)
async def create_admin(
    request: AdminRegisterRequest,
    db: Session = Depends(get_db),
    superadmin: Admin = Depends(require_superadmin)
):
    admin = AdminService(db).register(request.name, request.email, request.password)
    logger.info("Admin created by superadmin", admin_id=admin.id, superadmin_id=superadmin.id)
    return {"success": True, "message": "Admin created successfully", "data": admin.to_dict()}


@router.delete("/admins/{admin_id}")
async def delete_admin(
    admin_id: str,
    db: Session = Depends(get_db),
    _: Admin = Depends(require_superadmin)
):
    AdminService(db).delete_admin(admin_id)
    return {"success": True, "message": "Admin deleted successfully"}


@router.get("/clients")
async def list_all_clients(db: Session = Depends(get_db), _: Admin = Depends(require_superadmin)):
    clients = AdminService(db).list_clients()
    return {"success": True, "data": [c.to_dict() for c in clients]}
