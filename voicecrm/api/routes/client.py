"""
Client Account Routes
Logo upload URLs, registration, password and Google sign-in
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from voicecrm.core.logging import get_logger
from voicecrm.core.exceptions import ValidationError
from voicecrm.db import get_db, Admin
from voicecrm.services import (
    ClientAccountService,
    GoogleTokenVerifier,
    StorageService,
    get_google_verifier,
    get_storage_service,
)
from voicecrm.api.schemas import (
    ClientRegisterRequest,
    GoogleLoginRequest,
    HumanAgentLoginRequest,
    LoginRequest,
)
from voicecrm.api.middleware.auth import optional_admin, require_client

logger = get_logger(__name__)
router = APIRouter()


@router.get("/upload-url")
async def get_upload_url(
    file_name: Optional[str] = Query(default=None, alias="fileName"),
    file_type: Optional[str] = Query(default=None, alias="fileType"),
    storage: StorageService = Depends(get_storage_service)
):
    """Pre-signed PUT URL for a business logo"""
    if not file_name or not file_type:
        raise ValidationError("fileName and fileType are required")

    key = StorageService.build_key("businessLogo", file_name)
    url = storage.put_object_url(key, file_type)
    return {"success": True, "url": url, "key": key}


@router.post("/login")
async def login_client(request: LoginRequest, db: Session = Depends(get_db)):
    return ClientAccountService(db).login(request.email, request.password)


@router.post("/register", status_code=201)
async def register_client(
    request: ClientRegisterRequest,
    db: Session = Depends(get_db),
    admin: Optional[Admin] = Depends(optional_admin),
    storage: StorageService = Depends(get_storage_service)
):
    """Self sign-up; an admin bearer token registers the client pre-approved"""
    service = ClientAccountService(db, storage)
    return service.register(request.payload(), approved_by_admin=admin is not None)


@router.post("/google-login")
async def google_login(
    request: GoogleLoginRequest,
    db: Session = Depends(get_db),
    verifier: GoogleTokenVerifier = Depends(get_google_verifier)
):
    identity = await run_in_threadpool(verifier.verify, request.token)
    return ClientAccountService(db).google_login(identity)


@router.get("/profile")
async def get_client_profile(
    client_id: str = Depends(require_client),
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage_service)
):
    data = ClientAccountService(db, storage).profile(client_id)
    return {"success": True, "data": data}


@router.post("/human-agent/login")
async def login_human_agent(request: HumanAgentLoginRequest, db: Session = Depends(get_db)):
    return ClientAccountService(db).human_agent_login(request.email, request.client_email)


@router.post("/human-agent/google-login")
async def login_human_agent_google(
    request: GoogleLoginRequest,
    db: Session = Depends(get_db),
    verifier: GoogleTokenVerifier = Depends(get_google_verifier)
):
    if not request.token:
        raise ValidationError("Google token is required", field="token")
    identity = await run_in_threadpool(verifier.verify, request.token)
    return ClientAccountService(db).human_agent_google_login(identity)
