"""
Business Info Routes
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from voicecrm.db import get_db
from voicecrm.services import BusinessInfoService
from voicecrm.api.schemas import BusinessInfoRequest
from voicecrm.api.middleware.auth import require_client

router = APIRouter()


def get_business_info_service(
    client_id: str = Depends(require_client),
    db: Session = Depends(get_db)
) -> BusinessInfoService:
    return BusinessInfoService(db, client_id)


@router.post("/business-info", status_code=201)
async def create_business_info(
    request: BusinessInfoRequest,
    service: BusinessInfoService = Depends(get_business_info_service)
):
    return {"success": True, "data": service.create(request.text).to_dict()}


@router.get("/business-info/{info_id}")
async def get_business_info(info_id: str, service: BusinessInfoService = Depends(get_business_info_service)):
    return {"success": True, "data": service.get(info_id).to_dict()}


@router.put("/business-info/{info_id}")
async def update_business_info(
    info_id: str,
    request: BusinessInfoRequest,
    service: BusinessInfoService = Depends(get_business_info_service)
):
    return {"success": True, "data": service.update(info_id, request.text).to_dict()}
