"""
Campaign Routes
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from voicecrm.db import get_db
from voicecrm.services import CampaignService
from voicecrm.api.schemas import CampaignGroupsRequest, CampaignRequest
from voicecrm.api.middleware.auth import require_client

router = APIRouter()


def get_campaign_service(
    client_id: str = Depends(require_client),
    db: Session = Depends(get_db)
) -> CampaignService:
    return CampaignService(db, client_id)


@router.get("/campaigns")
async def list_campaigns(service: CampaignService = Depends(get_campaign_service)):
    """Campaigns newest first; groups embedded as name/description"""
    return {"success": True, "data": [c.to_dict() for c in service.list()]}


@router.post("/campaigns", status_code=201)
async def create_campaign(request: CampaignRequest, service: CampaignService = Depends(get_campaign_service)):
    campaign = service.create(
        request.name,
        request.start_date,
        request.end_date,
        description=request.description,
        group_ids=request.group_ids
    )
    return {"success": True, "data": campaign.to_dict()}


@router.get("/campaigns/{campaign_id}")
async def get_campaign(campaign_id: str, service: CampaignService = Depends(get_campaign_service)):
    """Detail view embeds each group's contacts"""
    campaign = service.get(campaign_id)
    return {"success": True, "data": campaign.to_dict(include_contacts=True)}


@router.put("/campaigns/{campaign_id}")
async def update_campaign(
    campaign_id: str,
    request: CampaignRequest,
    service: CampaignService = Depends(get_campaign_service)
):
    campaign = service.update(campaign_id, request.payload())
    return {"success": True, "data": campaign.to_dict()}


@router.delete("/campaigns/{campaign_id}")
async def delete_campaign(campaign_id: str, service: CampaignService = Depends(get_campaign_service)):
    service.delete(campaign_id)
    return {"success": True, "message": "Campaign deleted successfully"}


@router.post("/campaigns/{campaign_id}/groups")
async def set_campaign_groups(
    campaign_id: str,
    request: CampaignGroupsRequest,
    service: CampaignService = Depends(get_campaign_service)
):
    campaign = service.set_groups(campaign_id, request.group_ids)
    return {"success": True, "data": campaign.to_dict()}
