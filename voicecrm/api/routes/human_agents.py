"""
Human Agent Routes
Client-managed human operator accounts
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from voicecrm.db import get_db, Client
from voicecrm.services import HumanAgentService
from voicecrm.api.schemas import HumanAgentRequest
from voicecrm.api.middleware.auth import require_client_account

router = APIRouter()


def get_human_agent_service(
    client: Client = Depends(require_client_account),
    db: Session = Depends(get_db)
) -> HumanAgentService:
    return HumanAgentService(db, client.id)


@router.get("/human-agents")
async def list_human_agents(service: HumanAgentService = Depends(get_human_agent_service)):
    return {"success": True, "data": [h.to_dict() for h in service.list()]}


@router.post("/human-agents", status_code=201)
async def create_human_agent(
    request: HumanAgentRequest,
    service: HumanAgentService = Depends(get_human_agent_service)
):
    human_agent = service.create(
        request.human_agent_name,
        request.email,
        request.mobile_number,
        request.did,
        agent_ids=request.agent_ids
    )
    return {
        "success": True,
        "data": human_agent.to_dict(include_agents=False),
        "message": "Human agent created successfully"
    }


@router.get("/human-agents/{agent_id}")
async def get_human_agent(agent_id: str, service: HumanAgentService = Depends(get_human_agent_service)):
    return {"success": True, "data": service.get(agent_id).to_dict()}


@router.put("/human-agents/{agent_id}")
async def update_human_agent(
    agent_id: str,
    request: HumanAgentRequest,
    service: HumanAgentService = Depends(get_human_agent_service)
):
    human_agent = service.update(agent_id, request.payload())
    return {
        "success": True,
        "data": human_agent.to_dict(include_agents=False),
        "message": "Human agent updated successfully"
    }


@router.delete("/human-agents/{agent_id}")
async def delete_human_agent(agent_id: str, service: HumanAgentService = Depends(get_human_agent_service)):
    service.delete(agent_id)
    return {"success": True, "message": "Human agent deleted successfully"}
