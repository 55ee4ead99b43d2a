"""
Agent Routes
Voice-bot persona CRUD and greeting audio
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from voicecrm.db import get_db
from voicecrm.services import AgentService
from voicecrm.api.schemas import AgentMobileUpdateRequest, AgentRequest
from voicecrm.api.middleware.auth import require_client

router = APIRouter()


def get_agent_service(
    client_id: str = Depends(require_client),
    db: Session = Depends(get_db)
) -> AgentService:
    return AgentService(db, client_id)


@router.get("/agents")
async def list_agents(service: AgentService = Depends(get_agent_service)):
    """All agents for the client, newest first, without audio"""
    return {"success": True, "data": [a.to_dict() for a in service.list()]}


@router.post("/agents", status_code=201)
async def create_agent(request: AgentRequest, service: AgentService = Depends(get_agent_service)):
    agent = service.create(request.payload())
    return {"success": True, "data": agent.to_dict()}


@router.put("/agents/mob/{agent_id}")
async def update_agent_mobile(
    agent_id: str,
    request: AgentMobileUpdateRequest,
    service: AgentService = Depends(get_agent_service)
):
    agent = service.update_mobile(
        agent_id,
        first_message=request.first_message,
        voice_selection=request.voice_selection,
        starting_messages=request.starting_messages
    )
    return {"success": True, "data": agent.to_dict()}


@router.put("/agents/{agent_id}")
async def update_agent(agent_id: str, request: AgentRequest, service: AgentService = Depends(get_agent_service)):
    agent = service.update(agent_id, request.payload())
    return {"success": True, "data": agent.to_dict()}


@router.delete("/agents/{agent_id}")
async def delete_agent(agent_id: str, service: AgentService = Depends(get_agent_service)):
    service.delete(agent_id)
    return {"success": True, "message": "Agent deleted successfully"}


@router.get("/agents/{agent_id}/audio")
async def get_agent_audio(agent_id: str, service: AgentService = Depends(get_agent_service)):
    audio = service.audio(agent_id)
    return Response(
        content=audio,
        media_type="audio/mpeg",
        headers={"Cache-Control": "public, max-age=3600"}
    )
