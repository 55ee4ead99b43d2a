"""
Agent Service
Voice-bot persona configuration, starting messages and greeting audio
"""

import base64
import binascii
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from voicecrm.core.logging import get_logger
from voicecrm.core.exceptions import DuplicateError, NotFoundError, ValidationError
from voicecrm.db.models import (
    Agent,
    LLM_PROVIDERS,
    PERSONALITIES,
    STT_PROVIDERS,
    TELEPHONY_PROVIDERS,
    TTS_PROVIDERS,
    VOICES,
)
from voicecrm.utils import is_blank

logger = get_logger(__name__)

# Payload key -> (Agent attribute, allowed values or None)
AGENT_FIELDS = {
    "agentName": ("agent_name", None),
    "description": ("description", None),
    "category": ("category", None),
    "personality": ("personality", PERSONALITIES),
    "language": ("language", None),
    "firstMessage": ("first_message", None),
    "systemPrompt": ("system_prompt", None),
    "sttSelection": ("stt_selection", STT_PROVIDERS),
    "ttsSelection": ("tts_selection", TTS_PROVIDERS),
    "llmSelection": ("llm_selection", LLM_PROVIDERS),
    "voiceSelection": ("voice_selection", VOICES),
    "contextMemory": ("context_memory", None),
    "brandInfo": ("brand_info", None),
    "accountSid": ("account_sid", None),
    "serviceProvider": ("service_provider", TELEPHONY_PROVIDERS),
    "taskDidNumber": ("task_did_number", None),
    "callerId": ("caller_id", None),
    "X_API_KEY": ("x_api_key", None),
    "audioFile": ("audio_file", None),
    "audioMetadata": ("audio_metadata", None),
}

REQUIRED_FIELDS = ["agentName", "description", "firstMessage", "systemPrompt"]


def normalize_message(message: Any) -> Dict[str, Any]:
    """Starting messages are {text, audioBase64}; bare strings carry no audio"""
    if isinstance(message, str):
        return {"text": message, "audioBase64": None}
    if isinstance(message, dict):
        return {"text": message.get("text"), "audioBase64": message.get("audioBase64")}
    raise ValidationError("Starting messages must be strings or objects", field="startingMessages")


def select_default_message(messages: Any, index: Any) -> Dict[str, Any]:
    """
    Validate the starting messages and return the selected default

    Raises:
        ValidationError: Empty list, or index not an integer within range
    """
    if not isinstance(messages, list) or not messages:
        raise ValidationError("At least one starting message is required.", field="startingMessages")
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(messages):
        raise ValidationError("Invalid default starting message index.", field="defaultStartingMessageIndex")
    return normalize_message(messages[index])


class AgentService:
    """Agents scoped to a single client"""

    def __init__(self, db: Session, client_id: str):
        self.db = db
        self.client_id = client_id

    def _apply_fields(self, agent: Agent, data: Dict[str, Any]) -> None:
        for key, (attr, allowed) in AGENT_FIELDS.items():
            if key not in data or data[key] is None:
                continue
            value = data[key]
            if allowed is not None and value not in allowed:
                raise ValidationError(
                    f"Invalid {key}. Must be one of: {', '.join(allowed)}",
                    field=key
                )
            setattr(agent, attr, value)

    def _check_name_free(self, name: str, exclude_id: Optional[str] = None) -> None:
        query = self.db.query(Agent).filter(Agent.client_id == self.client_id, Agent.agent_name == name)
        if exclude_id:
            query = query.filter(Agent.id != exclude_id)
        if query.first():
            raise DuplicateError("Agent with this name already exists for this client")

    def list(self) -> List[Agent]:
        return (
            self.db.query(Agent)
            .filter(Agent.client_id == self.client_id)
            .order_by(Agent.created_at.desc())
            .all()
        )

    def get(self, agent_id: str) -> Agent:
        agent = self.db.query(Agent).filter(Agent.id == agent_id, Agent.client_id == self.client_id).first()
        if not agent:
            raise NotFoundError("Agent")
        return agent

    def create(self, data: Dict[str, Any]) -> Agent:
        """Create an agent; firstMessage and audio come from the default starting message"""
        messages = data.get("startingMessages")
        selected = select_default_message(messages, data.get("defaultStartingMessageIndex"))

        data = dict(data)
        data["firstMessage"] = selected["text"]
        missing = [key for key in REQUIRED_FIELDS if is_blank(data.get(key))]
        if missing:
            raise ValidationError(f"{', '.join(missing)} required", errors=[f"{key} is required" for key in missing])

        self._check_name_free(data["agentName"])

        agent = Agent(client_id=self.client_id)
        self._apply_fields(agent, data)
        agent.starting_messages = [normalize_message(m) for m in messages]
        agent.set_audio_from_base64(selected["audioBase64"])

        self.db.add(agent)
        self.db.commit()
        self.db.refresh(agent)

        logger.info("Agent created", agent_id=agent.id, client_id=self.client_id)
        return agent

    def update(self, agent_id: str, data: Dict[str, Any]) -> Agent:
        """Full update with the same starting-message rules as create"""
        messages = data.get("startingMessages")
        selected = select_default_message(messages, data.get("defaultStartingMessageIndex"))

        agent = self.get(agent_id)
        if data.get("agentName") and data["agentName"] != agent.agent_name:
            self._check_name_free(data["agentName"], exclude_id=agent.id)

        data = dict(data)
        data["firstMessage"] = selected["text"]
        self._apply_fields(agent, data)
        agent.starting_messages = [normalize_message(m) for m in messages]
        agent.set_audio_from_base64(selected["audioBase64"])

        self.db.commit()
        self.db.refresh(agent)

        logger.info("Agent updated", agent_id=agent.id)
        return agent

    def update_mobile(
        self,
        agent_id: str,
        first_message: Optional[str] = None,
        voice_selection: Optional[str] = None,
        starting_messages: Optional[List[Any]] = None
    ) -> Agent:
        """Partial update from the mobile app; new starting messages are appended"""
        agent = self.get(agent_id)

        if first_message is not None:
            agent.first_message = first_message
        if voice_selection is not None:
            self._apply_fields(agent, {"voiceSelection": voice_selection})
        if starting_messages is not None:
            existing = list(agent.starting_messages or [])
            agent.starting_messages = existing + [normalize_message(m) for m in starting_messages]

        self.db.commit()
        self.db.refresh(agent)
        return agent

    def delete(self, agent_id: str) -> None:
        agent = self.get(agent_id)
        self.db.delete(agent)
        self.db.commit()
        logger.info("Agent deleted", agent_id=agent_id)

    def audio(self, agent_id: str) -> bytes:
        """Decoded greeting audio"""
        agent = self.get(agent_id)
        if not agent.audio_bytes:
            raise NotFoundError("Audio", "No audio available for this agent")
        try:
            return base64.b64decode(agent.audio_bytes)
        except (binascii.Error, ValueError):
            logger.warning("Stored agent audio is not valid base64", agent_id=agent_id)
            raise NotFoundError("Audio", "No audio available for this agent")
