"""
Request Models
Pydantic bodies for the REST surface; wire names are camelCase
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts camelCase on the wire and snake_case in Python"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True
    )

    def payload(self) -> dict:
        """camelCase dict of the fields the caller actually sent"""
        return self.model_dump(by_alias=True, exclude_unset=True)


# ============================================
# ACCOUNTS
# ============================================

class AdminRegisterRequest(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ClientRegisterRequest(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    business_name: Optional[str] = None
    business_logo_key: Optional[str] = None
    gst_no: Optional[str] = None
    pan_no: Optional[str] = None
    mobile_no: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    pincode: Optional[str] = None
    website_url: Optional[str] = None


class GoogleLoginRequest(CamelModel):
    token: Optional[str] = None


class HumanAgentLoginRequest(CamelModel):
    email: Optional[str] = None
    client_email: Optional[str] = None


class ClientAccountRequest(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    settings: Any = None


class ApiKeyRequest(CamelModel):
    key: Optional[str] = None
    configuration: Optional[Dict[str, Any]] = None
    is_active: Optional[bool] = None


class ApiKeyTestRequest(CamelModel):
    key: Optional[str] = None


# ============================================
# CLIENT RESOURCES
# ============================================

class AgentRequest(CamelModel):
    """Agent create/update body; enum and message checks happen in the service"""
    agent_name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    personality: Optional[str] = None
    language: Optional[str] = None
    system_prompt: Optional[str] = None
    stt_selection: Optional[str] = None
    tts_selection: Optional[str] = None
    llm_selection: Optional[str] = None
    voice_selection: Optional[str] = None
    context_memory: Optional[str] = None
    brand_info: Optional[str] = None
    account_sid: Optional[str] = None
    service_provider: Optional[str] = None
    task_did_number: Optional[str] = None
    caller_id: Optional[str] = None
    x_api_key: Optional[str] = Field(default=None, alias="X_API_KEY")
    audio_file: Optional[str] = None
    audio_metadata: Optional[dict] = None
    starting_messages: Any = None
    default_starting_message_index: Any = None


class AgentMobileUpdateRequest(CamelModel):
    first_message: Optional[str] = None
    voice_selection: Optional[str] = None
    starting_messages: Optional[List[Any]] = None


class SynthesizeRequest(CamelModel):
    text: Optional[str] = None
    language: str = "en"
    speaker: Optional[str] = None


class GroupRequest(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None


class ContactRequest(CamelModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class CampaignRequest(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    group_ids: Optional[List[str]] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class CampaignGroupsRequest(CamelModel):
    group_ids: Any = None


class BusinessInfoRequest(CamelModel):
    text: Optional[str] = None


class HumanAgentRequest(CamelModel):
    human_agent_name: Optional[str] = None
    email: Optional[str] = None
    mobile_number: Optional[str] = None
    did: Optional[str] = None
    agent_ids: Optional[List[str]] = None


class ProfileRequest(CamelModel):
    business_name: Optional[str] = None
    business_type: Optional[str] = None
    contact_number: Optional[str] = None
    contact_name: Optional[str] = None
    pincode: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    website: Optional[str] = None
    pancard: Optional[str] = None
    gst: Optional[str] = None
    annual_turnover: Optional[str] = None
    address: Optional[str] = None
    human_agent_id: Optional[str] = None

    def fields(self) -> dict:
        """Snake_case profile attributes that were sent"""
        return self.model_dump(exclude_unset=True, exclude={"human_agent_id"})
