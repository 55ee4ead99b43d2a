"""
VoiceCRM Database Models
SQLAlchemy models for the multi-tenant voice campaign backend
"""

import enum
import math
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import (
    Column, String, Integer, Float, Boolean, DateTime, Text, JSON,
    ForeignKey, Index, UniqueConstraint, Table, event
)
from sqlalchemy.orm import declarative_base, relationship, validates

Base = declarative_base()


def generate_uuid() -> str:
    """Generate a UUID string"""
    return str(uuid.uuid4())


def is_valid_id(value: Optional[str]) -> bool:
    """True when value looks like one of our primary keys"""
    if not value:
        return False
    try:
        uuid.UUID(str(value))
        return True
    except ValueError:
        return False


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class AdminRole(enum.Enum):
    """Back-office account roles"""
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


class CampaignStatus(enum.Enum):
    """Campaign status enumeration"""
    ACTIVE = "active"
    EXPIRED = "expired"


class LeadStatus(enum.Enum):
    """Outcome tag recorded on each call log"""
    # Connected - interested
    VVI = "vvi"
    MAYBE = "maybe"
    ENROLLED = "enrolled"
    # Connected - not interested
    JUNK_LEAD = "junk_lead"
    NOT_REQUIRED = "not_required"
    ENROLLED_OTHER = "enrolled_other"
    DECLINE = "decline"
    NOT_ELIGIBLE = "not_eligible"
    WRONG_NUMBER = "wrong_number"
    # Connected - followup
    HOT_FOLLOWUP = "hot_followup"
    COLD_FOLLOWUP = "cold_followup"
    SCHEDULE = "schedule"
    # Not connected
    NOT_CONNECTED = "not_connected"


PERSONALITIES = ["formal", "informal", "friendly", "flirty", "disciplined"]
STT_PROVIDERS = ["deepgram", "whisper", "google", "azure", "aws"]
TTS_PROVIDERS = ["sarvam", "elevenlabs", "openai", "google", "azure", "aws"]
LLM_PROVIDERS = ["openai", "anthropic", "google", "azure"]
TELEPHONY_PROVIDERS = ["twilio", "vonage", "plivo", "bandwidth", "other"]
VOICES = [
    "default", "male-professional", "female-professional", "male-friendly",
    "female-friendly", "neutral", "abhilash", "anushka", "meera", "pavithra",
    "maitreyi", "arvind", "amol", "amartya", "diya", "neel", "misha", "vian",
    "arjun", "maya", "manisha", "vidya", "arya", "karun", "hitesh",
]

DEFAULT_AUDIO_METADATA = {
    "format": "mp3",
    "sampleRate": 22050,
    "channels": 1,
    "language": "en",
    "provider": "sarvam",
}


def derive_campaign_status(now: datetime, start: datetime, end: datetime) -> str:
    """A campaign is active inside its [start, end] window, expired otherwise"""
    if start <= now <= end:
        return CampaignStatus.ACTIVE.value
    return CampaignStatus.EXPIRED.value


def base64_decoded_size(encoded: str) -> int:
    """Approximate decoded byte count of a base64 string"""
    return math.ceil(len(encoded) * 3 / 4)


# ============================================
# ASSOCIATION TABLES
# ============================================

campaign_groups = Table(
    "campaign_groups",
    Base.metadata,
    Column("campaign_id", String(36), ForeignKey("campaigns.id", ondelete="CASCADE"), primary_key=True),
    Column("group_id", String(36), ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True),
)

human_agent_agents = Table(
    "human_agent_agents",
    Base.metadata,
    Column("human_agent_id", String(36), ForeignKey("human_agents.id", ondelete="CASCADE"), primary_key=True),
    Column("agent_id", String(36), ForeignKey("agents.id", ondelete="CASCADE"), primary_key=True),
)


# ============================================
# ACCOUNT MODELS
# ============================================

class Admin(Base):
    """Back-office operators (admins and superadmins)"""
    __tablename__ = "admins"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=AdminRole.ADMIN.value)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "createdAt": _iso(self.created_at),
        }


class Client(Base):
    """Tenant business account"""
    __tablename__ = "clients"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False, default="")

    # Business details
    business_name = Column(String(255), nullable=True)
    business_logo_key = Column(String(500), nullable=True)
    business_logo_url = Column(Text, nullable=True)
    gst_no = Column(String(50), nullable=True, index=True)
    pan_no = Column(String(50), nullable=True, index=True)
    mobile_no = Column(String(30), nullable=True, index=True)
    address = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    pincode = Column(String(20), nullable=True)
    website_url = Column(String(500), nullable=True)

    # Status flags
    is_approved = Column(Boolean, default=False, nullable=False)
    isprofile_completed = Column(Boolean, default=False, nullable=False)

    # Google identity
    is_google_user = Column(Boolean, default=False, nullable=False)
    google_id = Column(String(255), nullable=True)
    google_picture = Column(String(500), nullable=True)
    email_verified = Column(Boolean, default=False, nullable=False)

    # Free-form account preferences
    settings = Column(JSON, default=dict)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    human_agents = relationship("HumanAgent", back_populates="client", cascade="all, delete-orphan")
    agents = relationship("Agent", back_populates="client", cascade="all, delete-orphan")
    groups = relationship("Group", back_populates="client", cascade="all, delete-orphan")
    campaigns = relationship("Campaign", back_populates="client", cascade="all, delete-orphan")
    call_logs = relationship("CallLog", back_populates="client", cascade="all, delete-orphan")
    api_keys = relationship("ApiKey", back_populates="client", cascade="all, delete-orphan")
    business_infos = relationship("BusinessInfo", back_populates="client", cascade="all, delete-orphan")
    profile = relationship("Profile", back_populates="client", uselist=False, cascade="all, delete-orphan")
    agent_settings = relationship("AgentSettings", back_populates="client", uselist=False, cascade="all, delete-orphan")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize without the password hash"""
        return {
            "_id": self.id,
            "name": self.name,
            "email": self.email,
            "businessName": self.business_name,
            "businessLogoKey": self.business_logo_key,
            "businessLogoUrl": self.business_logo_url,
            "gstNo": self.gst_no,
            "panNo": self.pan_no,
            "mobileNo": self.mobile_no,
            "address": self.address,
            "city": self.city,
            "pincode": self.pincode,
            "websiteUrl": self.website_url,
            "isApproved": bool(self.is_approved),
            "isprofileCompleted": bool(self.isprofile_completed),
            "isGoogleUser": bool(self.is_google_user),
            "googlePicture": self.google_picture,
            "emailVerified": bool(self.email_verified),
            "settings": self.settings or {},
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


class HumanAgent(Base):
    """Human operator sub-account under a client"""
    __tablename__ = "human_agents"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    client_id = Column(String(36), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)

    human_agent_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    mobile_number = Column(String(30), nullable=False)
    did = Column(String(50), nullable=True)

    isprofile_completed = Column(Boolean, default=False, nullable=False)
    is_approved = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    client = relationship("Client", back_populates="human_agents")
    agents = relationship("Agent", secondary=human_agent_agents)

    __table_args__ = (
        UniqueConstraint("client_id", "human_agent_name", name="uq_human_agent_client_name"),
    )

    @validates("email")
    def _lowercase_email(self, key, value):
        return value.strip().lower() if value else value

    def to_dict(self, include_agents: bool = True) -> Dict[str, Any]:
        data = {
            "_id": self.id,
            "clientId": self.client_id,
            "humanAgentName": self.human_agent_name,
            "email": self.email,
            "mobileNumber": self.mobile_number,
            "did": self.did,
            "isprofileCompleted": bool(self.isprofile_completed),
            "isApproved": bool(self.is_approved),
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }
        if include_agents:
            data["agentIds"] = [
                {"_id": a.id, "agentName": a.agent_name, "description": a.description}
                for a in self.agents
            ]
        else:
            data["agentIds"] = [a.id for a in self.agents]
        return data


# ============================================
# AGENT MODELS
# ============================================

class Agent(Base):
    """Configured AI voice-bot persona"""
    __tablename__ = "agents"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    client_id = Column(String(36), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)

    # Persona
    agent_name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(100), nullable=True)
    personality = Column(String(20), default="formal", nullable=False)
    language = Column(String(10), default="en", nullable=False)

    # Conversation setup
    first_message = Column(Text, nullable=False)
    system_prompt = Column(Text, nullable=False)
    stt_selection = Column(String(20), default="deepgram", nullable=False)
    tts_selection = Column(String(20), default="sarvam", nullable=False)
    llm_selection = Column(String(20), default="openai", nullable=False)
    voice_selection = Column(String(40), default="default", nullable=False)
    context_memory = Column(Text, nullable=True)
    brand_info = Column(Text, nullable=True)
    starting_messages = Column(JSON, default=list)

    # Telephony
    account_sid = Column(String(100), nullable=True)
    service_provider = Column(String(20), nullable=True)
    task_did_number = Column(String(50), nullable=True)
    caller_id = Column(String(50), nullable=True, index=True)
    x_api_key = Column(String(255), nullable=True)

    # Audio (base64 string)
    audio_file = Column(String(500), nullable=True)
    audio_bytes = Column(Text, nullable=True)
    audio_metadata = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    client = relationship("Client", back_populates="agents")

    __table_args__ = (
        UniqueConstraint("client_id", "agent_name", name="uq_agent_client_name"),
    )

    def set_audio_from_base64(self, encoded: Optional[str]) -> None:
        """Store base64 audio and stamp its decoded size"""
        self.audio_bytes = encoded or None
        if encoded:
            metadata = dict(DEFAULT_AUDIO_METADATA)
            metadata.update(self.audio_metadata or {})
            metadata["size"] = base64_decoded_size(encoded)
            self.audio_metadata = metadata

    def to_dict(self) -> Dict[str, Any]:
        """Serialize without the audio payload"""
        return {
            "_id": self.id,
            "clientId": self.client_id,
            "agentName": self.agent_name,
            "description": self.description,
            "category": self.category,
            "personality": self.personality,
            "language": self.language,
            "firstMessage": self.first_message,
            "systemPrompt": self.system_prompt,
            "sttSelection": self.stt_selection,
            "ttsSelection": self.tts_selection,
            "llmSelection": self.llm_selection,
            "voiceSelection": self.voice_selection,
            "contextMemory": self.context_memory,
            "brandInfo": self.brand_info,
            "startingMessages": self.starting_messages or [],
            "accountSid": self.account_sid,
            "serviceProvider": self.service_provider,
            "taskDidNumber": self.task_did_number,
            "callerId": self.caller_id,
            "X_API_KEY": self.x_api_key,
            "audioFile": self.audio_file,
            "audioMetadata": self.audio_metadata,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


@event.listens_for(Agent, "before_insert")
@event.listens_for(Agent, "before_update")
def _agent_before_save(mapper, connection, target: Agent) -> None:
    target.updated_at = datetime.utcnow()
    if target.audio_bytes:
        metadata = dict(DEFAULT_AUDIO_METADATA)
        metadata.update(target.audio_metadata or {})
        metadata["size"] = base64_decoded_size(target.audio_bytes)
        target.audio_metadata = metadata


# ============================================
# GROUP & CAMPAIGN MODELS
# ============================================

class Group(Base):
    """Named contact list owned by a client"""
    __tablename__ = "groups"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    client_id = Column(String(36), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, default="")
    agent_ids = Column(JSON, default=list)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    client = relationship("Client", back_populates="groups")
    contacts = relationship(
        "Contact",
        back_populates="group",
        cascade="all, delete-orphan",
        order_by="Contact.created_at"
    )

    def to_dict(self, include_contacts: bool = True) -> Dict[str, Any]:
        data = {
            "_id": self.id,
            "clientId": self.client_id,
            "name": self.name,
            "description": self.description or "",
            "agentIds": self.agent_ids or [],
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }
        if include_contacts:
            data["contacts"] = [c.to_dict() for c in self.contacts]
        return data

    def summary(self) -> Dict[str, Any]:
        """Name/description projection used when embedding in campaigns"""
        return {"_id": self.id, "name": self.name, "description": self.description or ""}


class Contact(Base):
    """Contact entry embedded in a group"""
    __tablename__ = "contacts"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    group_id = Column(String(36), ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(30), nullable=False)
    email = Column(String(255), default="")
    created_at = Column(DateTime, default=datetime.utcnow)

    group = relationship("Group", back_populates="contacts")

    @validates("email")
    def _lowercase_email(self, key, value):
        return value.strip().lower() if value else ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "name": self.name,
            "phone": self.phone,
            "email": self.email or "",
            "createdAt": _iso(self.created_at),
        }


class Campaign(Base):
    """Time-windowed association of groups to a client"""
    __tablename__ = "campaigns"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    client_id = Column(String(36), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, default="")
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    status = Column(String(20), default=CampaignStatus.ACTIVE.value, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    client = relationship("Client", back_populates="campaigns")
    groups = relationship("Group", secondary=campaign_groups, order_by="Group.created_at")

    def update_status(self, now: Optional[datetime] = None) -> str:
        """Recompute status from the date window"""
        self.status = derive_campaign_status(now or datetime.utcnow(), self.start_date, self.end_date)
        return self.status

    @property
    def current_status(self) -> str:
        return derive_campaign_status(datetime.utcnow(), self.start_date, self.end_date)

    def to_dict(self, include_contacts: bool = False) -> Dict[str, Any]:
        if include_contacts:
            groups = [
                {**g.summary(), "contacts": [c.to_dict() for c in g.contacts]}
                for g in self.groups
            ]
        else:
            groups = [g.summary() for g in self.groups]
        return {
            "_id": self.id,
            "clientId": self.client_id,
            "name": self.name,
            "description": self.description or "",
            "groupIds": groups,
            "startDate": _iso(self.start_date),
            "endDate": _iso(self.end_date),
            "status": self.status,
            "currentStatus": self.current_status,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


@event.listens_for(Campaign, "before_insert")
@event.listens_for(Campaign, "before_update")
def _campaign_before_save(mapper, connection, target: Campaign) -> None:
    target.updated_at = datetime.utcnow()
    target.update_status()


@event.listens_for(Group, "before_update")
def _group_before_update(mapper, connection, target: Group) -> None:
    target.updated_at = datetime.utcnow()


# ============================================
# CALL LOG MODELS
# ============================================

class CallLog(Base):
    """One record per call, tagged with a lead status"""
    __tablename__ = "call_logs"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    client_id = Column(String(36), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    campaign_id = Column(String(36), nullable=True, index=True)
    agent_id = Column(String(36), nullable=True, index=True)

    mobile = Column(String(30), nullable=True)
    time = Column(DateTime, nullable=True)
    transcript = Column(Text, nullable=True)
    audio_url = Column(String(500), nullable=True)
    duration = Column(Float, nullable=True)
    lead_status = Column(String(30), default=LeadStatus.MAYBE.value, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    client = relationship("Client", back_populates="call_logs")

    __table_args__ = (
        Index("idx_calllog_client_campaign_agent_time", "client_id", "campaign_id", "agent_id", "time"),
        Index("idx_calllog_client_lead_status", "client_id", "lead_status"),
    )

    @validates("lead_status")
    def _validate_lead_status(self, key, value):
        if value is None:
            return LeadStatus.MAYBE.value
        return LeadStatus(value).value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "clientId": self.client_id,
            "campaignId": self.campaign_id,
            "agentId": self.agent_id,
            "mobile": self.mobile,
            "time": _iso(self.time),
            "transcript": self.transcript,
            "audioUrl": self.audio_url,
            "duration": self.duration,
            "leadStatus": self.lead_status,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


# ============================================
# PROFILE & BUSINESS INFO MODELS
# ============================================

class Profile(Base):
    """Descriptive business profile, 1:1 with a client or a human agent"""
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    client_id = Column(String(36), ForeignKey("clients.id", ondelete="CASCADE"), unique=True, nullable=True)
    human_agent_id = Column(String(36), ForeignKey("human_agents.id", ondelete="CASCADE"), unique=True, nullable=True)

    business_name = Column(String(255), nullable=True)
    business_type = Column(String(100), nullable=True)
    contact_number = Column(String(30), nullable=True)
    contact_name = Column(String(255), nullable=True)
    pincode = Column(String(20), nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    website = Column(String(500), nullable=True)
    pancard = Column(String(50), nullable=True)
    gst = Column(String(50), nullable=True)
    annual_turnover = Column(String(100), nullable=True)
    address = Column(Text, nullable=True)

    is_profile_completed = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    client = relationship("Client", back_populates="profile")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "clientId": self.client_id,
            "humanAgentId": self.human_agent_id,
            "businessName": self.business_name,
            "businessType": self.business_type,
            "contactNumber": self.contact_number,
            "contactName": self.contact_name,
            "pincode": self.pincode,
            "city": self.city,
            "state": self.state,
            "website": self.website,
            "pancard": self.pancard,
            "gst": self.gst,
            "annualTurnover": self.annual_turnover,
            "address": self.address,
            "isProfileCompleted": bool(self.is_profile_completed),
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


class BusinessInfo(Base):
    """Free-text business description used to brief agents"""
    __tablename__ = "business_infos"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    client_id = Column(String(36), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column(Text, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    client = relationship("Client", back_populates="business_infos")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "clientId": self.client_id,
            "text": self.text,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


class AgentSettings(Base):
    """Per-client inbound settings document"""
    __tablename__ = "agent_settings"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    client_id = Column(String(36), ForeignKey("clients.id", ondelete="CASCADE"), unique=True, nullable=False)
    settings = Column(JSON, default=dict)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    client = relationship("Client", back_populates="agent_settings")

    def to_dict(self) -> Dict[str, Any]:
        return {
            **(self.settings or {}),
            "_id": self.id,
            "clientId": self.client_id,
            "updatedAt": _iso(self.updated_at),
        }


def mask_key(key: Optional[str]) -> str:
    """Show only the last four characters of a secret"""
    if not key:
        return ""
    if len(key) <= 8:
        return "****"
    return "****" + key[-4:]


class ApiKey(Base):
    """A client's own credentials for one STT/TTS/LLM/telephony provider"""
    __tablename__ = "api_keys"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    client_id = Column(String(36), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    provider = Column(String(40), nullable=False)
    key = Column(Text, nullable=False)
    configuration = Column(JSON, default=dict)
    is_active = Column(Boolean, default=True, nullable=False)

    last_tested_at = Column(DateTime, nullable=True)
    last_test_ok = Column(Boolean, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    client = relationship("Client", back_populates="api_keys")

    __table_args__ = (
        UniqueConstraint("client_id", "provider", name="uq_api_key_client_provider"),
    )

    def to_dict(self) -> Dict[str, Any]:
        """The stored key is never returned in full"""
        return {
            "_id": self.id,
            "clientId": self.client_id,
            "provider": self.provider,
            "maskedKey": mask_key(self.key),
            "configuration": self.configuration or {},
            "isActive": bool(self.is_active),
            "lastTestedAt": _iso(self.last_tested_at),
            "lastTestOk": self.last_test_ok,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


LEAD_STATUS_VALUES: List[str] = [status.value for status in LeadStatus]
