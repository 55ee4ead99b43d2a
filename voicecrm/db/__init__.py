"""
Database Module
"""

from .base import (
    init_database,
    create_db_engine,
    get_db,
    close_database
)
from .models import (
    Base,
    Admin,
    AdminRole,
    Client,
    HumanAgent,
    Agent,
    Group,
    Contact,
    Campaign,
    CampaignStatus,
    CallLog,
    LeadStatus,
    Profile,
    BusinessInfo,
    AgentSettings,
    ApiKey,
    derive_campaign_status,
    generate_uuid,
    is_valid_id
)

__all__ = [
    # Base
    "init_database",
    "create_db_engine",
    "get_db",
    "close_database",
    # Models
    "Base",
    "Admin",
    "AdminRole",
    "Client",
    "HumanAgent",
    "Agent",
    "Group",
    "Contact",
    "Campaign",
    "CampaignStatus",
    "CallLog",
    "LeadStatus",
    "Profile",
    "BusinessInfo",
    "AgentSettings",
    "ApiKey",
    "derive_campaign_status",
    "generate_uuid",
    "is_valid_id"
]
