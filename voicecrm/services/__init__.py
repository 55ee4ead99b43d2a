"""
Services Module
Business logic and external integrations
"""

from .storage_service import StorageService, get_storage_service
from .google_auth import GoogleTokenVerifier, get_google_verifier
from .voice_service import VoiceService, get_voice_service
from .bot_proxy import BotProxyService, get_bot_proxy
from .admin_service import AdminService
from .client_service import ClientAccountService
from .human_agent_service import HumanAgentService
from .profile_service import ProfileService
from .agent_service import AgentService
from .group_service import GroupService
from .campaign_service import CampaignService
from .business_info_service import BusinessInfoService
from .report_service import ReportService, InboundSettingsService, resolve_date_window
from .api_key_service import ApiKeyService, provider_configs

__all__ = [
    # External collaborators
    "StorageService",
    "get_storage_service",
    "GoogleTokenVerifier",
    "get_google_verifier",
    "VoiceService",
    "get_voice_service",
    "BotProxyService",
    "get_bot_proxy",

    # Accounts
    "AdminService",
    "ClientAccountService",
    "HumanAgentService",
    "ProfileService",

    # Client resources
    "AgentService",
    "GroupService",
    "CampaignService",
    "BusinessInfoService",
    "ApiKeyService",
    "provider_configs",

    # Reporting
    "ReportService",
    "InboundSettingsService",
    "resolve_date_window"
]
