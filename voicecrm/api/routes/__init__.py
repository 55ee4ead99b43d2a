"""
API Routes Module
"""

from . import (
    health,
    superadmin,
    admin,
    client,
    client_settings,
    agents,
    voice,
    inbound,
    groups,
    campaigns,
    business_info,
    human_agents,
    bot,
    profile
)

__all__ = [
    "health",
    "superadmin",
    "admin",
    "client",
    "client_settings",
    "agents",
    "voice",
    "inbound",
    "groups",
    "campaigns",
    "business_info",
    "human_agents",
    "bot",
    "profile"
]
