"""
VoiceCRM - multi-tenant backend for voice-agent campaigns
"""

__version__ = "1.0.0"
