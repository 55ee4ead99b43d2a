"""
VoiceCRM Backend Configuration
Accounts, agents, campaigns and reporting settings
"""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List
from functools import lru_cache


class Settings(BaseSettings):
    """
    Configuration for the VoiceCRM backend
    Loaded from environment variables and an optional .env file
    """

    # ============================================
    # APPLICATION SETTINGS
    # ============================================
    app_name: str = Field(default="VoiceCRM Backend", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment (development/staging/production)")
    debug: bool = Field(default=False, description="Debug mode")

    # Server Configuration
    server_host: str = Field(default="0.0.0.0", description="Server host")
    server_port: int = Field(default=4000, description="Server port")

    # CORS Configuration
    allowed_origins: str = Field(default="*", description="Comma-separated allowed origins")

    @property
    def cors_origins(self) -> List[str]:
        """Parse allowed origins into list"""
        if self.allowed_origins:
            return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]
        return ["*"]

    # ============================================
    # AUTHENTICATION & SECURITY
    # ============================================
    secret_key: str = Field(default="change-me", description="Secret key for JWT signing")
    jwt_algorithm: str = Field(default="HS256", description="JWT algorithm")
    jwt_expiration_days: int = Field(default=7, description="JWT token expiration in days")
    bcrypt_rounds: int = Field(default=10, description="bcrypt cost factor for password hashes")
    superadmin_secret: str = Field(default="", description="Shared key required to register a superadmin")

    # Google sign-in
    google_client_id: str = Field(default="", description="Google OAuth web client id")
    google_android_client_id: str = Field(default="", description="Google OAuth Android client id")

    @property
    def google_audiences(self) -> List[str]:
        """Client ids accepted as ID-token audiences"""
        return [aud for aud in (self.google_client_id, self.google_android_client_id) if aud]

    # ============================================
    # DATABASE CONFIGURATION
    # ============================================
    database_url: str = Field(default="sqlite:///./data/voicecrm.db", description="SQLAlchemy database URL")

    # ============================================
    # OBJECT STORAGE (S3)
    # ============================================
    s3_bucket_name: str = Field(default="", description="Bucket holding logos and audio")
    s3_region: str = Field(default="ap-south-1", description="Bucket region")
    aws_access_key_id: str = Field(default="", description="AWS access key id")
    aws_secret_access_key: str = Field(default="", description="AWS secret access key")
    s3_url_expiry_seconds: int = Field(default=3600, description="Lifetime of pre-signed URLs")

    # ============================================
    # VOICE (Sarvam TTS)
    # ============================================
    sarvam_api_key: str = Field(default="", description="Sarvam API subscription key")
    sarvam_tts_url: str = Field(default="https://api.sarvam.ai/text-to-speech", description="Sarvam TTS endpoint")
    sarvam_tts_model: str = Field(default="bulbul:v2", description="Sarvam TTS model")
    tts_sample_rate: int = Field(default=22050, description="Synthesized audio sample rate")

    # ============================================
    # DOWNSTREAM BOT API
    # ============================================
    bot_api_url: str = Field(default="", description="Bot messaging API the proxy forwards to")

    http_timeout_seconds: float = Field(default=30.0, description="Outbound HTTP timeout")

    # ============================================
    # LOGGING
    # ============================================
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log format: json or text")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "case_sensitive": False
    }


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
