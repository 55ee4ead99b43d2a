"""
Voice Service
Text-to-speech through the Sarvam AI HTTP API
"""

import base64
from typing import Any, Dict, Optional

import httpx

from voicecrm.core.config import settings
from voicecrm.core.logging import get_logger
from voicecrm.core.exceptions import ExternalServiceError, ValidationError

logger = get_logger(__name__)

DEFAULT_SPEAKERS = {"hi": "anushka", "en": "abhilash"}


class VoiceService:
    """Single-shot TTS requests; no retries and no streaming"""

    def __init__(self):
        self.api_key = settings.sarvam_api_key
        self.api_url = settings.sarvam_tts_url
        self.model = settings.sarvam_tts_model
        self.sample_rate = settings.tts_sample_rate
        self.timeout = settings.http_timeout_seconds

    def build_request(self, text: str, language: str = "en", speaker: Optional[str] = None) -> Dict[str, Any]:
        """Provider request body for a single utterance"""
        return {
            "inputs": [text],
            "target_language_code": "hi-IN" if language == "hi" else "en-IN",
            "speaker": speaker or DEFAULT_SPEAKERS["hi" if language == "hi" else "en"],
            "pitch": 0,
            "pace": 1.0,
            "loudness": 1.0,
            "speech_sample_rate": self.sample_rate,
            "enable_preprocessing": True,
            "model": self.model,
        }

    async def text_to_speech(
        self,
        text: str,
        language: str = "en",
        speaker: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Synthesize text into mp3 audio

        Returns:
            Dict with audioBase64, audioBytes (decoded), sampleRate, channels, format

        Raises:
            ValidationError: If text is blank
            ExternalServiceError: If the key is missing or the provider fails
        """
        if not text or not text.strip():
            raise ValidationError("Text is required", field="text")
        if not self.api_key:
            raise ExternalServiceError("sarvam", "Sarvam API key not configured")

        payload = self.build_request(text, language, speaker)
        logger.info("TTS request", language=payload["target_language_code"], speaker=payload["speaker"])

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.api_url,
                    headers={
                        "Content-Type": "application/json",
                        "API-Subscription-Key": self.api_key,
                    },
                    json=payload
                )
                response.raise_for_status()
                result = response.json()
        except httpx.HTTPStatusError as e:
            try:
                error = e.response.json().get("error", "Unknown error")
            except ValueError:
                error = e.response.text or "Unknown error"
            logger.error("Sarvam API error", status=e.response.status_code, error=error)
            raise ExternalServiceError(
                "sarvam",
                f"Sarvam AI API error: {e.response.status_code} - {error}"
            )
        except httpx.HTTPError as e:
            logger.error(f"Sarvam request failed: {e}")
            raise ExternalServiceError("sarvam", f"Sarvam AI request failed: {e}")

        audios = result.get("audios") or []
        if not audios:
            raise ExternalServiceError("sarvam", "No audio data received from Sarvam AI")

        audio_base64 = audios[0]
        audio_bytes = base64.b64decode(audio_base64)
        logger.info(f"Audio generated successfully: {len(audio_bytes)} bytes")

        return {
            "audioBase64": audio_base64,
            "audioBytes": audio_bytes,
            "sampleRate": self.sample_rate,
            "channels": 1,
            "format": "mp3",
        }


_voice_service: Optional[VoiceService] = None


def get_voice_service() -> VoiceService:
    """Get the process-wide voice service"""
    global _voice_service
    if _voice_service is None:
        _voice_service = VoiceService()
    return _voice_service
