"""
Voice Routes
Text-to-speech for agent greetings
"""

import base64

from fastapi import APIRouter, Depends

from voicecrm.services import VoiceService, get_voice_service
from voicecrm.api.schemas import SynthesizeRequest
from voicecrm.api.middleware.auth import require_client

router = APIRouter()


@router.post("/voice/synthesize")
async def synthesize(
    request: SynthesizeRequest,
    _: str = Depends(require_client),
    voice: VoiceService = Depends(get_voice_service)
):
    """Returns the audio as base64 twice: once for playback, once for storage"""
    result = await voice.text_to_speech(request.text, request.language, request.speaker)
    return {
        "audioBase64": result["audioBase64"],
        "audioBuffer": base64.b64encode(result["audioBytes"]).decode("ascii"),
        "format": result["format"],
        "size": len(result["audioBytes"]),
        "sampleRate": result["sampleRate"],
        "channels": result["channels"],
    }
