"""
ElevenLabs text-to-speech service.
"""
import httpx

from fitplan.core.config import Settings
from fitplan.core.errors import SpeechSynthesisError
from fitplan.core.logger import logger, log_error


ELEVENLABS_BASE_URL = "https://api.elevenlabs.io/v1"

AVAILABLE_VOICES = [
    {"id": "21m00Tcm4TlvDq8ikWAM", "name": "Rachel", "description": "Calm, young female"},
    {"id": "AZnzlk1XvdvUeBnXmlld", "name": "Domi", "description": "Strong, young female"},
    {"id": "EXAVITQu4vr4xnSDxMaL", "name": "Bella", "description": "Soft, young female"},
    {"id": "ErXwobaYiN019PkySvjV", "name": "Antoni", "description": "Well-rounded, young male"},
    {"id": "MF3mGyEYCl7XYWbV9V6O", "name": "Elli", "description": "Emotional, young female"},
    {"id": "TxGEqnHWrfWFTfGW9XjX", "name": "Josh", "description": "Deep, young male"},
    {"id": "VR6AewLTigWG4xSOukaG", "name": "Arnold", "description": "Crisp, middle-aged male"},
    {"id": "pNInz6obpgDQGcFmaJgB", "name": "Adam", "description": "Deep, middle-aged male"},
    {"id": "yoZ06aMxZJJ28mfd3POQ", "name": "Sam", "description": "Raspy, young male"},
]


def _require_key(config: Settings) -> str:
    if not config.ELEVENLABS_API_KEY:
        raise SpeechSynthesisError("ElevenLabs API key not configured", status_code=500)
    return config.ELEVENLABS_API_KEY


async def synthesize_speech(
    text: str,
    config: Settings,
    voice_id: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None
) -> bytes:
    """
    Convert text to MPEG audio with ElevenLabs.

    Args:
        text: Text to speak
        config: Settings holding the API key and voice defaults
        voice_id: Voice override
        transport: Optional httpx transport (used by tests)

    Returns:
        Audio bytes (audio/mpeg)

    Raises:
        SpeechSynthesisError: missing key, upstream error status or network failure
    """
    if not text:
        raise SpeechSynthesisError("Text is required", status_code=400)

    api_key = _require_key(config)
    voice = voice_id or config.ELEVENLABS_VOICE_ID

    logger.info(f"Generating speech: {len(text)} characters, voice {voice}")

    payload = {
        "text": text,
        "model_id": config.ELEVENLABS_MODEL_ID,
        "voice_settings": {
            "stability": 0.5,
            "similarity_boost": 0.5,
        },
    }
    headers = {
        "Accept": "audio/mpeg",
        "Content-Type": "application/json",
        "xi-api-key": api_key,
    }

    try:
        async with httpx.AsyncClient(timeout=config.HTTP_TIMEOUT, transport=transport) as client:
            response = await client.post(
                f"{ELEVENLABS_BASE_URL}/text-to-speech/{voice}",
                json=payload,
                headers=headers,
            )
    except httpx.HTTPError as e:
        log_error("ElevenLabs request", e)
        raise SpeechSynthesisError("Failed to generate speech", status_code=500, details=str(e)) from e

    if response.status_code != 200:
        logger.error(f"ElevenLabs API error: {response.status_code} {response.text[:200]}")
        raise SpeechSynthesisError(
            f"ElevenLabs API error: {response.status_code}",
            status_code=response.status_code,
            details=response.text,
        )

    logger.info(f"Audio generated: {len(response.content)} bytes")
    return response.content


async def list_voices(
    config: Settings,
    transport: httpx.AsyncBaseTransport | None = None
) -> dict:
    """Fetch the voice catalogue for the configured ElevenLabs account."""
    api_key = _require_key(config)

    try:
        async with httpx.AsyncClient(timeout=config.HTTP_TIMEOUT, transport=transport) as client:
            response = await client.get(
                f"{ELEVENLABS_BASE_URL}/voices",
                headers={"xi-api-key": api_key},
            )
            response.raise_for_status()
    except httpx.HTTPError as e:
        log_error("ElevenLabs voices", e)
        raise SpeechSynthesisError("Failed to fetch voices", status_code=500, details=str(e)) from e

    return response.json()
