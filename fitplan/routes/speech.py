"""
Text-to-speech routes.

Thin proxies that keep the ElevenLabs key server-side.
"""
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, Response

from fitplan.core.config import Settings, get_settings
from fitplan.core.errors import SpeechSynthesisError
from fitplan.core.limiter import limiter
from fitplan.core.logger import log_request, log_error
from fitplan.models.schemas import NarrationRequest, SpeechRequest
from fitplan.services import speech_service
from fitplan.services.narration import section_text

router = APIRouter()


def _speech_error(e: SpeechSynthesisError) -> JSONResponse:
    content = {"error": str(e)}
    if e.details:
        content["details"] = e.details
    return JSONResponse(status_code=e.status_code, content=content)


def _audio(audio: bytes) -> Response:
    return Response(
        content=audio,
        media_type="audio/mpeg",
        headers={"Content-Length": str(len(audio))}
    )


@router.post("/text-to-speech")
@limiter.limit("20/minute")
async def text_to_speech(request: Request, req: SpeechRequest, config: Settings = Depends(get_settings)):
    """Synthesize arbitrary text to MPEG audio."""
    log_request("/text-to-speech")

    if not req.text:
        raise HTTPException(status_code=400, detail="Text is required")

    try:
        audio = await speech_service.synthesize_speech(req.text, config, voice_id=req.voiceId)
    except SpeechSynthesisError as e:
        log_error("Text-to-speech", e)
        return _speech_error(e)

    return _audio(audio)


@router.get("/text-to-speech")
@limiter.limit("20/minute")
async def voices(request: Request, config: Settings = Depends(get_settings)):
    """List voices available to the configured ElevenLabs account."""
    log_request("/text-to-speech", "GET")

    try:
        return await speech_service.list_voices(config)
    except SpeechSynthesisError as e:
        log_error("Voice listing", e)
        return _speech_error(e)


@router.post("/narrate-plan")
@limiter.limit("20/minute")
async def narrate_plan(request: Request, req: NarrationRequest, config: Settings = Depends(get_settings)):
    """Read one section of a plan (workout, diet or tips) aloud."""
    log_request("/narrate-plan")

    text = section_text(req.plan, req.section)
    if len(text) < 10:
        raise HTTPException(status_code=400, detail="No text available to read")

    try:
        audio = await speech_service.synthesize_speech(text, config, voice_id=req.voiceId)
    except SpeechSynthesisError as e:
        log_error("Plan narration", e)
        return _speech_error(e)

    return _audio(audio)
