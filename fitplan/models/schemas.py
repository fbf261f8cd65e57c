"""
Pydantic models for API request/response validation.
"""
from typing import Literal
from pydantic import BaseModel, Field

from fitplan.models.plan import FitnessPlan
from fitplan.models.user import UserProfile


NarrationSection = Literal["workout", "diet", "tips"]


# --- Speech Models ---

class SpeechRequest(BaseModel):
    """Request model for raw text-to-speech."""
    text: str = ""
    voiceId: str | None = None


class NarrationRequest(BaseModel):
    """Request model for narrating one section of a plan."""
    plan: FitnessPlan
    section: NarrationSection = "workout"
    voiceId: str | None = None


# --- Export Models ---

class ExportRequest(BaseModel):
    """Request model for PDF export."""
    plan: FitnessPlan
    userName: str = Field(..., min_length=1)


# --- Storage Models ---

class SavePlanRequest(BaseModel):
    """Request model for persisting a generated plan."""
    plan: FitnessPlan
    userData: UserProfile


# --- Response Models ---

class TaglineResponse(BaseModel):
    tagline: str


class ImageResponse(BaseModel):
    url: str
