"""
Plan generation routes.
"""
import time

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from fitplan.core.config import Settings, get_settings
from fitplan.core.errors import ErrorKind, PlanGenerationError
from fitplan.core.limiter import limiter
from fitplan.core.logger import log_request, log_response, log_error
from fitplan.models.schemas import TaglineResponse
from fitplan.models.user import validate_user_profile
from fitplan.services import gemini_service

router = APIRouter()


@router.post("/generate-plan")
@limiter.limit("10/minute")
async def generate_plan(request: Request, config: Settings = Depends(get_settings)):
    """
    Generate a personalized 7-day workout and diet plan.

    The body is validated against the user profile schema first; field
    violations are returned with status 400 and never reach the model.
    """
    log_request("/generate-plan")
    started = time.perf_counter()

    try:
        body = await request.json()
    except ValueError:
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid input data",
                "kind": ErrorKind.INPUT_VALIDATION.value,
                "details": [{"field": "(root)", "message": "Body is not valid JSON"}]
            }
        )

    validation = validate_user_profile(body)
    if not validation.success:
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid input data",
                "kind": ErrorKind.INPUT_VALIDATION.value,
                "details": [v.model_dump() for v in validation.errors]
            }
        )

    try:
        plan = await gemini_service.generate_fitness_plan(validation.value, config)
    except PlanGenerationError as e:
        log_error("Plan generation", e, kind=e.kind.value)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Failed to generate fitness plan",
                "kind": e.kind.value,
                "message": e.message
            }
        )

    log_response("/generate-plan", "200", (time.perf_counter() - started) * 1000)
    return {"status": "success", "plan": plan.model_dump(mode="json", exclude_unset=True)}


@router.get("/tagline", response_model=TaglineResponse)
@limiter.limit("30/minute")
async def tagline(request: Request, config: Settings = Depends(get_settings)):
    """Short motivational sentence for decorative display. Never fails."""
    log_request("/tagline", "GET")
    return {"tagline": await gemini_service.generate_tagline(config)}
