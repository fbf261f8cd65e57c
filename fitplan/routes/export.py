"""
PDF export and illustration routes.
"""
from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import Response

from fitplan.core.limiter import limiter
from fitplan.core.logger import log_request, log_error
from fitplan.models.plan import FitnessPlan
from fitplan.models.schemas import ExportRequest, ImageResponse
from fitplan.services import image_service, pdf_service

router = APIRouter()


def pdf_response(plan: FitnessPlan, user_name: str) -> Response:
    content = pdf_service.export_plan_to_pdf(plan, user_name)
    filename = pdf_service.pdf_filename(user_name)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.post("/export-pdf")
@limiter.limit("10/minute")
def export_pdf(request: Request, req: ExportRequest):
    """Render a plan to a downloadable PDF."""
    log_request("/export-pdf")
    return pdf_response(req.plan, req.userName)


@router.get("/images/exercise", response_model=ImageResponse)
@limiter.limit("30/minute")
async def exercise_image(
    request: Request,
    name: str = Query(..., min_length=1),
    equipment: str | None = None
):
    """Illustration URL for an exercise."""
    log_request("/images/exercise", "GET")

    try:
        url = await image_service.image_cache.generate_and_cache(
            image_service.exercise_cache_key(name, equipment),
            image_service.create_exercise_prompt(name, equipment)
        )
    except Exception as e:
        log_error("Exercise image", e)
        raise HTTPException(status_code=502, detail="Image generation failed")

    return {"url": url}


@router.get("/images/meal", response_model=ImageResponse)
@limiter.limit("30/minute")
async def meal_image(
    request: Request,
    name: str = Query(..., min_length=1),
    items: list[str] = Query(default=[])
):
    """Illustration URL for a meal."""
    log_request("/images/meal", "GET")

    try:
        url = await image_service.image_cache.generate_and_cache(
            image_service.meal_cache_key(name),
            image_service.create_meal_prompt(name, items)
        )
    except Exception as e:
        log_error("Meal image", e)
        raise HTTPException(status_code=502, detail="Image generation failed")

    return {"url": url}
