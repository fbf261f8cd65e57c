"""
Saved plan routes.
"""
from fastapi import APIRouter, Depends, HTTPException, Request

from fitplan.core.config import Settings, get_settings
from fitplan.core.errors import PlanStoreError
from fitplan.core.limiter import limiter
from fitplan.core.logger import log_request, log_error
from fitplan.models.schemas import SavePlanRequest
from fitplan.models.user import UserProfile
from fitplan.routes.export import pdf_response
from fitplan.services.plan_store import PlanStore

router = APIRouter()


def get_plan_store(config: Settings = Depends(get_settings)) -> PlanStore:
    """FastAPI dependency building the store from settings."""
    return PlanStore(config.PLAN_STORE_DIR, max_plans=config.MAX_SAVED_PLANS)


def _dump(plan) -> dict:
    return plan.model_dump(mode="json", exclude_unset=True)


@router.get("/plans")
def list_plans(store: PlanStore = Depends(get_plan_store)):
    """Saved plans, newest first."""
    log_request("/plans", "GET")
    return {"plans": [_dump(p) for p in store.load_plans()]}


@router.post("/plans", status_code=201)
@limiter.limit("30/minute")
def save_plan(request: Request, req: SavePlanRequest, store: PlanStore = Depends(get_plan_store)):
    """Persist a snapshot of a generated plan."""
    log_request("/plans")

    try:
        saved = store.save_plan(req.plan, req.userData)
    except PlanStoreError as e:
        log_error("Plan save", e)
        raise HTTPException(status_code=500, detail=str(e))

    return {"status": "success", "plan": _dump(saved)}


@router.delete("/plans/{plan_id}")
def delete_plan(plan_id: str, store: PlanStore = Depends(get_plan_store)):
    log_request(f"/plans/{plan_id}", "DELETE")

    if store.get_plan(plan_id) is None:
        raise HTTPException(status_code=404, detail="Plan not found")

    try:
        remaining = store.delete_plan(plan_id)
    except PlanStoreError as e:
        log_error("Plan delete", e)
        raise HTTPException(status_code=500, detail=str(e))

    return {"plans": [_dump(p) for p in remaining]}


@router.delete("/plans")
def clear_plans(store: PlanStore = Depends(get_plan_store)):
    """Remove all saved plans and the stored profile."""
    log_request("/plans", "DELETE")

    try:
        store.clear_all_data()
    except PlanStoreError as e:
        log_error("Data clear", e)
        raise HTTPException(status_code=500, detail=str(e))

    return {"status": "success"}


@router.get("/plans/{plan_id}/pdf")
def saved_plan_pdf(plan_id: str, store: PlanStore = Depends(get_plan_store)):
    """Export a saved plan to PDF using its stored profile name."""
    log_request(f"/plans/{plan_id}/pdf", "GET")

    saved = store.get_plan(plan_id)
    if saved is None:
        raise HTTPException(status_code=404, detail="Plan not found")

    return pdf_response(saved, saved.userData.name)


@router.get("/user-data")
def get_user_data(store: PlanStore = Depends(get_plan_store)):
    user_data = store.load_user_data()
    if user_data is None:
        raise HTTPException(status_code=404, detail="No saved user data")
    return user_data.model_dump(exclude_none=True)


@router.put("/user-data")
def put_user_data(user_data: UserProfile, store: PlanStore = Depends(get_plan_store)):
    """Remember the last submitted profile to prefill the form."""
    log_request("/user-data", "PUT")

    try:
        store.save_user_data(user_data)
    except PlanStoreError as e:
        log_error("User data save", e)
        raise HTTPException(status_code=500, detail=str(e))

    return {"status": "success"}
