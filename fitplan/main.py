"""
FitPlan Microservice - Main Entry Point

AI-generated 7-day workout and diet plans, with narration, PDF export,
illustrations and saved plans.
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from fitplan.core.config import settings
from fitplan.core.logger import logger
from fitplan.core.limiter import limiter
from fitplan.routes import plan, speech, export, plans


# Missing credentials are reported here and per request, not fatal at startup
try:
    settings.validate()
    logger.info("Configuration validated successfully")
except ValueError as e:
    logger.warning(f"Configuration incomplete: {e}")


# Create FastAPI app
app = FastAPI(
    title="FitPlan Microservice",
    description="AI-powered 7-day fitness and diet plan generator",
    version="1.0.0"
)

# Attach rate limiter and its error handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# Include route modules
app.include_router(plan.router, tags=["Plan"])
app.include_router(speech.router, tags=["Speech"])
app.include_router(export.router, tags=["Export"])
app.include_router(plans.router, tags=["Saved Plans"])


@app.get("/")
@limiter.limit("60/minute")
def root(request: Request):
    """Health check endpoint."""
    return {"message": "FitPlan Microservice running"}


@app.get("/health")
def health():
    """
    Detailed health status.
    Returns 'degraded' if required environment variables are missing.
    """
    missing = settings.missing_keys()

    if missing:
        return JSONResponse(
            status_code=200,
            content={
                "status": "degraded",
                "service": "fitplan-microservice",
                "version": "1.0.0",
                "missing_config": missing,
                "message": f"Missing required environment variables: {', '.join(missing)}"
            }
        )

    return {
        "status": "healthy",
        "service": "fitplan-microservice",
        "version": "1.0.0"
    }


# Run with uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "fitplan.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False
    )
