"""Health check endpoint."""
from datetime import datetime, timezone
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from survey_analytics.config import get_settings
from survey_analytics.models import HealthResponse
from survey_analytics.services import SurveyApiClient

router = APIRouter(tags=["Health"])


def get_survey_api_client() -> SurveyApiClient:
    """Client for the configured survey backend."""
    return SurveyApiClient()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Check health status of the API and the survey backend."
)
async def health_check():
    """
    Check health of all dependencies.

    Returns 200 if all healthy, 503 if any unhealthy.
    """
    settings = get_settings()
    dependencies: dict[str, str] = {}

    # Check survey backend
    try:
        client = get_survey_api_client()
        try:
            api_healthy, api_error = await client.health_check()
        finally:
            await client.aclose()
        dependencies["survey_api"] = "healthy" if api_healthy else f"unhealthy: {api_error}"
    except Exception as e:
        dependencies["survey_api"] = f"unhealthy: {str(e)}"

    all_healthy = all(v == "healthy" for v in dependencies.values())
    overall_status = "healthy" if all_healthy else "degraded"

    response = HealthResponse(
        status=overall_status,
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.app_version,
        dependencies=dependencies
    )

    # Return 503 if degraded
    if not all_healthy:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump()
        )

    return response
