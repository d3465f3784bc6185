"""
Health check route for the LearnPath backend.

Public (no authentication). Load balancers only need the 200; the body also
tells operators whether recommendations will come from Gemini or from the
default set.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends
from google import genai

from learnpath.clients import get_gemini_client
from learnpath.schemas.health import HealthResponse
from learnpath.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    status_code=200,
)
async def health_check(
    gemini_client: Annotated[Optional[genai.Client], Depends(get_gemini_client)],
) -> HealthResponse:
    gemini_configured = gemini_client is not None
    if not gemini_configured:
        logger.debug("Health check: Gemini client not configured")

    return HealthResponse(gemini_configured=gemini_configured)
