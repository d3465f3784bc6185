"""
FastAPI routes for the recommendation endpoints.

Endpoints:
- POST /recommendations: Generate six recommendations for a profile
- GET /recommendations/saved: List bookmarked recommendations
- POST /recommendations/saved: Bookmark a recommendation
- DELETE /recommendations/saved/{recommendation_id}: Remove a bookmark

All endpoints require authentication via Supabase Auth.
"""

import logging
from typing import Annotated, Optional

import httpx
from fastapi import APIRouter, Body, Depends, HTTPException, status
from google import genai

from learnpath.auth.dependencies import AuthenticatedUser, get_authenticated_user
from learnpath.clients import get_gemini_client, get_link_probe_client
from learnpath.db.client import get_supabase_client
from learnpath.schemas.recommendations import (
    Recommendation,
    RecommendationGenerateRequest,
    RecommendationSetResponse,
    SavedRecommendation,
    SavedRecommendationDeleteResponse,
    SavedRecommendationListResponse,
)
from learnpath.services.profile_service import get_student_profile, to_student_profile
from learnpath.services.recommendation_service import generate_recommendations
from learnpath.services.saved_recommendation_service import (
    delete_saved_recommendation,
    list_saved_recommendations,
    save_recommendation,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/recommendations",
    tags=["recommendations"]
)


@router.post(
    "",
    response_model=RecommendationSetResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate learning recommendations",
    description="""
    Generate six recommendations: three academic courses/resources and three
    extracurricular activities, each with a Google search link.

    **Authentication:** Required (Bearer token)

    **Profile source:**
    - `profile` in the body, when given
    - otherwise the user's stored profile (404 if missing or incomplete)

    The model call, response parsing and link checks never fail the request:
    the response always carries six recommendations and `source` tells
    whether they came from the model, were padded, or are the default set.
    """
)
async def generate_recommendations_endpoint(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    gemini_client: Annotated[Optional[genai.Client], Depends(get_gemini_client)],
    http_client: Annotated[httpx.AsyncClient, Depends(get_link_probe_client)],
    request: Annotated[Optional[RecommendationGenerateRequest], Body()] = None,
) -> RecommendationSetResponse:
    logger.info(f"POST /recommendations called by user_id={auth_user.user_id}")

    profile = request.profile if request is not None else None

    if profile is None:
        try:
            stored = await get_student_profile(
                get_supabase_client(auth_user.access_token), auth_user.user_id
            )
        except Exception as e:
            logger.error(f"Failed to fetch profile for user {auth_user.user_id}: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail={"error": "fetch_error", "details": "Failed to fetch profile"}
            )

        profile = to_student_profile(stored)
        if profile is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={
                    "error": "profile_incomplete",
                    "details": "Complete your profile (or send one in the request) to get recommendations"
                }
            )

    response = await generate_recommendations(
        profile=profile,
        gemini_client=gemini_client,
        http_client=http_client,
    )

    logger.info(f"Returning recommendations with source={response.source}")
    return response


@router.get(
    "/saved",
    response_model=SavedRecommendationListResponse,
    status_code=status.HTTP_200_OK,
    summary="List saved recommendations",
)
async def list_saved_recommendations_endpoint(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> SavedRecommendationListResponse:
    try:
        rows = await list_saved_recommendations(
            get_supabase_client(auth_user.access_token), auth_user.user_id
        )
    except Exception as e:
        logger.error(f"Failed to list saved recommendations for user {auth_user.user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "fetch_error", "details": "Failed to fetch saved recommendations"}
        )

    saved = [SavedRecommendation.model_validate(row) for row in rows]
    return SavedRecommendationListResponse(recommendations=saved, count=len(saved))


@router.post(
    "/saved",
    response_model=SavedRecommendation,
    status_code=status.HTTP_201_CREATED,
    summary="Save a recommendation",
)
async def save_recommendation_endpoint(
    recommendation: Recommendation,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> SavedRecommendation:
    try:
        row = await save_recommendation(
            get_supabase_client(auth_user.access_token), auth_user.user_id, recommendation
        )
    except Exception as e:
        logger.error(f"Failed to save recommendation for user {auth_user.user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "save_error", "details": "Failed to save recommendation"}
        )

    return SavedRecommendation.model_validate(row)


@router.delete(
    "/saved/{recommendation_id}",
    response_model=SavedRecommendationDeleteResponse,
    status_code=status.HTTP_200_OK,
    summary="Remove a saved recommendation",
)
async def delete_saved_recommendation_endpoint(
    recommendation_id: str,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> SavedRecommendationDeleteResponse:
    try:
        deleted = await delete_saved_recommendation(
            get_supabase_client(auth_user.access_token), auth_user.user_id, recommendation_id
        )
    except Exception as e:
        logger.error(f"Failed to delete saved recommendation {recommendation_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "delete_error", "details": "Failed to delete saved recommendation"}
        )

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "not_found", "details": f"Saved recommendation {recommendation_id} not found"}
        )

    return SavedRecommendationDeleteResponse(status="DELETED", id=recommendation_id)
