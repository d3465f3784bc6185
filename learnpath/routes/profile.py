"""
Profile API endpoints.

Provides endpoints for reading and writing the student's learning profile
(interests, performance, career aspirations, skill-building needs).
Each profile is 1:1 with an auth.users record.
"""

import logging
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status
from postgrest.exceptions import APIError

from learnpath.auth.dependencies import AuthenticatedUser, get_authenticated_user
from learnpath.db.client import get_supabase_client
from learnpath.schemas.profile import ProfileResponse, ProfileUpsertRequest
from learnpath.services.profile_service import (
    get_student_profile,
    is_profile_complete,
    upsert_student_profile,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


def _to_profile_response(profile: Dict[str, Any]) -> ProfileResponse:
    # Coerce optional DB values into strings for required fields
    def _as_str(val: Any) -> str:
        return str(val) if val is not None else ""

    return ProfileResponse(
        user_id=_as_str(profile.get("user_id")),
        full_name=profile.get("full_name"),
        interests=profile.get("interests"),
        performance=profile.get("performance"),
        career_aspirations=profile.get("career_aspirations"),
        skill_building_needs=profile.get("skill_building_needs"),
        is_complete=is_profile_complete(profile),
        created_at=_as_str(profile.get("created_at")),
        updated_at=_as_str(profile.get("updated_at")),
    )


@router.get(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Get student profile",
    description="""
    Retrieve the authenticated user's learning profile.

    Security:
    - Requires valid Authorization Bearer token
    - RLS ensures users only see their own profile
    """
)
async def get_profile(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> ProfileResponse:
    logger.info(f"Fetching profile for user {auth_user.user_id}")

    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        profile = await get_student_profile(supabase_client, auth_user.user_id)
    except Exception as e:
        logger.error(f"Failed to fetch profile for user {auth_user.user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "fetch_error", "details": "Failed to fetch profile"}
        )

    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "not_found", "details": "Profile not found for this user"}
        )

    return _to_profile_response(profile)


@router.put(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Create or update student profile",
    description="""
    Save the four profile fields submitted from the dashboard form.

    Creates the profile row if it does not exist yet. `full_name` is only
    changed when provided.
    """
)
async def put_profile(
    request: ProfileUpsertRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> ProfileResponse:
    logger.info(f"Saving profile for user {auth_user.user_id}")

    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        saved = await upsert_student_profile(
            supabase_client=supabase_client,
            user_id=auth_user.user_id,
            interests=request.interests,
            performance=request.performance,
            career_aspirations=request.career_aspirations,
            skill_building_needs=request.skill_building_needs,
            full_name=request.full_name,
        )
    except APIError as e:
        logger.error(f"Database error saving profile for user {auth_user.user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "database_error", "details": f"Failed to save profile ({e.code})"}
        )
    except Exception as e:
        logger.error(f"Failed to save profile for user {auth_user.user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "save_error", "details": "Failed to save profile"}
        )

    return _to_profile_response(saved)
