"""
Student profile service.

Handles fetching and writing the student profile in Supabase.
Profiles are 1:1 with auth.users and hold the four self-reported fields
that seed recommendations.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, cast

from supabase import Client

from learnpath.schemas.recommendations import StudentProfile
from learnpath.utils.constants import USER_PROFILES_TABLE

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    "interests",
    "performance",
    "career_aspirations",
    "skill_building_needs",
)


def is_profile_complete(profile: Optional[Dict[str, Any]]) -> bool:
    """True when every profile field holds non-blank text."""
    if not profile:
        return False
    return all(str(profile.get(field) or "").strip() for field in PROFILE_FIELDS)


def to_student_profile(profile: Optional[Dict[str, Any]]) -> Optional[StudentProfile]:
    """Convert a user_profiles row to a StudentProfile, or None if incomplete."""
    if not is_profile_complete(profile):
        return None
    row = cast(Dict[str, Any], profile)
    return StudentProfile(**{field: str(row[field]) for field in PROFILE_FIELDS})


async def get_student_profile(
    supabase_client: Client,
    user_id: str
) -> Optional[Dict[str, Any]]:
    """
    Fetch the user's profile row from Supabase.

    Returns:
        The profile dict, or None if not found

    Security:
        - RLS enforces user_id = auth.uid()
    """
    logger.debug(f"Fetching profile for user {user_id}")

    result = (
        supabase_client.table(USER_PROFILES_TABLE)
        .select("*")
        .eq("user_id", user_id)
        .execute()
    )

    if not result.data:
        logger.info(f"Profile not found for user {user_id}")
        return None

    return cast(Dict[str, Any], result.data[0])


async def upsert_student_profile(
    supabase_client: Client,
    user_id: str,
    interests: str,
    performance: str,
    career_aspirations: str,
    skill_building_needs: str,
    full_name: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create or replace the four profile fields for a user.

    full_name is only written when provided, so a PUT without it keeps the
    name captured at sign-up.

    Returns:
        The stored profile record
    """
    profile_data: Dict[str, Any] = {
        "user_id": user_id,
        "interests": interests,
        "performance": performance,
        "career_aspirations": career_aspirations,
        "skill_building_needs": skill_building_needs,
        "updated_at": datetime.now(timezone.utc).isoformat(),
    }
    if full_name is not None:
        profile_data["full_name"] = full_name

    logger.info(f"Upserting profile for user {user_id}")

    result = (
        supabase_client.table(USER_PROFILES_TABLE)
        .upsert(profile_data, on_conflict="user_id")
        .execute()
    )

    if not result.data:
        raise Exception("Failed to save profile: no data returned")

    logger.info(f"Profile saved successfully for user {user_id}")
    return cast(Dict[str, Any], result.data[0])


async def ensure_student_profile(
    supabase_client: Client,
    user_id: str,
    full_name: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Return the user's profile row, creating an empty one on first sign-in.
    """
    existing = await get_student_profile(supabase_client, user_id)
    if existing is not None:
        return existing

    logger.info(f"Creating empty profile for user {user_id}")

    result = (
        supabase_client.table(USER_PROFILES_TABLE)
        .insert({"user_id": user_id, "full_name": full_name})
        .execute()
    )

    if not result.data:
        raise Exception("Failed to create profile: no data returned")

    return cast(Dict[str, Any], result.data[0])
