"""
Saved recommendation service.

Students can bookmark recommendations from a generated set. Bookmarks live
in the user_recommendations table; the recommendation pipeline itself never
writes here.
"""

import logging
from typing import Any, Dict, List, cast

from supabase import Client

from learnpath.schemas.recommendations import Recommendation
from learnpath.utils.constants import USER_RECOMMENDATIONS_TABLE

logger = logging.getLogger(__name__)


async def list_saved_recommendations(
    supabase_client: Client,
    user_id: str
) -> List[Dict[str, Any]]:
    """
    Fetch the user's saved recommendations, newest first.

    Security:
        - RLS enforces user_id = auth.uid()
    """
    result = (
        supabase_client.table(USER_RECOMMENDATIONS_TABLE)
        .select("*")
        .eq("user_id", user_id)
        .order("created_at", desc=True)
        .execute()
    )

    rows = cast(List[Dict[str, Any]], result.data or [])
    logger.info(f"Fetched {len(rows)} saved recommendations for user {user_id}")
    return rows


async def save_recommendation(
    supabase_client: Client,
    user_id: str,
    recommendation: Recommendation
) -> Dict[str, Any]:
    """Store one recommendation for the user and return the created row."""
    logger.info(f"Saving recommendation for user {user_id}: type={recommendation.type}")

    result = (
        supabase_client.table(USER_RECOMMENDATIONS_TABLE)
        .insert({"user_id": user_id, **recommendation.model_dump()})
        .execute()
    )

    if not result.data:
        raise Exception("Failed to save recommendation: no data returned")

    return cast(Dict[str, Any], result.data[0])


async def delete_saved_recommendation(
    supabase_client: Client,
    user_id: str,
    recommendation_id: str
) -> bool:
    """
    Remove a saved recommendation.

    Returns:
        True if a row was deleted, False if it did not exist (or is not
        owned by the user, which RLS makes indistinguishable)
    """
    result = (
        supabase_client.table(USER_RECOMMENDATIONS_TABLE)
        .delete()
        .eq("id", recommendation_id)
        .eq("user_id", user_id)
        .execute()
    )

    deleted = bool(result.data)
    logger.info(
        f"Delete saved recommendation {recommendation_id} for user {user_id}: deleted={deleted}"
    )
    return deleted
