"""
Recommendation Service - Gemini with lenient JSON extraction

This service turns a student profile into exactly six learning
recommendations (three academic, three extracurricular).

Pipeline:
1. Build the prompt from the four profile fields
2. Single Gemini call (no retry, provider default deadline)
3. Extract a JSON array from the free-form response text
4. Validate/rebuild each record's search link (concurrent HEAD probes)
5. Pad with the deterministic default set up to six records

Every failure (missing client, API error, unparseable text, unreachable
link) degrades to deterministic output. generate_recommendations() never
raises and always returns six records.
"""

import json
import logging
import re
from typing import Any, List, Optional

import httpx
from google import genai
from google.genai import types
from pydantic import ValidationError

from learnpath.agents.recommendation.prompts import (
    RECOMMENDATION_SYSTEM_PROMPT,
    build_recommendation_user_prompt,
)
from learnpath.config import settings
from learnpath.schemas.recommendations import (
    Recommendation,
    RecommendationSetResponse,
    StudentProfile,
)
from learnpath.services.search_links import (
    build_search_link,
    validate_recommendation_links,
)
from learnpath.utils.constants import (
    ACADEMIC_TYPE,
    EXTRACURRICULAR_TYPE,
    RECOMMENDATION_COUNT,
)
from learnpath.utils.logging import preview

logger = logging.getLogger(__name__)

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


# =============================================================================
# TEXT -> RECORDS
# =============================================================================

def extract_recommendations(text: Optional[str]) -> Optional[List[Recommendation]]:
    """
    Leniently parse the model's free-form text into recommendation records.

    Steps:
    - If a fenced code block is present, only its contents are considered
    - The substring from the first '[' to the last ']' is taken
    - Control characters and trailing commas (common LLM mistakes) are removed
    - The result must be a JSON list whose items all carry the four fields

    Returns:
        The parsed records (possibly empty), or None on any failure.
        There is no partial recovery: one bad item rejects the whole list.
    """
    if not text:
        return None

    content = text
    if "```" in content:
        block_match = _FENCED_BLOCK.search(content)
        if block_match:
            content = block_match.group(1).strip()

    start = content.find("[")
    end = content.rfind("]")
    if start == -1 or end <= start:
        logger.warning("No JSON array found in model response")
        return None

    json_content = content[start:end + 1]
    json_content = _CONTROL_CHARS.sub("", json_content)
    json_content = _TRAILING_COMMA.sub(r"\1", json_content)

    try:
        data = json.loads(json_content)
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse recommendations JSON: {e}")
        return None

    if not isinstance(data, list):
        return None

    try:
        return [Recommendation.model_validate(item) for item in data]
    except ValidationError as e:
        logger.warning(f"Model returned malformed recommendation records: {e.error_count()} errors")
        return None


# =============================================================================
# DETERMINISTIC DEFAULTS
# =============================================================================

def build_fallback_recommendations(profile: StudentProfile) -> List[Recommendation]:
    """
    Build the default recommendation set for a profile.

    Pure function of the profile: no network, same input gives the same
    six records. The first three are academic, the last three
    extracurricular, and every link follows a search template.
    """
    interests = profile.interests.strip()
    career = profile.career_aspirations.strip()
    skills = profile.skill_building_needs.strip()

    return [
        Recommendation(
            title="Personalized Course Recommendations",
            type=ACADEMIC_TYPE,
            description=f"Find courses matching your interests in {interests}",
            link=build_search_link(f"{interests} {career}", ACADEMIC_TYPE),
        ),
        Recommendation(
            title="Career Development Resources",
            type=ACADEMIC_TYPE,
            description=f"Resources to help with your career goals as a {career}",
            link=build_search_link(f"{career} career", ACADEMIC_TYPE),
        ),
        Recommendation(
            title="Online Learning Platforms",
            type=ACADEMIC_TYPE,
            description=f"Explore top online learning resources for building {skills} skills",
            link=build_search_link(skills, ACADEMIC_TYPE),
        ),
        Recommendation(
            title="Skill Building Workshops",
            type=EXTRACURRICULAR_TYPE,
            description=f"Improve your {skills} skills through hands-on workshops",
            link=build_search_link(skills, EXTRACURRICULAR_TYPE),
        ),
        Recommendation(
            title="Networking Events",
            type=EXTRACURRICULAR_TYPE,
            description=f"Connect with professionals on the path to becoming a {career}",
            link=build_search_link(f"{career} networking", EXTRACURRICULAR_TYPE),
        ),
        Recommendation(
            title="Volunteer Opportunities",
            type=EXTRACURRICULAR_TYPE,
            description=f"Gain hands-on experience in {interests} through volunteering",
            link=build_search_link(interests, EXTRACURRICULAR_TYPE),
        ),
    ]


# =============================================================================
# GEMINI CALL
# =============================================================================

def _response_text(response: Any) -> Optional[str]:
    """
    Get the text of a Gemini response.

    Parts are read first; response.text can be None even when parts have text.
    """
    candidates = getattr(response, "candidates", None) or []
    if candidates:
        content = getattr(candidates[0], "content", None)
        for part in getattr(content, "parts", None) or []:
            part_text = getattr(part, "text", None)
            if isinstance(part_text, str) and part_text:
                return part_text

    text = getattr(response, "text", None)
    return text if isinstance(text, str) and text else None


async def _generate_text(gemini_client: genai.Client, prompt: str) -> Optional[str]:
    """Send one prompt to Gemini and return the response text."""
    config = types.GenerateContentConfig(
        system_instruction=RECOMMENDATION_SYSTEM_PROMPT,
        temperature=settings.GEMINI_TEMPERATURE,
    )

    response = await gemini_client.aio.models.generate_content(
        model=settings.GEMINI_MODEL,
        contents=prompt,
        config=config,
    )
    return _response_text(response)


# =============================================================================
# PIPELINE
# =============================================================================

async def generate_recommendations(
    profile: StudentProfile,
    gemini_client: Optional[genai.Client],
    http_client: httpx.AsyncClient,
) -> RecommendationSetResponse:
    """
    Generate exactly six recommendations for a student profile.

    Args:
        profile: The student's four-field profile
        gemini_client: Gemini client, or None when not configured
        http_client: Async HTTP client used for link probes

    Returns:
        RecommendationSetResponse with six records and the source of the set:
        - "model": six records came from the model
        - "partial": fewer than six parsed, defaults filled the rest
        - "fallback": model unavailable, failed, or returned unusable text
    """
    logger.info(
        f"generate_recommendations called, interests='{preview(profile.interests)}'"
    )

    fallback = build_fallback_recommendations(profile)

    if gemini_client is None:
        logger.warning("Gemini client not available, returning default recommendations")
        return RecommendationSetResponse(recommendations=fallback, source="fallback")

    prompt = build_recommendation_user_prompt(profile)

    try:
        logger.info("Calling Gemini API for recommendations...")
        text = await _generate_text(gemini_client, prompt)
    except Exception as e:
        logger.error(f"Error calling Gemini API: {e}")
        return RecommendationSetResponse(recommendations=fallback, source="fallback")

    parsed = extract_recommendations(text)
    if parsed is None:
        logger.warning(f"Unusable model response, returning defaults. Preview: {preview(text, 200)}")
        return RecommendationSetResponse(recommendations=fallback, source="fallback")

    validated = await validate_recommendation_links(
        http_client, parsed[:RECOMMENDATION_COUNT]
    )

    if len(validated) >= RECOMMENDATION_COUNT:
        logger.info(f"Returning {RECOMMENDATION_COUNT} model recommendations")
        return RecommendationSetResponse(recommendations=validated, source="model")

    # Positional fill from the default set; titles are not deduplicated
    missing = RECOMMENDATION_COUNT - len(validated)
    logger.info(f"Model returned {len(validated)} records, padding with {missing} defaults")
    return RecommendationSetResponse(
        recommendations=validated + fallback[:missing],
        source="partial" if validated else "fallback",
    )
