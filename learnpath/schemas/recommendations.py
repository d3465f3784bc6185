"""
Pydantic schemas for the recommendation endpoints.

These models define the request/response contracts for the learning
recommendation pipeline (Gemini + search-link validation) and for the
saved-recommendation bookmarks stored in Supabase.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from learnpath.utils.constants import RECOMMENDATION_COUNT

# ============================================================================
# PROFILE INPUT
# ============================================================================

class StudentProfile(BaseModel):
    """
    Four-field student self-report used to seed the recommendation prompt.

    The pipeline treats every field as an opaque string. The only rule is the
    one the dashboard form applies: no field may be blank.
    """
    interests: str = Field(
        ...,
        description="Subjects or topics the student is passionate about",
        examples=["Machine Learning, History, Art"]
    )
    performance: str = Field(
        ...,
        description="Academic performance in the student's own words",
        examples=["3.6 GPA", "A average"]
    )
    career_aspirations: str = Field(
        ...,
        description="Career path the student wants to pursue",
        examples=["Software Engineer", "Data Scientist"]
    )
    skill_building_needs: str = Field(
        ...,
        description="Skills the student wants to develop or improve",
        examples=["Public speaking, Leadership, Programming"]
    )

    @field_validator(
        "interests", "performance", "career_aspirations", "skill_building_needs"
    )
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


# ============================================================================
# RECOMMENDATION RECORDS
# ============================================================================

class Recommendation(BaseModel):
    """A single suggested course, resource or activity."""
    title: str = Field(..., description="Short name of the recommendation")
    type: str = Field(
        ...,
        description="Category, loosely 'Academic' or 'Extracurricular'",
        examples=["Academic", "Extracurricular"]
    )
    description: str = Field(..., description="One or two sentences for the student")
    link: str = Field(
        ...,
        description="Google search URL for the recommendation (never a direct resource link)"
    )


class RecommendationGenerateRequest(BaseModel):
    """
    Request to generate a fresh recommendation set.

    When `profile` is omitted the authenticated user's stored profile is used.
    """
    profile: Optional[StudentProfile] = Field(
        None,
        description="Profile to generate recommendations for (defaults to the stored profile)"
    )


class RecommendationSetResponse(BaseModel):
    """
    Response for POST /recommendations.

    Always carries exactly six recommendations. `source` tells the client how
    the set was produced; it never signals an error.
    """
    recommendations: List[Recommendation] = Field(
        ...,
        min_length=RECOMMENDATION_COUNT,
        max_length=RECOMMENDATION_COUNT,
        description="Exactly six recommendations"
    )
    source: Literal["model", "partial", "fallback"] = Field(
        ...,
        description=(
            "'model' when all six came from the model, 'partial' when the model "
            "returned fewer than six and defaults filled the rest, 'fallback' when "
            "the deterministic default set was returned"
        )
    )


# ============================================================================
# SAVED RECOMMENDATIONS
# ============================================================================

class SavedRecommendation(Recommendation):
    """A recommendation bookmarked by the user (row of user_recommendations)."""
    id: str = Field(..., description="Saved recommendation UUID")
    user_id: str = Field(..., description="Owner UUID (auth.uid())")
    created_at: str = Field(..., description="ISO-8601 timestamp when it was saved")


class SavedRecommendationListResponse(BaseModel):
    """Response for GET /recommendations/saved."""
    recommendations: List[SavedRecommendation] = Field(default_factory=list)
    count: int = Field(..., description="Number of saved recommendations")


class SavedRecommendationDeleteResponse(BaseModel):
    """Response after removing a saved recommendation."""
    status: str = Field("DELETED")
    id: str = Field(..., description="UUID of the removed recommendation")
