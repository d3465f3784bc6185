"""
Pydantic schemas for the student profile endpoints.

A profile row (user_profiles) is 1:1 with auth.users and holds the four
self-reported fields used to seed recommendations.
"""

from typing import Optional
from pydantic import BaseModel, Field


class ProfileResponse(BaseModel):
    """
    Response for GET /profile and PUT /profile.

    Profile fields are nullable: a row is created empty on first sign-in and
    filled in when the student submits the dashboard form.
    """
    user_id: str = Field(..., description="User UUID (from auth.users)")
    full_name: Optional[str] = Field(None, description="Display name from sign-up")
    interests: Optional[str] = Field(None, description="Subjects the student is passionate about")
    performance: Optional[str] = Field(None, description="Self-reported academic performance")
    career_aspirations: Optional[str] = Field(None, description="Desired career path")
    skill_building_needs: Optional[str] = Field(None, description="Skills to develop")
    is_complete: bool = Field(
        ...,
        description="True when all four profile fields are filled in (recommendations can use it)"
    )
    created_at: str = Field(..., description="ISO-8601 timestamp when profile was created")
    updated_at: str = Field(..., description="ISO-8601 timestamp of last profile update")


class ProfileUpsertRequest(BaseModel):
    """
    Request to create or replace the student profile.

    The four profile fields are required, matching the dashboard form.
    """
    full_name: Optional[str] = Field(None, max_length=200)
    interests: str = Field(..., min_length=1, max_length=2000)
    performance: str = Field(..., min_length=1, max_length=2000)
    career_aspirations: str = Field(..., min_length=1, max_length=2000)
    skill_building_needs: str = Field(..., min_length=1, max_length=2000)
