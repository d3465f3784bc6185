"""
Health check endpoint schema.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for GET /health."""

    status: str = Field(default="ok", examples=["ok"])
    service: str = Field(default="learnpath-backend")
    gemini_configured: bool = Field(
        default=False,
        description="False when GOOGLE_API_KEY is missing; recommendations then use the default set"
    )
