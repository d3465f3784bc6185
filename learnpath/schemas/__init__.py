"""
Pydantic request/response models for the LearnPath API.

Every endpoint declares its contract here; routes never return raw dicts.
"""

from .auth import (
    AuthMeResponse,
    MessageResponse,
    PasswordResetRequest,
    PasswordUpdateRequest,
    ProfileSummary,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    SignUpResponse,
)
from .health import HealthResponse
from .profile import ProfileResponse, ProfileUpsertRequest
from .recommendations import (
    Recommendation,
    RecommendationGenerateRequest,
    RecommendationSetResponse,
    SavedRecommendation,
    SavedRecommendationDeleteResponse,
    SavedRecommendationListResponse,
    StudentProfile,
)

__all__ = [
    "AuthMeResponse",
    "MessageResponse",
    "PasswordResetRequest",
    "PasswordUpdateRequest",
    "ProfileSummary",
    "SessionResponse",
    "SignInRequest",
    "SignUpRequest",
    "SignUpResponse",
    "HealthResponse",
    "ProfileResponse",
    "ProfileUpsertRequest",
    "Recommendation",
    "RecommendationGenerateRequest",
    "RecommendationSetResponse",
    "SavedRecommendation",
    "SavedRecommendationDeleteResponse",
    "SavedRecommendationListResponse",
    "StudentProfile",
]
