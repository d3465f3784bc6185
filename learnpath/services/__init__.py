"""
Service layer for the LearnPath backend.

Contains the business logic that routes call into:
- Recommendation pipeline (Gemini call, lenient parsing, link validation,
  deterministic defaults)
- Profile and saved-recommendation persistence (Supabase under RLS)
- Supabase Auth wrappers for the email/password flows

Services act as the glue between routes (HTTP layer) and external services.
"""

from .auth_service import (
    request_password_reset,
    sign_in,
    sign_out,
    sign_up,
    update_password,
)
from .profile_service import (
    ensure_student_profile,
    get_student_profile,
    is_profile_complete,
    to_student_profile,
    upsert_student_profile,
)
from .recommendation_service import (
    build_fallback_recommendations,
    extract_recommendations,
    generate_recommendations,
)
from .saved_recommendation_service import (
    delete_saved_recommendation,
    list_saved_recommendations,
    save_recommendation,
)
from .search_links import (
    build_search_link,
    matches_search_template,
    probe_link,
    validate_recommendation_links,
)

__all__ = [
    "request_password_reset",
    "sign_in",
    "sign_out",
    "sign_up",
    "update_password",
    "ensure_student_profile",
    "get_student_profile",
    "is_profile_complete",
    "to_student_profile",
    "upsert_student_profile",
    "build_fallback_recommendations",
    "extract_recommendations",
    "generate_recommendations",
    "delete_saved_recommendation",
    "list_saved_recommendations",
    "save_recommendation",
    "build_search_link",
    "matches_search_template",
    "probe_link",
    "validate_recommendation_links",
]
