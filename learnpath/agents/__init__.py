"""
AI components for the LearnPath backend.

1. Recommendation System (single-call LLM)
   - Uses Gemini to suggest three academic and three extracurricular items
   - Output is parsed leniently from free-form text; the service layer
     guarantees six records with valid search links regardless of the model
   - Located in: learnpath/services/recommendation_service.py
"""

from learnpath.agents.recommendation import (
    RECOMMENDATION_SYSTEM_PROMPT,
    build_recommendation_user_prompt,
)

__all__ = [
    "RECOMMENDATION_SYSTEM_PROMPT",
    "build_recommendation_user_prompt",
]
