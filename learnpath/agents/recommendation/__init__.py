"""
Recommendation System - single-call LLM with search-link validation

This module contains the prompt templates for the Gemini-based learning
recommendation pipeline.

The service layer is in:
- learnpath/services/recommendation_service.py

Link templates and reachability checks are in:
- learnpath/services/search_links.py
"""

from learnpath.agents.recommendation.prompts import (
    RECOMMENDATION_SYSTEM_PROMPT,
    build_recommendation_user_prompt,
)

__all__ = [
    "RECOMMENDATION_SYSTEM_PROMPT",
    "build_recommendation_user_prompt",
]
