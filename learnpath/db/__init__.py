"""
Database access layer for the LearnPath backend.

All database operations MUST:
- Respect Row Level Security (RLS): user_id = auth.uid()
- Never bypass RLS

Tables (owned by the hosted Supabase project):
- user_profiles: one row per user with the four profile fields
- user_recommendations: recommendations bookmarked by the user
"""

from .client import get_anon_client, get_supabase_client

__all__ = ["get_anon_client", "get_supabase_client"]
