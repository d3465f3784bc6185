"""
Supabase client factory with RLS enforcement.

SECURITY RULES:
1. NEVER use the service_role key for user operations
2. ALWAYS use the user's JWT token from Supabase Auth for data access
3. RLS policies enforce user_id = auth.uid() on user_profiles and
   user_recommendations
"""

import logging

from learnpath.config import settings
from supabase import Client, create_client

logger = logging.getLogger(__name__)


def get_anon_client() -> Client:
    """
    Create an unauthenticated Supabase client (publishable key).

    Used for Supabase Auth calls that happen before a session exists:
    sign-up, password sign-in and password reset emails.
    """
    return create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_PUBLISHABLE_KEY
    )


def get_supabase_client(access_token: str) -> Client:
    """
    Create an authenticated Supabase client for a specific user.

    This client respects Row Level Security (RLS) policies because it uses
    the user's JWT access token from Supabase Auth. All queries will be
    scoped to rows where user_id = auth.uid().

    Args:
        access_token: The user's JWT access token, already verified in
                      learnpath/auth/dependencies.py.

    Returns:
        An authenticated Supabase client that enforces RLS.
    """
    client = get_anon_client()

    # The token's 'sub' claim is what auth.uid() resolves to in RLS policies
    client.auth.set_session(access_token, access_token)

    logger.debug("Created authenticated Supabase client with user token (RLS enforced)")

    return client
