"""
Authentication service.

Thin wrappers over Supabase Auth for the dashboard's email/password flows.
Token verification for protected endpoints lives in
learnpath/auth/dependencies.py; this module only talks to Supabase.

Supabase raises supabase.AuthError subclasses for rejected credentials,
weak passwords and similar; callers map those to 4xx responses.
"""

import logging
from typing import Any, Optional

from supabase import Client

from learnpath.config import settings
from learnpath.schemas.auth import SessionResponse

logger = logging.getLogger(__name__)


def _session_response(session: Any, user: Any) -> SessionResponse:
    return SessionResponse(
        user_id=str(user.id),
        email=getattr(user, "email", None),
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_in=getattr(session, "expires_in", None),
    )


def password_reset_redirect_url() -> str:
    """Dashboard page that receives the password recovery link."""
    return f"{settings.SITE_URL.rstrip('/')}/auth/reset-password"


async def sign_up(
    supabase_client: Client,
    email: str,
    password: str,
    full_name: Optional[str] = None,
) -> tuple[str, Optional[str], Optional[SessionResponse]]:
    """
    Create an account.

    Returns:
        (user_id, email, session). session is None when the project
        requires email confirmation before the first sign-in.
    """
    logger.info("Sign-up requested")

    response = supabase_client.auth.sign_up({
        "email": email,
        "password": password,
        "options": {
            "data": {"full_name": full_name},
            "email_redirect_to": settings.SITE_URL,
        },
    })

    if response.user is None:
        raise Exception("Sign-up returned no user")

    session = _session_response(response.session, response.user) if response.session else None
    logger.info(f"Account created for user_id={response.user.id}, session={'yes' if session else 'pending confirmation'}")
    return str(response.user.id), response.user.email, session


async def sign_in(
    supabase_client: Client,
    email: str,
    password: str,
) -> tuple[SessionResponse, Optional[str]]:
    """
    Sign in with email and password.

    Returns:
        (session, full_name from user metadata)
    """
    response = supabase_client.auth.sign_in_with_password({
        "email": email,
        "password": password,
    })

    if response.session is None or response.user is None:
        raise Exception("Sign-in returned no session")

    metadata = getattr(response.user, "user_metadata", None) or {}
    logger.info(f"User signed in: user_id={response.user.id}")
    return _session_response(response.session, response.user), metadata.get("full_name")


async def sign_out(supabase_client: Client) -> None:
    """Revoke the session the client was created with."""
    supabase_client.auth.sign_out()


async def request_password_reset(supabase_client: Client, email: str) -> None:
    """Send a password recovery email pointing at the dashboard reset page."""
    logger.info("Password reset email requested")
    supabase_client.auth.reset_password_for_email(
        email,
        {"redirect_to": password_reset_redirect_url()},
    )


async def update_password(supabase_client: Client, password: str) -> None:
    """Set a new password for the user the client is authenticated as."""
    supabase_client.auth.update_user({"password": password})
