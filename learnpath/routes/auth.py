"""
Auth API endpoints.

Email/password flows backed by Supabase Auth:
- POST /auth/signup - Create an account
- POST /auth/signin - Sign in, creating the profile row on first sign-in
- POST /auth/signout - Revoke the current session
- POST /auth/password-reset - Send a password recovery email
- POST /auth/password - Set a new password (authenticated)
- GET /auth/me - Get authenticated user identity
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from supabase import AuthError

from learnpath.auth.dependencies import AuthenticatedUser, get_authenticated_user
from learnpath.db.client import get_anon_client, get_supabase_client
from learnpath.schemas.auth import (
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
from learnpath.services.auth_service import (
    request_password_reset,
    sign_in,
    sign_out,
    sign_up,
    update_password,
)
from learnpath.services.profile_service import (
    ensure_student_profile,
    get_student_profile,
    is_profile_complete,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/signup",
    response_model=SignUpResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    description="""
    Create an account with email and password.

    The full name is stored in the user's metadata and copied into the
    profile row on first sign-in. When email confirmation is enabled the
    response carries no session.
    """
)
async def signup(request: SignUpRequest) -> SignUpResponse:
    try:
        user_id, email, session = await sign_up(
            supabase_client=get_anon_client(),
            email=request.email,
            password=request.password,
            full_name=request.full_name,
        )
    except AuthError as e:
        logger.warning(f"Sign-up rejected: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "signup_failed", "details": str(e)}
        )
    except Exception as e:
        logger.error(f"Sign-up failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "signup_error", "details": "An error occurred during sign up"}
        )

    return SignUpResponse(
        user_id=user_id,
        email=email,
        session=session,
        message="Account created successfully! You can now sign in."
    )


@router.post(
    "/signin",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign in with email and password",
    description="""
    Exchange email and password for a Supabase session.

    On first sign-in an empty profile row is created for the user. A failure
    to create it is logged and does not block the sign-in.
    """
)
async def signin(request: SignInRequest) -> SessionResponse:
    try:
        session, full_name = await sign_in(
            supabase_client=get_anon_client(),
            email=request.email,
            password=request.password,
        )
    except AuthError as e:
        logger.warning(f"Sign-in rejected: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "invalid_credentials", "details": str(e)}
        )
    except Exception as e:
        logger.error(f"Sign-in failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "signin_error", "details": "An error occurred during sign in"}
        )

    try:
        await ensure_student_profile(
            supabase_client=get_supabase_client(session.access_token),
            user_id=session.user_id,
            full_name=full_name,
        )
    except Exception as e:
        logger.error(f"Error creating profile for user_id={session.user_id}: {e}")

    return session


@router.post(
    "/signout",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign out",
)
async def signout(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> MessageResponse:
    try:
        await sign_out(get_supabase_client(auth_user.access_token))
    except Exception as e:
        logger.error(f"Sign-out failed for user_id={auth_user.user_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "signout_error", "details": "An error occurred during sign out"}
        )

    logger.info(f"User signed out: user_id={auth_user.user_id}")
    return MessageResponse(message="Signed out successfully")


@router.post(
    "/password-reset",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Send a password reset email",
)
async def password_reset(request: PasswordResetRequest) -> MessageResponse:
    try:
        await request_password_reset(get_anon_client(), request.email)
    except AuthError as e:
        logger.warning(f"Password reset rejected: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "password_reset_failed", "details": str(e)}
        )
    except Exception as e:
        logger.error(f"Password reset failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "password_reset_error", "details": "An error occurred sending reset email"}
        )

    return MessageResponse(message="Password reset email sent! Check your inbox.")


@router.post(
    "/password",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Set a new password",
    description="Used by the reset-password page after the user follows the recovery link."
)
async def change_password(
    request: PasswordUpdateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> MessageResponse:
    try:
        await update_password(get_supabase_client(auth_user.access_token), request.password)
    except AuthError as e:
        logger.warning(f"Password update rejected for user_id={auth_user.user_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "password_update_failed", "details": str(e)}
        )
    except Exception as e:
        logger.error(f"Password update failed for user_id={auth_user.user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "password_update_error", "details": "An error occurred updating password"}
        )

    return MessageResponse(message="Password updated successfully")


@router.get(
    "/me",
    response_model=AuthMeResponse,
    status_code=status.HTTP_200_OK,
    summary="Get authenticated user identity",
    description="""
    Get the authenticated user's identity for session hydration.

    Profile is null when the profile row cannot be read or does not exist yet.
    """
)
async def get_auth_me(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> AuthMeResponse:
    profile_summary = None
    try:
        profile = await get_student_profile(
            get_supabase_client(auth_user.access_token), auth_user.user_id
        )
        if profile is not None:
            profile_summary = ProfileSummary(
                full_name=profile.get("full_name"),
                is_complete=is_profile_complete(profile),
            )
    except Exception as e:
        logger.error(f"Error fetching profile for auth/me: {e}")

    return AuthMeResponse(
        user_id=auth_user.user_id,
        email=auth_user.email,
        profile=profile_summary,
    )
