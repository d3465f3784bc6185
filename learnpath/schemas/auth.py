"""
Pydantic schemas for authentication endpoints.

Sign-up, sign-in and password flows are thin wrappers over Supabase Auth;
these models only define the HTTP contract.
"""

from typing import Optional
from pydantic import BaseModel, Field


class SignUpRequest(BaseModel):
    """Request to create a new account with email and password."""
    email: str = Field(..., min_length=3, max_length=320, examples=["student@example.com"])
    password: str = Field(..., min_length=6, max_length=128)
    full_name: Optional[str] = Field(None, max_length=200, examples=["Ada Lovelace"])


class SignInRequest(BaseModel):
    """Request to sign in with email and password."""
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=128)


class PasswordResetRequest(BaseModel):
    """Request a password reset email."""
    email: str = Field(..., min_length=3, max_length=320)


class PasswordUpdateRequest(BaseModel):
    """Set a new password for the authenticated user."""
    password: str = Field(..., min_length=6, max_length=128)


class SessionResponse(BaseModel):
    """Session tokens issued by Supabase Auth."""
    user_id: str = Field(..., description="User UUID")
    email: Optional[str] = Field(None)
    access_token: str = Field(..., description="JWT to send as 'Authorization: Bearer <token>'")
    refresh_token: str = Field(...)
    expires_in: Optional[int] = Field(None, description="Access token lifetime in seconds")


class SignUpResponse(BaseModel):
    """
    Response for POST /auth/signup.

    `session` is null when the project requires email confirmation.
    """
    user_id: str = Field(...)
    email: Optional[str] = Field(None)
    session: Optional[SessionResponse] = Field(None)
    message: str = Field(..., examples=["Account created successfully! You can now sign in."])


class ProfileSummary(BaseModel):
    """Condensed profile info for the /auth/me response."""
    full_name: Optional[str] = Field(None)
    is_complete: bool = Field(..., description="True when all four profile fields are filled in")


class AuthMeResponse(BaseModel):
    """
    Response for GET /auth/me - Authenticated user identity.

    Used by the dashboard on load to hydrate session state.
    """
    user_id: str = Field(..., description="User UUID (from JWT 'sub' claim)")
    email: Optional[str] = Field(None, description="User's email (from JWT 'email' claim)")
    profile: Optional[ProfileSummary] = Field(None)


class MessageResponse(BaseModel):
    """Generic acknowledgement."""
    message: str = Field(...)
