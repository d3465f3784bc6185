"""
FastAPI dependency functions for authentication.

These functions are used as FastAPI dependencies to verify tokens
and extract the authenticated user from Supabase Auth.

Uses Supabase's JWT Signing Keys system with ECC (P-256) public key verification.
"""

import logging
from dataclasses import dataclass
from typing import Annotated, Any, Dict, Optional

from fastapi import Header, HTTPException, status
from jwt import PyJWKClient, decode
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError, PyJWKClientError

from learnpath.config import settings

logger = logging.getLogger(__name__)

# JWKS client for fetching and caching Supabase's public keys
_jwks_client: PyJWKClient | None = None


@dataclass
class AuthenticatedUser:
    """
    Represents an authenticated user with their token.

    Attributes:
        user_id: The user's UUID from the JWT token's 'sub' claim
        access_token: The full JWT access token (for creating authenticated Supabase clients)
        email: The 'email' claim, when present
    """
    user_id: str
    access_token: str
    email: Optional[str] = None


def get_jwks_client() -> PyJWKClient:
    """
    Get or create the JWKS client instance.

    The client caches JWKS responses to minimize network calls.

    Raises:
        ValueError: If SUPABASE_URL is not configured
    """
    global _jwks_client

    if _jwks_client is None:
        jwks_url = settings.SUPABASE_JWKS_URL
        if not jwks_url:
            raise ValueError(
                "SUPABASE_URL is not configured. "
                "Cannot construct JWKS URL for JWT verification."
            )

        logger.info(f"Initializing JWKS client with URL: {jwks_url}")
        _jwks_client = PyJWKClient(
            jwks_url,
            cache_keys=True,
            max_cached_keys=16,
        )

    return _jwks_client


def _unauthorized(error: str, details: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": error, "details": details}
    )


def _extract_bearer_token(authorization: Optional[str]) -> str:
    """Read the token from an 'Authorization: Bearer <token>' header value."""
    if not authorization:
        logger.warning("Missing Authorization header")
        raise _unauthorized("unauthorized", "Missing Authorization header")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.warning("Invalid Authorization header format")
        raise _unauthorized("unauthorized", "Invalid Authorization header format")

    return parts[1]


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify a Supabase access token and return its claims.

    Checks the ES256 signature against the project's JWKS, expiration,
    audience ('authenticated') and issuer ({SUPABASE_URL}/auth/v1).

    Raises:
        HTTPException: 401 for any verification failure
    """
    try:
        jwks_client = get_jwks_client()

        # The client picks the key by the token's 'kid' header
        signing_key = jwks_client.get_signing_key_from_jwt(token)

        issuer = f"{settings.SUPABASE_URL.rstrip('/')}/auth/v1"

        return decode(
            token,
            signing_key.key,
            algorithms=["ES256"],
            audience="authenticated",
            issuer=issuer,
            options={
                "verify_signature": True,
                "verify_exp": True,
                "verify_aud": True,
                "verify_iss": True,
            }
        )

    except ExpiredSignatureError:
        logger.warning("Token has expired")
        raise _unauthorized("token_expired", "Authentication token has expired")

    except PyJWKClientError as e:
        logger.error(f"JWKS client error: {str(e)}")
        raise _unauthorized("jwks_error", "Unable to verify token signature")

    except InvalidTokenError as e:
        logger.warning(f"Invalid token: {str(e)}")
        raise _unauthorized("invalid_token", "Invalid authentication token")

    except Exception as e:
        logger.error(f"Unexpected error during token verification: {str(e)}")
        raise _unauthorized("unauthorized", "Token verification failed")


async def get_authenticated_user(
    authorization: Annotated[str | None, Header()] = None
) -> AuthenticatedUser:
    """
    Verify the Bearer token and return the authenticated user.

    Security:
        - This is the ONLY source of truth for user_id
        - Any user_id sent in a request body is ignored

    Usage:
        @router.get("/profile")
        async def get_profile(
            auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
        ):
            supabase_client = get_supabase_client(auth_user.access_token)
    """
    token = _extract_bearer_token(authorization)
    payload = decode_access_token(token)

    user_id = payload.get("sub")
    if not user_id:
        logger.error("Token payload missing 'sub' claim")
        raise _unauthorized("unauthorized", "Invalid token: missing user ID")

    email = payload.get("email")
    logger.info(f"Token verified successfully for user_id={user_id}")

    return AuthenticatedUser(
        user_id=str(user_id),
        access_token=token,
        email=str(email) if email else None,
    )
