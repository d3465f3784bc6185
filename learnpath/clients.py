"""
Outbound client factories and FastAPI dependencies.

The Gemini client and the HTTP client used for link probes are created once
in the application lifespan (see learnpath/main.py), stored on app.state and
injected into routes. Services receive them as arguments, so tests can pass
mocks without touching the network.
"""

import logging
from typing import Optional

import httpx
from fastapi import Request
from google import genai

from learnpath.config import settings
from learnpath.utils.constants import LINK_PROBE_USER_AGENT

logger = logging.getLogger(__name__)


def create_gemini_client() -> Optional[genai.Client]:
    """
    Create the Gemini client, or None when GOOGLE_API_KEY is not configured.

    A missing client is not an error: the recommendation pipeline falls
    back to its deterministic default set.
    """
    api_key = settings.GOOGLE_API_KEY

    if not api_key:
        logger.warning(
            "GOOGLE_API_KEY not configured. Recommendations will use the default set. "
            "Please set GOOGLE_API_KEY in your .env file."
        )
        return None

    try:
        client = genai.Client(api_key=api_key)
        logger.info("Gemini client initialized successfully for recommendations")
        return client
    except Exception as e:
        logger.error(f"Failed to initialize Gemini client: {e}")
        return None


def create_link_probe_client() -> httpx.AsyncClient:
    """Create the async HTTP client used for HEAD probes of recommendation links."""
    return httpx.AsyncClient(
        timeout=settings.LINK_PROBE_TIMEOUT_SECONDS,
        follow_redirects=True,
        max_redirects=settings.LINK_PROBE_MAX_REDIRECTS,
        headers={"User-Agent": LINK_PROBE_USER_AGENT},
    )


def get_gemini_client(request: Request) -> Optional[genai.Client]:
    """FastAPI dependency returning the app-scoped Gemini client (may be None)."""
    return getattr(request.app.state, "gemini_client", None)


def get_link_probe_client(request: Request) -> httpx.AsyncClient:
    """FastAPI dependency returning the app-scoped link probe client."""
    return request.app.state.link_probe_client
