"""
Search-link construction and validation for recommendations.

Recommendations never point at a course or event directly (those URLs go
stale); they point at a Google search built from one of two templates:

- Academic:        <base><topic>+online+course+site:coursera.org+OR+site:edx.org+OR+site:khanacademy.org
- Extracurricular: <base><topic>+workshop+OR+event+OR+volunteer

Links proposed by the model are kept only when they follow a template and
answer a HEAD probe with a 2xx/3xx status. Otherwise the link is rebuilt
from the recommendation's title and type. Probes never raise.
"""

import asyncio
import logging
from typing import List
from urllib.parse import quote

import httpx

from learnpath.config import settings
from learnpath.schemas.recommendations import Recommendation
from learnpath.utils.constants import (
    ACADEMIC_QUERY_SUFFIX,
    EXTRACURRICULAR_QUERY_SUFFIX,
    SEARCH_BASE_URL,
    SEARCH_QUERY_MARKER,
    URI_COMPONENT_SAFE_CHARS,
)

logger = logging.getLogger(__name__)


def build_search_link(topic: str, recommendation_type: str) -> str:
    """
    Build a templated search link for a topic.

    The academic template is used when "academic" appears anywhere in the
    type (case-insensitive); every other type gets the extracurricular one.
    """
    encoded_topic = quote(topic, safe=URI_COMPONENT_SAFE_CHARS)
    if "academic" in recommendation_type.lower():
        return f"{SEARCH_BASE_URL}{encoded_topic}{ACADEMIC_QUERY_SUFFIX}"
    return f"{SEARCH_BASE_URL}{encoded_topic}{EXTRACURRICULAR_QUERY_SUFFIX}"


def matches_search_template(link: str) -> bool:
    """True when the link is a search query ending in one of the template suffixes."""
    return SEARCH_QUERY_MARKER in link and link.endswith(
        (ACADEMIC_QUERY_SUFFIX, EXTRACURRICULAR_QUERY_SUFFIX)
    )


async def probe_link(http_client: httpx.AsyncClient, url: str) -> bool:
    """
    Check that a URL answers a HEAD request with a 200-399 status.

    Redirects are followed up to the client's max_redirects. Network errors,
    timeouts, too many redirects and malformed URLs (including hosts that
    fail IDNA encoding) all count as unreachable.
    """
    try:
        response = await http_client.head(
            url,
            timeout=settings.LINK_PROBE_TIMEOUT_SECONDS,
            follow_redirects=True,
        )
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
        # ValueError covers IDNA failures raised while parsing the host
        logger.debug(f"Link probe failed for {url[:80]}: {type(e).__name__}")
        return False

    return 200 <= response.status_code < 400


async def ensure_valid_link(
    http_client: httpx.AsyncClient,
    recommendation: Recommendation,
) -> Recommendation:
    """
    Return the recommendation with a link that is safe to show.

    1. A link that does not follow a template is rebuilt from title and type.
    2. The (possibly rebuilt) link is probed; if unreachable it is rebuilt.
       The rebuilt link is not probed again.
    """
    link = recommendation.link
    if not matches_search_template(link):
        link = build_search_link(recommendation.title, recommendation.type)

    if not await probe_link(http_client, link):
        link = build_search_link(recommendation.title, recommendation.type)

    if link == recommendation.link:
        return recommendation
    return recommendation.model_copy(update={"link": link})


async def validate_recommendation_links(
    http_client: httpx.AsyncClient,
    recommendations: List[Recommendation],
) -> List[Recommendation]:
    """Validate every record's link concurrently, preserving order."""
    validated = await asyncio.gather(
        *(ensure_valid_link(http_client, rec) for rec in recommendations)
    )
    rebuilt = sum(
        1 for before, after in zip(recommendations, validated)
        if before.link != after.link
    )
    if rebuilt:
        logger.info(f"Rebuilt {rebuilt} of {len(validated)} recommendation links")
    return list(validated)
