"""
Tests for search-link construction and link probes.

Probes go through httpx.MockTransport so redirects, timeouts and error
statuses can be simulated without the network.
"""

import asyncio
from typing import List

import httpx
import pytest

from learnpath.schemas.recommendations import Recommendation
from learnpath.services.search_links import (
    build_search_link,
    ensure_valid_link,
    matches_search_template,
    probe_link,
    validate_recommendation_links,
)
from learnpath.utils.constants import (
    ACADEMIC_QUERY_SUFFIX,
    EXTRACURRICULAR_QUERY_SUFFIX,
    SEARCH_BASE_URL,
)


def _client(handler, **kwargs) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), **kwargs)


class TestBuildSearchLink:
    """Tests for build_search_link."""

    def test_academic_template(self):
        link = build_search_link("Linear Algebra", "Academic")
        assert link == f"{SEARCH_BASE_URL}Linear%20Algebra{ACADEMIC_QUERY_SUFFIX}"

    def test_extracurricular_template(self):
        link = build_search_link("Robotics Club", "Extracurricular")
        assert link == f"{SEARCH_BASE_URL}Robotics%20Club{EXTRACURRICULAR_QUERY_SUFFIX}"

    @pytest.mark.parametrize("rec_type", ["ACADEMIC", "academic resource", "Non-Academic"])
    def test_type_containing_academic_uses_course_sites(self, rec_type):
        assert build_search_link("x", rec_type).endswith(ACADEMIC_QUERY_SUFFIX)

    @pytest.mark.parametrize("rec_type", ["Workshop", "", "Event"])
    def test_other_types_use_extracurricular(self, rec_type):
        assert build_search_link("x", rec_type).endswith(EXTRACURRICULAR_QUERY_SUFFIX)

    def test_reserved_characters_are_encoded(self):
        link = build_search_link("C++ & AI/ML?", "Academic")
        assert "C%2B%2B%20%26%20AI%2FML%3F" in link

    def test_unreserved_marks_are_kept(self):
        link = build_search_link("don't-stop_(now)!", "Extracurricular")
        assert "don't-stop_(now)!" in link

    def test_non_ascii_topic_is_utf8_encoded(self):
        link = build_search_link("café", "Academic")
        assert "caf%C3%A9" in link


class TestMatchesSearchTemplate:
    """Tests for matches_search_template."""

    def test_built_links_match(self):
        assert matches_search_template(build_search_link("Python", "Academic"))
        assert matches_search_template(build_search_link("Chess", "Extracurricular"))

    def test_model_style_plus_joined_link_matches(self):
        assert matches_search_template(
            f"{SEARCH_BASE_URL}Intro+to+Python{ACADEMIC_QUERY_SUFFIX}"
        )

    @pytest.mark.parametrize("link", [
        "https://www.coursera.org/learn/python",
        "https://www.google.com/search?q=python",
        "https://www.bing.com/search?q=python+workshop+OR+event+OR+volunteer",
        "",
    ])
    def test_other_links_do_not_match(self, link):
        assert not matches_search_template(link)


class TestProbeLink:
    """Tests for probe_link."""

    @pytest.mark.asyncio
    async def test_ok_status_is_reachable(self):
        async with _client(lambda request: httpx.Response(200)) as client:
            assert await probe_link(client, "https://example.com/") is True

    @pytest.mark.asyncio
    async def test_uses_head_with_probe_timeout(self):
        seen: List[httpx.Request] = []

        def handler(request):
            seen.append(request)
            return httpx.Response(204)

        async with _client(handler) as client:
            assert await probe_link(client, "https://example.com/") is True

        assert seen[0].method == "HEAD"
        assert seen[0].extensions["timeout"]["connect"] == 3.0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 404, 429, 500, 503])
    async def test_error_status_is_unreachable(self, status):
        async with _client(lambda request: httpx.Response(status)) as client:
            assert await probe_link(client, "https://example.com/") is False

    @pytest.mark.asyncio
    async def test_redirect_is_followed(self):
        def handler(request):
            if request.url.path == "/old":
                return httpx.Response(301, headers={"Location": "https://example.com/new"})
            return httpx.Response(200)

        async with _client(handler) as client:
            assert await probe_link(client, "https://example.com/old") is True

    @pytest.mark.asyncio
    async def test_redirect_to_missing_page_is_unreachable(self):
        def handler(request):
            if request.url.path == "/old":
                return httpx.Response(302, headers={"Location": "https://example.com/gone"})
            return httpx.Response(404)

        async with _client(handler) as client:
            assert await probe_link(client, "https://example.com/old") is False

    @pytest.mark.asyncio
    async def test_redirect_loop_is_unreachable(self):
        def handler(request):
            return httpx.Response(302, headers={"Location": "https://example.com/loop"})

        async with _client(handler, max_redirects=5) as client:
            assert await probe_link(client, "https://example.com/loop") is False

    @pytest.mark.asyncio
    async def test_timeout_is_unreachable(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        async with _client(handler) as client:
            assert await probe_link(client, "https://example.com/") is False

    @pytest.mark.asyncio
    async def test_connection_error_is_unreachable(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            assert await probe_link(client, "https://example.com/") is False

    @pytest.mark.asyncio
    async def test_malformed_url_is_unreachable(self):
        async with _client(lambda request: httpx.Response(200)) as client:
            assert await probe_link(client, "https://example.com/\x07bell") is False

    @pytest.mark.asyncio
    async def test_idna_invalid_host_is_unreachable(self):
        url = f"https://xn--.com/google.com/search?q=a{EXTRACURRICULAR_QUERY_SUFFIX}"
        async with _client(lambda request: httpx.Response(200)) as client:
            assert await probe_link(client, url) is False


class TestEnsureValidLink:
    """Tests for ensure_valid_link and validate_recommendation_links."""

    @pytest.mark.asyncio
    async def test_reachable_template_link_is_untouched(self):
        rec = Recommendation(
            title="Intro to Python",
            type="Academic",
            description="d",
            link=f"{SEARCH_BASE_URL}Intro+to+Python{ACADEMIC_QUERY_SUFFIX}",
        )
        async with _client(lambda request: httpx.Response(200)) as client:
            assert await ensure_valid_link(client, rec) is rec

    @pytest.mark.asyncio
    async def test_direct_link_is_rebuilt_and_probed(self):
        seen: List[str] = []

        def handler(request):
            seen.append(request.url.host)
            return httpx.Response(200)

        rec = Recommendation(
            title="Chess Club", type="Extracurricular", description="d",
            link="https://chess.example.org/join",
        )
        async with _client(handler) as client:
            result = await ensure_valid_link(client, rec)

        assert result.link == build_search_link("Chess Club", "Extracurricular")
        assert seen == ["www.google.com"]
        assert rec.link == "https://chess.example.org/join"

    @pytest.mark.asyncio
    async def test_unreachable_link_is_rebuilt_once(self):
        seen: List[str] = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(404)

        rec = Recommendation(
            title="Data Science", type="Academic", description="d",
            link=f"{SEARCH_BASE_URL}Data+Science{ACADEMIC_QUERY_SUFFIX}",
        )
        async with _client(handler) as client:
            result = await ensure_valid_link(client, rec)

        assert result.link == build_search_link("Data Science", "Academic")
        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_validation_preserves_order(self):
        recs = [
            Recommendation(title=f"Topic {i}", type="Academic", description="d", link="bad")
            for i in range(4)
        ]
        async with _client(lambda request: httpx.Response(200)) as client:
            result = await validate_recommendation_links(client, recs)

        assert [rec.title for rec in result] == ["Topic 0", "Topic 1", "Topic 2", "Topic 3"]
        assert all(matches_search_template(rec.link) for rec in result)

    @pytest.mark.asyncio
    async def test_idna_invalid_host_is_rebuilt(self):
        rec = Recommendation(
            title="Robotics Workshop", type="Extracurricular", description="d",
            link=f"https://xn--.com/google.com/search?q=a{EXTRACURRICULAR_QUERY_SUFFIX}",
        )
        async with _client(lambda request: httpx.Response(200)) as client:
            result = await ensure_valid_link(client, rec)

        assert result.link == build_search_link("Robotics Workshop", "Extracurricular")

    @pytest.mark.asyncio
    async def test_links_are_checked_concurrently(self):
        recs = [
            Recommendation(
                title=f"Topic {i}", type="Academic", description="d",
                link=f"{SEARCH_BASE_URL}Topic+{i}{ACADEMIC_QUERY_SUFFIX}",
            )
            for i in range(6)
        ]
        arrived = 0
        all_arrived = asyncio.Event()

        async def handler(request):
            # Only answers 200 once every request is in flight at the same time
            nonlocal arrived
            arrived += 1
            if arrived == len(recs):
                all_arrived.set()
            try:
                await asyncio.wait_for(all_arrived.wait(), timeout=1.0)
            except asyncio.TimeoutError:
                return httpx.Response(503)
            return httpx.Response(200)

        async with _client(handler) as client:
            result = await validate_recommendation_links(client, recs)

        assert arrived == 6
        assert result == recs
