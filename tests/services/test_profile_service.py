"""
Tests for the student profile service.

The Supabase client is a MagicMock; query builders are chained through
return_value the same way the real postgrest builders chain.
"""

from types import SimpleNamespace

import pytest

from learnpath.services.profile_service import (
    ensure_student_profile,
    get_student_profile,
    is_profile_complete,
    to_student_profile,
    upsert_student_profile,
)

COMPLETE_ROW = {
    "user_id": "user-1",
    "full_name": "Ada",
    "interests": "robotics",
    "performance": "A average",
    "career_aspirations": "mechanical engineer",
    "skill_building_needs": "CAD",
}


class TestProfileCompleteness:

    def test_complete_row(self):
        assert is_profile_complete(COMPLETE_ROW) is True

    @pytest.mark.parametrize("missing", ["interests", "performance", "career_aspirations", "skill_building_needs"])
    def test_missing_field(self, missing):
        row = {**COMPLETE_ROW, missing: None}
        assert is_profile_complete(row) is False

    def test_blank_field(self):
        assert is_profile_complete({**COMPLETE_ROW, "interests": "   "}) is False

    def test_no_row(self):
        assert is_profile_complete(None) is False

    def test_to_student_profile(self):
        profile = to_student_profile(COMPLETE_ROW)
        assert profile is not None
        assert profile.career_aspirations == "mechanical engineer"

    def test_to_student_profile_incomplete(self):
        assert to_student_profile({"user_id": "user-1", "full_name": "Ada"}) is None


class TestGetStudentProfile:

    @pytest.mark.asyncio
    async def test_returns_row(self, supabase_client):
        query = supabase_client.table.return_value.select.return_value.eq.return_value
        query.execute.return_value = SimpleNamespace(data=[COMPLETE_ROW])

        result = await get_student_profile(supabase_client, "user-1")

        assert result == COMPLETE_ROW
        supabase_client.table.assert_called_with("user_profiles")
        supabase_client.table.return_value.select.return_value.eq.assert_called_with("user_id", "user-1")

    @pytest.mark.asyncio
    async def test_missing_row_returns_none(self, supabase_client):
        query = supabase_client.table.return_value.select.return_value.eq.return_value
        query.execute.return_value = SimpleNamespace(data=[])

        assert await get_student_profile(supabase_client, "user-1") is None


class TestUpsertStudentProfile:

    @pytest.mark.asyncio
    async def test_upserts_on_user_id(self, supabase_client):
        upsert = supabase_client.table.return_value.upsert
        upsert.return_value.execute.return_value = SimpleNamespace(data=[COMPLETE_ROW])

        result = await upsert_student_profile(
            supabase_client,
            user_id="user-1",
            interests="robotics",
            performance="A average",
            career_aspirations="mechanical engineer",
            skill_building_needs="CAD",
        )

        assert result == COMPLETE_ROW
        data = upsert.call_args.args[0]
        assert upsert.call_args.kwargs == {"on_conflict": "user_id"}
        assert data["interests"] == "robotics"
        assert "updated_at" in data
        assert "full_name" not in data

    @pytest.mark.asyncio
    async def test_full_name_written_when_given(self, supabase_client):
        upsert = supabase_client.table.return_value.upsert
        upsert.return_value.execute.return_value = SimpleNamespace(data=[COMPLETE_ROW])

        await upsert_student_profile(
            supabase_client, "user-1", "a", "b", "c", "d", full_name="Ada Lovelace"
        )

        assert upsert.call_args.args[0]["full_name"] == "Ada Lovelace"

    @pytest.mark.asyncio
    async def test_no_data_raises(self, supabase_client):
        upsert = supabase_client.table.return_value.upsert
        upsert.return_value.execute.return_value = SimpleNamespace(data=[])

        with pytest.raises(Exception, match="Failed to save profile"):
            await upsert_student_profile(supabase_client, "user-1", "a", "b", "c", "d")


class TestEnsureStudentProfile:

    @pytest.mark.asyncio
    async def test_existing_profile_is_returned(self, supabase_client):
        query = supabase_client.table.return_value.select.return_value.eq.return_value
        query.execute.return_value = SimpleNamespace(data=[COMPLETE_ROW])

        result = await ensure_student_profile(supabase_client, "user-1", "Ada")

        assert result == COMPLETE_ROW
        supabase_client.table.return_value.insert.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_profile_is_created(self, supabase_client):
        query = supabase_client.table.return_value.select.return_value.eq.return_value
        query.execute.return_value = SimpleNamespace(data=[])
        insert = supabase_client.table.return_value.insert
        insert.return_value.execute.return_value = SimpleNamespace(
            data=[{"user_id": "user-1", "full_name": "Ada"}]
        )

        result = await ensure_student_profile(supabase_client, "user-1", "Ada")

        insert.assert_called_once_with({"user_id": "user-1", "full_name": "Ada"})
        assert result["full_name"] == "Ada"
