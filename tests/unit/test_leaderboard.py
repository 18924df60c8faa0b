"""
Tests for the leaderboard fold and aggregator
"""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from codeclash.core.exceptions import StorageError
from codeclash.services.leaderboard import LeaderboardAggregator, rank_scores


class TestRankScores:

    def test_empty_contest_has_empty_leaderboard(self):
        assert rank_scores([]) == []

    def test_resubmissions_are_summed_not_deduplicated(self):
        student = uuid4()

        entries = rank_scores([(student, 100), (student, 0)])

        assert len(entries) == 1
        assert entries[0].student_id == student
        assert entries[0].total_score == 100

    def test_repeated_solves_of_one_question_all_count(self):
        student = uuid4()

        entries = rank_scores([(student, 100), (student, 100), (student, 100)])

        assert entries[0].total_score == 300

    def test_totals_are_sorted_descending(self):
        a, b, c, d = uuid4(), uuid4(), uuid4(), uuid4()

        entries = rank_scores([(a, 30), (b, 90), (c, 90), (d, 10)])

        assert [e.total_score for e in entries] == [90, 90, 30, 10]
        # Tie order is unspecified; only check the 90s are the right students
        assert {e.student_id for e in entries[:2]} == {b, c}
        assert entries[2].student_id == a
        assert entries[3].student_id == d

    def test_total_per_student_matches_sum_of_their_rows(self):
        a, b = uuid4(), uuid4()
        rows = [(a, 100), (b, 0), (a, 0), (b, 100), (a, 100), (b, 100)]

        totals = {e.student_id: e.total_score for e in rank_scores(rows)}

        assert totals == {a: 200, b: 200}

    def test_student_with_only_failures_is_listed_with_zero(self):
        a, b = uuid4(), uuid4()

        entries = rank_scores([(a, 0), (b, 100)])

        assert [(e.student_id, e.total_score) for e in entries] == [(b, 100), (a, 0)]


class TestLeaderboardAggregator:

    @pytest.mark.asyncio
    async def test_folds_fetched_rows(self):
        a, b = uuid4(), uuid4()
        result = MagicMock()
        result.all.return_value = [(a, 100), (b, 100), (b, 100)]
        session = MagicMock()
        session.execute = AsyncMock(return_value=result)

        entries = await LeaderboardAggregator(session).get_leaderboard(uuid4())

        assert [(e.student_id, e.total_score) for e in entries] == [(b, 200), (a, 100)]
        session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_query_failure_raises_storage_error(self):
        session = MagicMock()
        session.execute = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("gone")))

        with pytest.raises(StorageError) as exc_info:
            await LeaderboardAggregator(session).get_leaderboard(uuid4())

        assert exc_info.value.message == "Failed to fetch submissions"
        assert isinstance(exc_info.value.__cause__, OperationalError)
