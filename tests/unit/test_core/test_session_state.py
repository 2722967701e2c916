"""
Unit tests for the test session state machine.
"""

from dataclasses import FrozenInstanceError, replace
from datetime import timedelta

import pytest

from quizdrill.core.exceptions import ValidationError
from quizdrill.core.session import (
    SessionState,
    TestSession,
    finish_session,
    missing_question_ids,
    navigate,
    next_question,
    previous_question,
    record_answer,
    resolve_current_question,
    retake_session,
    session_state,
    start_session,
)
from quizdrill.core.types import QuestionSource


class TestStartSession:
    """Test cases for start_session."""

    def test_fresh_session(self, fixed_now):
        session = start_session(["a", "b", "c"], now=fixed_now)

        assert session.id.startswith("ts_")
        assert session.question_ids == ("a", "b", "c")
        assert session.answers_by_question == {}
        assert session.current_index == 0
        assert session.started_at == fixed_now
        assert session.finished_at is None
        assert session.source == QuestionSource.MANUAL
        assert session.state == SessionState.IN_PROGRESS

    def test_ids_are_snapshotted(self):
        ids = ["a", "b"]
        session = start_session(ids)
        ids.append("c")

        assert session.question_ids == ("a", "b")

    def test_each_session_gets_new_id(self):
        assert start_session(["a"]).id != start_session(["a"]).id

    def test_state_of_empty_slot(self):
        assert session_state(None) == SessionState.NOT_STARTED


class TestAnswersAndNavigation:
    """Test cases for record_answer and navigation."""

    @pytest.fixture
    def session(self, fixed_now):
        return start_session(["a", "b", "c"], now=fixed_now)

    def test_record_answer_keeps_raw_text(self, session):
        updated = record_answer(session, "a", "  Paris  ")

        assert updated.answer_for("a") == "  Paris  "
        assert session.answer_for("a") == ""

    def test_record_answer_overwrites(self, session):
        session = record_answer(session, "a", "first")
        session = record_answer(session, "a", "second")
        assert session.answer_for("a") == "second"

    @pytest.mark.parametrize("target,expected", [(10, 2), (-5, 0), (1, 1), (2, 2)])
    def test_navigate_clamps(self, session, target, expected):
        assert navigate(session, target).current_index == expected

    def test_navigate_empty_session(self):
        assert navigate(start_session([]), 3).current_index == 0

    def test_answer_survives_navigation(self, session):
        session = record_answer(session, "a", "Paris")
        session = navigate(session, 2)
        session = navigate(session, 0)

        assert session.current_question_id == "a"
        assert session.answer_for("a") == "Paris"

    def test_draft_saved_before_moving(self, session):
        session = next_question(session, draft="Paris")

        assert session.current_index == 1
        assert session.answer_for("a") == "Paris"

    def test_no_draft_leaves_answer(self, session):
        session = record_answer(session, "a", "Paris")
        session = next_question(session)
        assert session.answer_for("a") == "Paris"

    def test_previous_at_start_stays(self, session):
        moved = previous_question(session, draft="x")

        assert moved.current_index == 0
        assert moved.answer_for("a") == "x"

    def test_next_at_end_stays(self, session):
        session = navigate(session, 2)
        assert next_question(session).current_index == 2


class TestFinishAndRetake:
    """Test cases for finish_session and retake_session."""

    def test_finish_records_draft_and_timestamp(self, fixed_now):
        session = navigate(start_session(["a", "b"], now=fixed_now), 1)
        finished_at = fixed_now + timedelta(minutes=5)

        finished = finish_session(session, final_draft="Jupiter", now=finished_at)

        assert finished.is_finished
        assert finished.state == SessionState.FINISHED
        assert finished.finished_at == finished_at
        assert finished.answer_for("b") == "Jupiter"
        assert finished.current_index == 1
        assert finished.question_ids == ("a", "b")
        assert finished.duration_seconds == 300

    def test_finish_twice_keeps_first_timestamp(self, fixed_now):
        first = finish_session(start_session(["a"], now=fixed_now), now=fixed_now + timedelta(seconds=10))
        second = finish_session(first, final_draft="late", now=fixed_now + timedelta(hours=1))

        assert second.finished_at == first.finished_at
        assert second.answer_for("a") == ""

    def test_finished_session_ignores_answers(self, fixed_now):
        finished = finish_session(start_session(["a", "b"], now=fixed_now), now=fixed_now)

        assert record_answer(finished, "a", "Paris").answer_for("a") == ""

        moved = next_question(finished, draft="Paris")
        assert moved.current_index == 1
        assert moved.answer_for("a") == ""

    def test_retake(self, fixed_now):
        original = record_answer(start_session(["a", "b"], source=QuestionSource.DEMO, now=fixed_now), "a", "x")
        original = finish_session(navigate(original, 1), now=fixed_now)

        retake = retake_session(original, now=fixed_now + timedelta(days=1))

        assert retake.id != original.id
        assert retake.question_ids == original.question_ids
        assert retake.source == QuestionSource.DEMO
        assert retake.answers_by_question == {}
        assert retake.current_index == 0
        assert retake.finished_at is None


class TestBankResolution:
    """Test cases for resolving session ids against the bank."""

    def test_resolve_current_question(self, sample_index):
        session = start_session(["q2", "q1"])
        assert resolve_current_question(session, sample_index).id == "q2"

    def test_missing_question_resolves_to_none(self, sample_index):
        session = start_session(["deleted", "q1"])

        assert resolve_current_question(session, sample_index) is None
        assert missing_question_ids(session, sample_index) == ("deleted",)

    def test_empty_session_has_no_current_question(self, sample_index):
        session = start_session([])

        assert session.current_question_id is None
        assert resolve_current_question(session, sample_index) is None


class TestSerialization:
    """Test cases for TestSession.to_dict / from_dict."""

    def test_unfinished_session_uses_empty_sentinel(self, fixed_now):
        data = start_session(["a"], now=fixed_now).to_dict()

        assert data["finishedAtIso"] == ""
        assert data["startedAtIso"] == fixed_now.isoformat()
        assert data["questionIds"] == ["a"]
        assert data["currentIndex"] == 0

    def test_round_trip(self, fixed_now):
        session = finish_session(record_answer(start_session(["a", "b"], now=fixed_now), "a", "x"),
                                 now=fixed_now + timedelta(seconds=42))

        assert TestSession.from_dict(session.to_dict()) == session

    def test_out_of_range_index_is_clamped(self, fixed_now):
        data = start_session(["a", "b"], now=fixed_now).to_dict()
        data["currentIndex"] = 9

        assert TestSession.from_dict(data).current_index == 1

    @pytest.mark.parametrize("mutate", [
        lambda d: d.pop("questionIds"),
        lambda d: d.update(questionIds="a,b"),
        lambda d: d.update(answersByQuestion=["x"]),
        lambda d: d.update(startedAtIso="yesterday"),
        lambda d: d.update(source="somewhere"),
    ])
    def test_malformed_records(self, fixed_now, mutate):
        data = start_session(["a"], now=fixed_now).to_dict()
        mutate(data)

        with pytest.raises(ValidationError):
            TestSession.from_dict(data)

    def test_non_string_answers_are_dropped(self, fixed_now):
        data = start_session(["a", "b", "c"], now=fixed_now).to_dict()
        data["answersByQuestion"] = {"a": None, "b": 42, "c": "Paris"}

        session = TestSession.from_dict(data)

        assert session.answers_by_question == {"c": "Paris"}
        assert session.answer_for("a") == ""
        assert finish_session(session, now=fixed_now).answer_for("a") == ""

    @pytest.mark.parametrize("started", ["2024-01-01T12:00:00", "2024-01-01T12:00:00Z"])
    def test_naive_and_zulu_timestamps_read_as_utc(self, fixed_now, started):
        data = start_session(["a"], now=fixed_now).to_dict()
        data["startedAtIso"] = started

        session = TestSession.from_dict(data)
        finished = finish_session(session, now=fixed_now + timedelta(seconds=30))

        assert session.started_at == fixed_now
        assert finished.duration_seconds == 30

    def test_naive_finish_timestamp(self, fixed_now):
        data = finish_session(start_session(["a"], now=fixed_now), now=fixed_now + timedelta(seconds=5)).to_dict()
        data["startedAtIso"] = "2024-01-01T12:00:00"
        data["finishedAtIso"] = "2024-01-01T12:00:05"

        assert TestSession.from_dict(data).duration_seconds == 5

    def test_not_a_mapping(self):
        with pytest.raises(ValidationError):
            TestSession.from_dict(["not", "a", "session"])

    def test_sessions_are_immutable(self, fixed_now):
        session = start_session(["a"], now=fixed_now)
        later = replace(session, current_index=0)

        assert later == session
        with pytest.raises(FrozenInstanceError):
            session.current_index = 3

    def test_sessions_are_hashable(self, fixed_now):
        session = record_answer(start_session(["a"], now=fixed_now), "a", "x")

        assert hash(session) == hash(replace(session))
        assert len({session, replace(session)}) == 1
