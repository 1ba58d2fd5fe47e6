"""
Unit tests for the completion recorder and aggregates.
"""

from datetime import date

import pytest

from src.stepwise import (
    CompletionRecorder,
    InMemoryResultsRepository,
    ScoringEngine,
    SessionRun,
    SessionStatus,
)
from src.stepwise.recorder import next_streak


def complete(definition, responses=None, elapsed=60.0):
    run = SessionRun(
        session_id=definition.id,
        current_index=definition.item_count - 1,
        elapsed=elapsed,
        status=SessionStatus.COMPLETED,
        responses=dict(responses or {}),
        completed_exercises=[item.id for item in definition.items if item.kind.value == "exercise"],
    )
    return run, ScoringEngine().score(definition, run)


ALL_RIGHT = {"q-hydration": 2, "q-toughness": frozenset({0, 1, 2, 4}), "q-overload": True}
ONE_RIGHT = {"q-hydration": 2}


@pytest.fixture
def recorder(repository, clock):
    return CompletionRecorder(repository, now=clock)


class TestNextStreak:
    """Test the daily streak policy."""

    def test_first_completion(self):
        assert next_streak(0, None, date(2025, 8, 28)) == (1, date(2025, 8, 28))

    def test_same_day_keeps_streak(self):
        assert next_streak(3, date(2025, 8, 28), date(2025, 8, 28)) == (3, date(2025, 8, 28))

    def test_next_day_increments(self):
        assert next_streak(3, date(2025, 8, 28), date(2025, 8, 29)) == (4, date(2025, 8, 29))

    def test_gap_resets(self):
        assert next_streak(3, date(2025, 8, 28), date(2025, 8, 30)) == (1, date(2025, 8, 30))

    def test_month_boundary(self):
        assert next_streak(2, date(2025, 8, 31), date(2025, 9, 1)) == (3, date(2025, 9, 1))

    def test_earlier_day_is_ignored(self):
        assert next_streak(5, date(2025, 8, 28), date(2025, 8, 20)) == (5, date(2025, 8, 28))


class TestRecord:
    """Test building and storing records."""

    def test_record_fields(self, recorder, quiz, clock):
        run, sheet = complete(quiz, ALL_RIGHT, elapsed=754.4)
        result = recorder.record(quiz, run, sheet)
        record = result.record

        assert record.session_id == "nutrition-quiz"
        assert record.completed_at == clock.current
        assert record.score == 100
        assert record.passed is True
        assert record.time_spent_seconds == 754
        assert record.correct_count == 3
        assert record.total_items == 3

    def test_refuses_unfinished_run(self, recorder, quiz):
        run, sheet = complete(quiz)
        run.status = SessionStatus.ABANDONED
        with pytest.raises(ValueError):
            recorder.record(quiz, run, sheet)

    def test_retake_keeps_both_records(self, recorder, repository, quiz, clock):
        first = recorder.record(quiz, *complete(quiz, ALL_RIGHT)).record
        clock.advance(hours=1)
        second = recorder.record(quiz, *complete(quiz, ONE_RIGHT)).record

        history = repository.history("nutrition-quiz")
        assert history == [second, first]
        assert repository.load_aggregates().best_score("nutrition-quiz") == 100

    def test_best_score_is_max_of_history(self, recorder, quiz):
        recorder.record(quiz, *complete(quiz, ONE_RIGHT))
        result = recorder.record(quiz, *complete(quiz, ALL_RIGHT))
        result = recorder.record(quiz, *complete(quiz, ONE_RIGHT))

        assert result.aggregates.best_score("nutrition-quiz") == 100

    def test_completed_set_is_idempotent(self, recorder, quiz, workout):
        recorder.record(quiz, *complete(quiz, ONE_RIGHT))
        recorder.record(quiz, *complete(quiz, ONE_RIGHT))
        result = recorder.record(workout, *complete(workout))

        assert result.aggregates.completed == {"nutrition-quiz", "morning-boost"}

    def test_passed_set_only_for_passing_runs(self, recorder, quiz):
        result = recorder.record(quiz, *complete(quiz, ONE_RIGHT))
        assert result.aggregates.passed == set()

        result = recorder.record(quiz, *complete(quiz, ALL_RIGHT))
        assert result.aggregates.passed == {"nutrition-quiz"}

    def test_streak_across_days(self, recorder, quiz, clock):
        assert recorder.record(quiz, *complete(quiz)).aggregates.streak == 1
        clock.advance(hours=2)
        assert recorder.record(quiz, *complete(quiz)).aggregates.streak == 1
        clock.advance(days=1)
        assert recorder.record(quiz, *complete(quiz)).aggregates.streak == 2
        clock.advance(days=3)
        assert recorder.record(quiz, *complete(quiz)).aggregates.streak == 1

    def test_points_level_and_average(self, recorder, quiz, workout):
        recorder.record(workout, *complete(workout))  # 34 points
        recorder.record(quiz, *complete(quiz, ONE_RIGHT))  # 33% -> 330 points
        result = recorder.record(quiz, *complete(quiz, ALL_RIGHT))  # 100% -> 1000 points

        aggregates = result.aggregates
        assert aggregates.total_points == 1364
        assert aggregates.level == 1364 // 50 + 1
        assert aggregates.level_progress == pytest.approx(14 / 50)
        assert aggregates.average_score == 66.5

    def test_history_most_recent_first(self, recorder, repository, quiz, workout):
        recorder.record(quiz, *complete(quiz))
        recorder.record(workout, *complete(workout))

        assert [r.session_id for r in repository.history()] == ["morning-boost", "nutrition-quiz"]


class TestInMemoryResultsRepository:
    """Test the in-memory repository."""

    def test_starts_empty(self):
        repository = InMemoryResultsRepository(points_per_level=100)
        assert repository.history() == []
        assert repository.load_aggregates().streak == 0
        assert repository.load_aggregates().level == 1
        assert repository.load_aggregates().points_per_level == 100
