"""
Unit tests for the scoring engine.
"""

import pytest

from src.stepwise import (
    ItemKind,
    Question,
    ScoringEngine,
    ScoringPolicy,
    SessionDefinition,
    SessionKind,
    SessionRun,
    SessionStatus,
)
from src.stepwise.scoring import percentage, round_half_up


def finished_run(definition, responses=None, completed=None, elapsed=0.0):
    return SessionRun(
        session_id=definition.id,
        current_index=definition.item_count - 1,
        elapsed=elapsed,
        status=SessionStatus.COMPLETED,
        responses=dict(responses or {}),
        completed_exercises=list(completed or []),
    )


@pytest.fixture
def engine():
    return ScoringEngine()


class TestPercentage:
    """Test rounding of the percentage score."""

    def test_rounds_half_up(self):
        assert percentage(1, 8) == 13  # 12.5
        assert percentage(3, 8) == 38  # 37.5

    def test_thirds(self):
        assert percentage(1, 3) == 33
        assert percentage(2, 3) == 67

    def test_bounds(self):
        assert percentage(0, 5) == 0
        assert percentage(5, 5) == 100
        assert percentage(0, 0) == 0

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(2.49) == 2


class TestAssessmentScoring:
    """Test quiz scoring."""

    def test_single_question_pass(self, engine, single_choice_question):
        definition = SessionDefinition(
            id="one", title="One", kind=SessionKind.ASSESSMENT,
            items=(single_choice_question,), pass_threshold=80,
        )
        sheet = engine.score(definition, finished_run(definition, {"q-hydration": 2}))

        assert sheet.score == 100
        assert sheet.passed is True

    def test_all_correct(self, engine, quiz):
        responses = {"q-hydration": 2, "q-toughness": frozenset({0, 1, 2, 4}), "q-overload": True}
        sheet = engine.score(quiz, finished_run(quiz, responses))

        assert sheet.score == 100
        assert sheet.passed is True
        assert sheet.correct_count == 3
        assert sheet.points == 1000
        assert sheet.quality_score is None

    def test_all_wrong(self, engine, quiz):
        responses = {"q-hydration": 1, "q-toughness": frozenset({0, 1}), "q-overload": False}
        sheet = engine.score(quiz, finished_run(quiz, responses))

        assert sheet.score == 0
        assert sheet.passed is False
        assert sheet.correct_count == 0

    def test_missing_responses_count_incorrect(self, engine, quiz):
        sheet = engine.score(quiz, finished_run(quiz, {"q-hydration": 2}))

        assert sheet.score == 33
        assert [o.correct for o in sheet.outcomes] == [True, False, False]
        assert sheet.outcomes[1].response is None

    def test_outcomes_follow_item_order(self, engine, quiz):
        sheet = engine.score(quiz, finished_run(quiz))
        assert [o.item_id for o in sheet.outcomes] == ["q-hydration", "q-toughness", "q-overload"]
        assert sheet.outcomes[0].kind == ItemKind.SINGLE_CHOICE

    @pytest.mark.parametrize("threshold,passed", [(50, True), (51, False)])
    def test_pass_boundary(self, engine, threshold, passed):
        items = tuple(
            Question(id=f"q{i}", prompt="?", kind=ItemKind.TRUE_FALSE, correct=True)
            for i in range(2)
        )
        definition = SessionDefinition(
            id="tf", title="TF", kind=SessionKind.ASSESSMENT, items=items, pass_threshold=threshold
        )
        sheet = engine.score(definition, finished_run(definition, {"q0": True, "q1": False}))

        assert sheet.score == 50
        assert sheet.passed is passed

    def test_custom_points_policy(self, quiz):
        engine = ScoringEngine(ScoringPolicy(points_per_percent=2))
        sheet = engine.score(quiz, finished_run(quiz, {"q-overload": True}))
        assert sheet.points == 66


class TestWorkoutScoring:
    """Test workout scoring."""

    def test_points_of_completed_exercises(self, engine, workout):
        completed = [item.id for item in workout.items]
        sheet = engine.score(workout, finished_run(workout, completed=completed, elapsed=95))

        assert sheet.score == 34
        assert sheet.points == 34
        assert sheet.passed is None
        assert all(o.correct for o in sheet.outcomes)

    def test_unreached_exercises_earn_nothing(self, engine, workout):
        sheet = engine.score(workout, finished_run(workout, completed=["jumping-jacks", "arm-circles"]))

        assert sheet.points == 18
        assert [o.correct for o in sheet.outcomes] == [True, True, False, False]

    def test_quality_is_deterministic(self, engine, workout):
        run = finished_run(workout, completed=["jumping-jacks"], elapsed=47.5)
        assert engine.score(workout, run).quality_score == engine.score(workout, run).quality_score

    @pytest.mark.parametrize(
        "elapsed,quality",
        [(0, 80), (47.5, 90), (95, 100), (300, 100)],
    )
    def test_quality_tracks_time_against_plan(self, engine, workout, elapsed, quality):
        assert engine.quality_score(workout, elapsed) == quality

    def test_quality_floor_is_configurable(self, workout):
        engine = ScoringEngine(ScoringPolicy(quality_floor=60))
        assert engine.quality_score(workout, 0) == 60
