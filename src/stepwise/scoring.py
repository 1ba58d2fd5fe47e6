"""
Scoring Engine.

Turns a finished run into a ScoreSheet:
- Assessments: percentage of questions answered correctly, pass/fail
  against the session's threshold, and reward points.
- Workouts: reward points of completed exercises and a quality score.

Scoring is deterministic for a given definition and final run state.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .items import get_handler
from .items.base import Exercise, Question
from .models import ItemOutcome, SessionDefinition, SessionKind, SessionRun


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (built-in round() is banker's)."""
    return math.floor(value + 0.5)


def percentage(correct: int, total: int) -> int:
    """Integer percentage rounded half up, computed without float error."""
    if total <= 0:
        return 0
    return (200 * correct + total) // (2 * total)


@dataclass(frozen=True)
class ScoringPolicy:
    """Tunable constants for scoring."""

    points_per_percent: int = 10
    quality_floor: int = 80


@dataclass(frozen=True)
class ScoreSheet:
    """Output of the scoring engine for one run."""

    score: int
    passed: bool | None
    points: int
    outcomes: tuple[ItemOutcome, ...]
    quality_score: int | None = None

    @property
    def correct_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.correct)


class ScoringEngine:
    """Computes per-item correctness and the aggregate outcome of a run."""

    def __init__(self, policy: ScoringPolicy | None = None):
        self.policy = policy or ScoringPolicy()

    def score(self, definition: SessionDefinition, run: SessionRun) -> ScoreSheet:
        outcomes = tuple(self._outcome(item, run) for item in definition.items)
        if definition.kind == SessionKind.ASSESSMENT:
            return self._score_assessment(definition, outcomes)
        return self._score_workout(definition, run, outcomes)

    def _outcome(self, item: Question | Exercise, run: SessionRun) -> ItemOutcome:
        match item:
            case Question():
                # A question never answered is simply incorrect
                response = run.responses.get(item.id)
                correct = get_handler(item.kind).is_correct(item, response)
            case Exercise():
                response = item.id in run.completed_exercises
                correct = response
            case _:
                raise TypeError(f"Unsupported item type: {type(item).__name__}")
        return ItemOutcome(item_id=item.id, kind=item.kind, response=response, correct=correct)

    def _score_assessment(
        self, definition: SessionDefinition, outcomes: tuple[ItemOutcome, ...]
    ) -> ScoreSheet:
        correct = sum(1 for outcome in outcomes if outcome.correct)
        score = percentage(correct, len(outcomes))
        return ScoreSheet(
            score=score,
            passed=score >= definition.pass_threshold,
            points=score * self.policy.points_per_percent,
            outcomes=outcomes,
        )

    def _score_workout(
        self,
        definition: SessionDefinition,
        run: SessionRun,
        outcomes: tuple[ItemOutcome, ...],
    ) -> ScoreSheet:
        completed = set(run.completed_exercises)
        points = sum(item.points for item in definition.items if item.id in completed)
        return ScoreSheet(
            score=points,
            passed=None,
            points=points,
            outcomes=outcomes,
            quality_score=self.quality_score(definition, run.elapsed),
        )

    def quality_score(self, definition: SessionDefinition, elapsed: float) -> int:
        """
        Placeholder quality metric for workouts.

        There is no real performance signal, so this only measures time
        spent against the planned duration and maps it onto
        [quality_floor, 100]. Do not read it as a form or effort score.
        """
        floor = self.policy.quality_floor
        target = definition.target_duration_seconds
        if target <= 0:
            return 100
        ratio = min(1.0, max(0.0, elapsed) / target)
        return floor + round_half_up((100 - floor) * ratio)
