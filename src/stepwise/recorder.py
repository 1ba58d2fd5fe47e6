"""
Completion Recorder.

Archives finished runs as CompletionRecords in an append-only history
and recomputes the derived aggregates (best scores, completed set,
streak, points and level).
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Callable, Protocol

from loguru import logger

from .models import (
    Aggregates,
    CompletionRecord,
    SessionDefinition,
    SessionKind,
    SessionRun,
    SessionResult,
    SessionStatus,
)
from .scoring import ScoreSheet, round_half_up


class ResultsRepository(Protocol):
    """Storage for completion history and aggregates."""

    def append(self, record: CompletionRecord, aggregates: Aggregates) -> None:
        """Add a record together with the aggregates it produced.

        Existing records are never modified. Either both are stored or
        neither is.
        """
        ...

    def history(self, session_id: str | None = None) -> list[CompletionRecord]:
        """Records, most recent first, optionally for one session."""
        ...

    def load_aggregates(self) -> Aggregates:
        ...


class InMemoryResultsRepository:
    """Results repository that lives only as long as the process."""

    def __init__(self, points_per_level: int = 50):
        self._records: list[CompletionRecord] = []
        self._aggregates = Aggregates(points_per_level=points_per_level)

    def append(self, record: CompletionRecord, aggregates: Aggregates) -> None:
        self._records.insert(0, record)
        self._aggregates = aggregates

    def history(self, session_id: str | None = None) -> list[CompletionRecord]:
        return [r for r in self._records if session_id is None or r.session_id == session_id]

    def load_aggregates(self) -> Aggregates:
        return self._aggregates


def next_streak(streak: int, last_on: date | None, today: date) -> tuple[int, date | None]:
    """
    Advance the daily streak for a completion on `today`.

    - first completion ever: 1
    - same day as the last completion: unchanged
    - the day right after the last completion: +1
    - any longer gap: back to 1
    - a day before the last completion: unchanged
    """
    if last_on is None:
        return 1, today
    if today == last_on:
        return max(streak, 1), last_on
    if today == last_on + timedelta(days=1):
        return streak + 1, today
    if today < last_on:
        return streak, last_on
    return 1, today


def compute_aggregates(
    history: list[CompletionRecord],
    previous: Aggregates,
    latest: CompletionRecord,
    points_per_level: int = 50,
) -> Aggregates:
    """Aggregates after `latest` was added; `history` already includes it."""
    best_scores: dict[str, int] = {}
    for record in history:
        best = best_scores.get(record.session_id)
        if best is None or record.score > best:
            best_scores[record.session_id] = record.score

    passed = set(previous.passed)
    if latest.passed:
        passed.add(latest.session_id)

    assessment_scores = [r.score for r in history if r.session_kind == SessionKind.ASSESSMENT]
    average = (
        round(sum(assessment_scores) / len(assessment_scores), 1) if assessment_scores else None
    )

    streak, last_on = next_streak(previous.streak, previous.last_completed_on, latest.completed_on)

    return Aggregates(
        best_scores=best_scores,
        completed=previous.completed | {latest.session_id},
        passed=passed,
        streak=streak,
        last_completed_on=last_on,
        total_points=sum(r.points for r in history),
        points_per_level=points_per_level,
        average_score=average,
    )


class CompletionRecorder:
    """Builds records from finished runs and keeps aggregates current."""

    def __init__(
        self,
        repository: ResultsRepository,
        points_per_level: int = 50,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.repository = repository
        self.points_per_level = points_per_level
        self._now = now

    def build_record(
        self, definition: SessionDefinition, run: SessionRun, sheet: ScoreSheet
    ) -> CompletionRecord:
        if run.status != SessionStatus.COMPLETED:
            raise ValueError(f"Run of {run.session_id!r} is {run.status.value}, not completed")
        return CompletionRecord(
            session_id=definition.id,
            session_kind=definition.kind,
            title=definition.title,
            completed_at=self._now(),
            score=sheet.score,
            passed=sheet.passed,
            time_spent_seconds=round_half_up(run.elapsed),
            items=sheet.outcomes,
            points=sheet.points,
            quality_score=sheet.quality_score,
            time_expired=run.time_expired,
        )

    def store(self, record: CompletionRecord) -> SessionResult:
        """Append a built record and return it with refreshed aggregates."""
        history = [record, *self.repository.history()]
        aggregates = compute_aggregates(
            history, self.repository.load_aggregates(), record, self.points_per_level
        )
        self.repository.append(record, aggregates)
        logger.info(
            f"Recorded {record.session_id!r}: score={record.score} "
            f"best={aggregates.best_score(record.session_id)} streak={aggregates.streak}"
        )
        return SessionResult(record=record, aggregates=aggregates)

    def record(
        self, definition: SessionDefinition, run: SessionRun, sheet: ScoreSheet
    ) -> SessionResult:
        return self.store(self.build_record(definition, run, sheet))
