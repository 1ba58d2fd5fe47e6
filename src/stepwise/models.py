"""
Session data model.

Design:
- SessionDefinition: immutable content of one quiz or workout
- SessionRun: mutable progress of one run, owned by a single controller
- CompletionRecord: immutable outcome of a finished run
- Aggregates: derived totals recomputed after every completion
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any

from .items import ItemKind, get_handler
from .items.base import Exercise, Item, Question


class SessionKind(str, Enum):
    """What a session is made of."""

    ASSESSMENT = "assessment"  # Questions only, scored 0-100
    WORKOUT = "workout"  # Exercises only, scored in reward points


class SessionStatus(str, Enum):
    """Lifecycle of a SessionRun."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    PAUSED = "paused"
    COMPLETED = "completed"
    ABANDONED = "abandoned"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionStatus.COMPLETED, SessionStatus.ABANDONED)


@dataclass(frozen=True)
class SessionDefinition:
    """An ordered sequence of items presented as one session."""

    id: str
    title: str
    kind: SessionKind
    items: tuple[Item, ...]
    pass_threshold: int | None = None
    time_limit_seconds: int | None = None

    # Catalog metadata, display only
    description: str = ""
    category: str = ""
    difficulty: str = ""
    calories: int = 0

    def __post_init__(self):
        kind = SessionKind(self.kind)
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "items", tuple(self.items))

        expected = Question if kind == SessionKind.ASSESSMENT else Exercise
        seen: set[str] = set()
        for item in self.items:
            if not isinstance(item, expected):
                raise ValueError(
                    f"{kind.value} {self.id!r} cannot contain {type(item).__name__} {item.id!r}"
                )
            if item.id in seen:
                raise ValueError(f"Duplicate item id {item.id!r} in session {self.id!r}")
            seen.add(item.id)
            handler = get_handler(item.kind)
            if handler is None or not handler.validate(item):
                raise ValueError(f"Item {item.id!r} is not a valid {item.kind.value} item")

        if kind == SessionKind.ASSESSMENT:
            if self.pass_threshold is None or not 0 <= self.pass_threshold <= 100:
                raise ValueError(f"Assessment {self.id!r} needs a pass threshold in 0..100")
        elif self.pass_threshold is not None:
            raise ValueError(f"Workout {self.id!r} cannot have a pass threshold")

        if self.time_limit_seconds is not None and self.time_limit_seconds <= 0:
            raise ValueError(f"Time limit for {self.id!r} must be positive")

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def target_duration_seconds(self) -> int:
        """Sum of exercise durations (0 for assessments)."""
        return sum(item.duration_seconds for item in self.items if isinstance(item, Exercise))

    def index_of(self, item_id: str) -> int | None:
        for index, item in enumerate(self.items):
            if item.id == item_id:
                return index
        return None


@dataclass
class SessionRun:
    """Progress of one run through a SessionDefinition."""

    session_id: str
    started_at: datetime | None = None
    current_index: int = 0
    elapsed: float = 0.0
    status: SessionStatus = SessionStatus.NOT_STARTED
    responses: dict[str, Any] = field(default_factory=dict)
    completed_exercises: list[str] = field(default_factory=list)
    time_expired: bool = False

    @property
    def paused(self) -> bool:
        return self.status == SessionStatus.PAUSED


@dataclass(frozen=True)
class Progress:
    """Progress signal emitted after every state-changing call."""

    current_index: int
    item_count: int
    elapsed_seconds: float
    status: SessionStatus

    @property
    def fraction(self) -> float:
        """Share of items already passed, 0.0-1.0."""
        if self.status == SessionStatus.COMPLETED:
            return 1.0
        return self.current_index / self.item_count if self.item_count else 0.0


def _dump_response(response: Any) -> Any:
    if isinstance(response, frozenset):
        return sorted(response)
    return response


def _load_response(kind: ItemKind, response: Any) -> Any:
    if kind == ItemKind.MULTI_SELECT and response is not None:
        return frozenset(response)
    return response


@dataclass(frozen=True)
class ItemOutcome:
    """Per-item breakdown entry of a CompletionRecord."""

    item_id: str
    kind: ItemKind
    response: Any
    correct: bool

    def to_dict(self) -> dict:
        return {
            "itemId": self.item_id,
            "kind": self.kind.value,
            "response": _dump_response(self.response),
            "correct": self.correct,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ItemOutcome:
        kind = ItemKind(data["kind"])
        return cls(
            item_id=data["itemId"],
            kind=kind,
            response=_load_response(kind, data.get("response")),
            correct=bool(data["correct"]),
        )


@dataclass(frozen=True)
class CompletionRecord:
    """Immutable outcome of one finished session."""

    session_id: str
    session_kind: SessionKind
    title: str
    completed_at: datetime
    score: int
    passed: bool | None
    time_spent_seconds: int
    items: tuple[ItemOutcome, ...]
    points: int = 0
    quality_score: int | None = None
    time_expired: bool = False

    @property
    def completed_on(self) -> date:
        return self.completed_at.date()

    @property
    def correct_count(self) -> int:
        return sum(1 for outcome in self.items if outcome.correct)

    @property
    def total_items(self) -> int:
        return len(self.items)

    def to_dict(self) -> dict:
        """Convert to the persisted JSON schema."""
        return {
            "sessionId": self.session_id,
            "sessionKind": self.session_kind.value,
            "title": self.title,
            "date": self.completed_at.isoformat(),
            "score": self.score,
            "passed": self.passed,
            "timeSpentSeconds": self.time_spent_seconds,
            "points": self.points,
            "qualityScore": self.quality_score,
            "timeExpired": self.time_expired,
            "perItem": [outcome.to_dict() for outcome in self.items],
        }

    @classmethod
    def from_dict(cls, data: dict) -> CompletionRecord:
        return cls(
            session_id=data["sessionId"],
            session_kind=SessionKind(data["sessionKind"]),
            title=data.get("title", ""),
            completed_at=datetime.fromisoformat(data["date"]),
            score=int(data["score"]),
            passed=data.get("passed"),
            time_spent_seconds=int(data["timeSpentSeconds"]),
            items=tuple(ItemOutcome.from_dict(entry) for entry in data.get("perItem", [])),
            points=int(data.get("points", 0)),
            quality_score=data.get("qualityScore"),
            time_expired=bool(data.get("timeExpired", False)),
        )


@dataclass
class Aggregates:
    """Totals derived from the full completion history."""

    best_scores: dict[str, int] = field(default_factory=dict)
    completed: set[str] = field(default_factory=set)
    passed: set[str] = field(default_factory=set)
    streak: int = 0
    last_completed_on: date | None = None
    total_points: int = 0
    points_per_level: int = 50
    average_score: float | None = None

    @property
    def level(self) -> int:
        return self.total_points // self.points_per_level + 1

    @property
    def level_progress(self) -> float:
        """Progress towards the next level, 0.0-1.0."""
        return (self.total_points % self.points_per_level) / self.points_per_level

    def best_score(self, session_id: str) -> int | None:
        return self.best_scores.get(session_id)

    def to_dict(self) -> dict:
        return {
            "bestScores": dict(self.best_scores),
            "completed": sorted(self.completed),
            "passed": sorted(self.passed),
            "streak": self.streak,
            "lastCompletedOn": self.last_completed_on.isoformat() if self.last_completed_on else None,
            "totalPoints": self.total_points,
            "pointsPerLevel": self.points_per_level,
            "averageScore": self.average_score,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Aggregates:
        last = data.get("lastCompletedOn")
        return cls(
            best_scores={k: int(v) for k, v in data.get("bestScores", {}).items()},
            completed=set(data.get("completed", [])),
            passed=set(data.get("passed", [])),
            streak=int(data.get("streak", 0)),
            last_completed_on=date.fromisoformat(last) if last else None,
            total_points=int(data.get("totalPoints", 0)),
            points_per_level=int(data.get("pointsPerLevel", 50)),
            average_score=data.get("averageScore"),
        )


@dataclass(frozen=True)
class SessionResult:
    """Completion signal: the finished record plus updated aggregates."""

    record: CompletionRecord
    aggregates: Aggregates
