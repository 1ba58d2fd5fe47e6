"""
Session Controller: the state machine behind every quiz and workout run.

    NOT_STARTED -> IN_PROGRESS <-> PAUSED -> COMPLETED
    NOT_STARTED / IN_PROGRESS / PAUSED -> ABANDONED

A controller owns at most one live SessionRun. It performs no I/O and
never blocks; elapsed time arrives through tick().
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Callable

from loguru import logger

from .clock import ManualTicker, TickSource
from .errors import EmptySession, InvalidTransition
from .items.base import Exercise, Item
from .models import Progress, SessionDefinition, SessionRun, SessionStatus
from .responses import ResponseCapture
from .scoring import ScoreSheet, ScoringEngine

ProgressListener = Callable[[Progress], None]
CompletionListener = Callable[[SessionDefinition, SessionRun, ScoreSheet], None]


class SessionController:
    """
    Orchestrates traversal, timing, pause/resume and cancellation of a run.

    Listeners:
    - progress listeners get a Progress after every state change
    - completion listeners get (definition, run, score sheet) once, when
      the run completes
    """

    def __init__(
        self,
        scoring: ScoringEngine | None = None,
        ticker: TickSource | None = None,
        enforce_time_limit: bool = False,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.scoring = scoring or ScoringEngine()
        self.ticker = ticker or ManualTicker()
        self.enforce_time_limit = enforce_time_limit
        self._now = now

        self.definition: SessionDefinition | None = None
        self.run: SessionRun | None = None
        self.score_sheet: ScoreSheet | None = None
        self._capture: ResponseCapture | None = None

        self._progress_listeners: list[ProgressListener] = []
        self._completion_listeners: list[CompletionListener] = []

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_progress_listener(self, listener: ProgressListener) -> None:
        self._progress_listeners.append(listener)

    def add_completion_listener(self, listener: CompletionListener) -> None:
        self._completion_listeners.append(listener)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def status(self) -> SessionStatus:
        return self.run.status if self.run else SessionStatus.NOT_STARTED

    @property
    def current_item(self) -> Item | None:
        if self.run is None or self.definition is None:
            return None
        return self.definition.items[self.run.current_index]

    def progress(self) -> Progress:
        if self.run is None or self.definition is None:
            return Progress(0, 0, 0.0, SessionStatus.NOT_STARTED)
        return Progress(
            current_index=self.run.current_index,
            item_count=self.definition.item_count,
            elapsed_seconds=self.run.elapsed,
            status=self.run.status,
        )

    def can_advance(self) -> bool:
        return self.status == SessionStatus.IN_PROGRESS and self._capture.can_advance()

    def _require(self, operation: str, *allowed: SessionStatus) -> SessionRun:
        if self.status not in allowed:
            raise InvalidTransition(operation, self.status.value)
        return self.run

    def _emit_progress(self) -> None:
        progress = self.progress()
        for listener in self._progress_listeners:
            listener(progress)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self, definition: SessionDefinition) -> SessionRun:
        """Begin a fresh run. A previous run must have reached a terminal state."""
        if self.run is not None and not self.run.status.is_terminal:
            raise InvalidTransition("start", self.run.status.value, "a run is already active")
        if definition.item_count == 0:
            raise EmptySession(definition.id)

        self.definition = definition
        self.score_sheet = None
        self.run = SessionRun(
            session_id=definition.id,
            started_at=self._now(),
            status=SessionStatus.IN_PROGRESS,
        )
        self._capture = ResponseCapture(definition, self.run)
        self.ticker.start(self.tick)

        logger.info(
            f"Started {definition.kind.value} {definition.id!r} "
            f"({definition.item_count} items)"
        )
        self._emit_progress()
        return self.run

    def pause(self) -> None:
        run = self._require("pause", SessionStatus.IN_PROGRESS)
        run.status = SessionStatus.PAUSED
        self.ticker.stop()
        logger.info(f"Paused {run.session_id!r} at {run.elapsed:.0f}s")
        self._emit_progress()

    def resume(self) -> None:
        run = self._require("resume", SessionStatus.PAUSED)
        run.status = SessionStatus.IN_PROGRESS
        self.ticker.start(self.tick)
        logger.info(f"Resumed {run.session_id!r}")
        self._emit_progress()

    def submit(self, item_id: str, response: Any) -> Any:
        self._require("submit", SessionStatus.IN_PROGRESS)
        value = self._capture.submit(item_id, response)
        self._emit_progress()
        return value

    def toggle(self, item_id: str, option_index: int) -> frozenset[int]:
        self._require("toggle", SessionStatus.IN_PROGRESS)
        selection = self._capture.toggle(item_id, option_index)
        self._emit_progress()
        return selection

    def set_option(self, item_id: str, option_index: int, selected: bool = True) -> frozenset[int]:
        self._require("select", SessionStatus.IN_PROGRESS)
        selection = self._capture.set_option(item_id, option_index, selected)
        self._emit_progress()
        return selection

    def advance(self) -> ScoreSheet | None:
        """
        Move past the current item.

        Returns the score sheet when this completes the run, else None.
        """
        run = self._require("advance", SessionStatus.IN_PROGRESS)
        item = self.current_item
        if not self._capture.can_advance():
            raise InvalidTransition(
                "advance", run.status.value, f"item {item.id!r} has no response yet"
            )

        if isinstance(item, Exercise):
            run.responses[item.id] = True
            run.completed_exercises.append(item.id)

        if run.current_index == self.definition.item_count - 1:
            return self._finish()

        run.current_index += 1
        self._emit_progress()
        return None

    def abandon(self) -> None:
        """Discard the run from any non-terminal state. No record is produced."""
        if self.run is None:
            self.ticker.stop()
            return
        run = self._require(
            "abandon",
            SessionStatus.NOT_STARTED,
            SessionStatus.IN_PROGRESS,
            SessionStatus.PAUSED,
        )
        self.ticker.stop()
        run.status = SessionStatus.ABANDONED
        run.responses.clear()
        run.completed_exercises.clear()
        logger.info(f"Abandoned {run.session_id!r} at item {run.current_index + 1}")
        self._emit_progress()

    reset = abandon

    def tick(self, delta_seconds: float) -> None:
        """Add elapsed time. Only counts while the run is in progress."""
        if not math.isfinite(delta_seconds) or delta_seconds < 0:
            raise ValueError(f"Tick delta must be a finite non-negative number, got {delta_seconds!r}")
        if self.status != SessionStatus.IN_PROGRESS:
            logger.debug(f"Ignoring tick of {delta_seconds}s while {self.status.value}")
            return

        run = self.run
        run.elapsed += delta_seconds
        limit = self.definition.time_limit_seconds
        if self.enforce_time_limit and limit is not None and run.elapsed >= limit:
            logger.info(f"Time limit of {limit}s reached for {run.session_id!r}")
            run.time_expired = True
            self._finish()
            return
        self._emit_progress()

    def _finish(self) -> ScoreSheet:
        run = self.run
        self.ticker.stop()
        run.status = SessionStatus.COMPLETED
        self.score_sheet = self.scoring.score(self.definition, run)
        logger.info(
            f"Completed {run.session_id!r}: score={self.score_sheet.score} "
            f"passed={self.score_sheet.passed} elapsed={run.elapsed:.0f}s"
        )
        self._emit_progress()
        for listener in self._completion_listeners:
            listener(self.definition, run, self.score_sheet)
        return self.score_sheet
