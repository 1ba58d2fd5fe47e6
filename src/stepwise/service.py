"""
Session service: the facade the presentation layer talks to.

Wires a catalog, a controller and a completion recorder together:
- start_session() pulls the definition from the catalog
- every state change is forwarded to progress listeners
- completion builds a record, stores it and notifies result listeners

Persistence failures never block the engine. A record that cannot be
written is kept in `pending` until flush_pending() succeeds.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Callable, TYPE_CHECKING

from loguru import logger

from .catalog import SessionCatalog, default_catalog, load_catalog
from .clock import MonotonicTicker, TickSource
from .controller import ProgressListener, SessionController
from .models import (
    Aggregates,
    CompletionRecord,
    Progress,
    SessionDefinition,
    SessionResult,
    SessionRun,
)
from .recorder import CompletionRecorder, ResultsRepository
from .results_store import JsonResultsRepository
from .scoring import ScoreSheet, ScoringEngine, ScoringPolicy

if TYPE_CHECKING:
    from config import Settings

ResultListener = Callable[[SessionResult], None]


class SessionService:
    """Runs sessions from a catalog and records their outcomes."""

    def __init__(
        self,
        catalog: SessionCatalog,
        repository: ResultsRepository,
        scoring: ScoringEngine | None = None,
        ticker: TickSource | None = None,
        enforce_time_limit: bool = False,
        points_per_level: int = 50,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.catalog = catalog
        self.repository = repository
        self.controller = SessionController(
            scoring=scoring,
            ticker=ticker,
            enforce_time_limit=enforce_time_limit,
            now=now,
        )
        self.recorder = CompletionRecorder(repository, points_per_level=points_per_level, now=now)
        self.pending: list[CompletionRecord] = []
        self.last_result: SessionResult | None = None
        self._result_listeners: list[ResultListener] = []

        self.controller.add_completion_listener(self._on_completed)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "SessionService":
        """Build a service with file-backed results and the configured catalog."""
        if settings.catalog_file:
            catalog = load_catalog(Path(settings.catalog_file))
        else:
            catalog = default_catalog()
        scoring_config = settings.get_scoring_config()
        return cls(
            catalog=catalog,
            repository=JsonResultsRepository(
                Path(settings.results_dir).expanduser(),
                points_per_level=scoring_config["points_per_level"],
            ),
            scoring=ScoringEngine(
                ScoringPolicy(
                    points_per_percent=scoring_config["points_per_percent"],
                    quality_floor=scoring_config["quality_floor"],
                )
            ),
            ticker=MonotonicTicker(settings.tick_interval_seconds),
            enforce_time_limit=settings.enforce_time_limit,
            points_per_level=scoring_config["points_per_level"],
        )

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_progress_listener(self, listener: ProgressListener) -> None:
        self.controller.add_progress_listener(listener)

    def add_result_listener(self, listener: ResultListener) -> None:
        self._result_listeners.append(listener)

    # ------------------------------------------------------------------
    # Inbound operations
    # ------------------------------------------------------------------

    def start_session(self, session_id: str) -> SessionRun:
        definition = self.catalog.get_session_definition(session_id)
        self.last_result = None
        return self.controller.start(definition)

    def submit_response(self, item_id: str, response: Any) -> Any:
        return self.controller.submit(item_id, response)

    def toggle_option(self, item_id: str, option_index: int) -> frozenset[int]:
        return self.controller.toggle(item_id, option_index)

    def advance(self) -> SessionResult | None:
        """Advance; returns the session result when this finished the run."""
        if self.controller.advance() is None:
            return None
        return self.last_result

    def pause(self) -> None:
        self.controller.pause()

    def resume(self) -> None:
        self.controller.resume()

    def abandon(self) -> None:
        self.controller.abandon()

    def tick(self, delta_seconds: float) -> None:
        self.controller.tick(delta_seconds)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def definition(self) -> SessionDefinition | None:
        return self.controller.definition

    def progress(self) -> Progress:
        return self.controller.progress()

    def history(self, session_id: str | None = None) -> list[CompletionRecord]:
        return self.repository.history(session_id)

    def aggregates(self) -> Aggregates:
        return self.repository.load_aggregates()

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------

    def _on_completed(self, definition: SessionDefinition, run: SessionRun, sheet: ScoreSheet) -> None:
        record = self.recorder.build_record(definition, run, sheet)
        if self.pending:
            # Keep history order: nothing new is stored ahead of older pending records
            self.pending.append(record)
            self.flush_pending()
            result = SessionResult(record=record, aggregates=self.aggregates())
        else:
            try:
                result = self.recorder.store(record)
            except OSError as e:
                logger.warning(f"Could not save result for {record.session_id!r}: {e}. Kept as pending.")
                self.pending.append(record)
                result = SessionResult(record=record, aggregates=self.aggregates())

        self.last_result = result
        for listener in self._result_listeners:
            listener(result)

    def flush_pending(self) -> int:
        """Retry storing pending records in order. Returns how many were stored."""
        stored = 0
        while self.pending:
            record = self.pending[0]
            try:
                self.recorder.store(record)
            except OSError as e:
                logger.warning(f"Still cannot save {len(self.pending)} pending result(s): {e}")
                break
            self.pending.pop(0)
            stored += 1
        return stored
