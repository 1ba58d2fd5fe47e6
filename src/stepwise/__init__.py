"""
Stepwise: stepped session engine for quizzes and workouts.

Components:
- items: Item kinds (single choice, multi select, true/false, exercise) and their handlers
- responses: Response capture and validation for the current item
- scoring: Scores finished runs
- controller: Session state machine (start, pause, resume, advance, abandon, tick)
- recorder / results_store: Completion history and aggregates
- catalog: Session definitions
- service: Facade wiring everything together
"""

from .errors import (
    EmptySession,
    InvalidTransition,
    OutOfRangeResponse,
    StepwiseError,
    UnknownItem,
    UnknownSession,
)
from .items import HANDLERS, Exercise, ItemKind, Question, get_handler
from .models import (
    Aggregates,
    CompletionRecord,
    ItemOutcome,
    Progress,
    SessionDefinition,
    SessionKind,
    SessionResult,
    SessionRun,
    SessionStatus,
)
from .scoring import ScoreSheet, ScoringEngine, ScoringPolicy
from .clock import ManualTicker, MonotonicTicker
from .controller import SessionController
from .recorder import CompletionRecorder, InMemoryResultsRepository
from .results_store import JsonResultsRepository
from .catalog import InMemorySessionCatalog, default_catalog, load_catalog
from .service import SessionService

__all__ = [
    "StepwiseError",
    "InvalidTransition",
    "UnknownItem",
    "OutOfRangeResponse",
    "EmptySession",
    "UnknownSession",
    "ItemKind",
    "HANDLERS",
    "get_handler",
    "Question",
    "Exercise",
    "SessionDefinition",
    "SessionKind",
    "SessionStatus",
    "SessionRun",
    "Progress",
    "ItemOutcome",
    "CompletionRecord",
    "Aggregates",
    "SessionResult",
    "ScoringEngine",
    "ScoringPolicy",
    "ScoreSheet",
    "ManualTicker",
    "MonotonicTicker",
    "SessionController",
    "CompletionRecorder",
    "InMemoryResultsRepository",
    "JsonResultsRepository",
    "InMemorySessionCatalog",
    "default_catalog",
    "load_catalog",
    "SessionService",
]
