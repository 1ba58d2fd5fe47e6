"""
Session catalog: where session definitions come from.

The engine never reads content from globals; a SessionCatalog is
passed to whoever needs one. Catalog files are JSON validated with
pydantic before being turned into frozen SessionDefinitions.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Iterable, Literal, Optional, Protocol, Union

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from .errors import UnknownSession
from .items import ItemKind
from .items.base import Exercise, Item, Question
from .models import SessionDefinition, SessionKind


class SessionCatalog(Protocol):
    """Source of session definitions."""

    def get_session_definition(self, session_id: str) -> SessionDefinition:
        """Raises UnknownSession when the id is not in the catalog."""
        ...

    def list_sessions(self, kind: SessionKind | None = None) -> list[SessionDefinition]:
        ...


class InMemorySessionCatalog:
    """Catalog over a fixed set of definitions."""

    def __init__(self, definitions: Iterable[SessionDefinition] = ()):
        self._definitions: dict[str, SessionDefinition] = {}
        for definition in definitions:
            self.add(definition)

    def add(self, definition: SessionDefinition) -> None:
        if definition.id in self._definitions:
            raise ValueError(f"Duplicate session id {definition.id!r}")
        self._definitions[definition.id] = definition

    def get_session_definition(self, session_id: str) -> SessionDefinition:
        try:
            return self._definitions[session_id]
        except KeyError:
            raise UnknownSession(session_id) from None

    def list_sessions(self, kind: SessionKind | None = None) -> list[SessionDefinition]:
        return [d for d in self._definitions.values() if kind is None or d.kind == kind]

    def __len__(self) -> int:
        return len(self._definitions)


# ========================================
# Catalog file schema
# ========================================


class QuestionEntry(BaseModel):
    """A question as written in a catalog file."""

    type: Literal["single_choice", "multi_select", "true_false"]
    id: str
    prompt: str
    options: list[str] = Field(default_factory=list)
    correct: Union[bool, int, list[int]]
    explanation: str = ""

    def to_item(self) -> Question:
        return Question(
            id=self.id,
            prompt=self.prompt,
            kind=ItemKind(self.type),
            options=tuple(self.options),
            correct=frozenset(self.correct) if isinstance(self.correct, list) else self.correct,
            explanation=self.explanation,
        )


class ExerciseEntry(BaseModel):
    """An exercise as written in a catalog file."""

    type: Literal["exercise"]
    id: str
    name: str
    duration_seconds: int = Field(..., gt=0)
    points: int = Field(0, ge=0)
    instructions: str = ""

    def to_item(self) -> Exercise:
        return Exercise(
            id=self.id,
            name=self.name,
            duration_seconds=self.duration_seconds,
            points=self.points,
            instructions=self.instructions,
        )


ItemEntry = Annotated[Union[QuestionEntry, ExerciseEntry], Field(discriminator="type")]


class SessionEntry(BaseModel):
    """One session as written in a catalog file."""

    id: str
    title: str
    kind: SessionKind
    items: list[ItemEntry]
    pass_threshold: Optional[int] = Field(None, ge=0, le=100)
    time_limit_seconds: Optional[int] = Field(None, gt=0)
    description: str = ""
    category: str = ""
    difficulty: str = ""
    calories: int = 0

    def to_definition(self) -> SessionDefinition:
        items: list[Item] = [entry.to_item() for entry in self.items]
        return SessionDefinition(
            id=self.id,
            title=self.title,
            kind=self.kind,
            items=tuple(items),
            pass_threshold=self.pass_threshold,
            time_limit_seconds=self.time_limit_seconds,
            description=self.description,
            category=self.category,
            difficulty=self.difficulty,
            calories=self.calories,
        )


class CatalogFile(BaseModel):
    sessions: list[SessionEntry]


def parse_catalog(data: dict) -> InMemorySessionCatalog:
    """Validate raw catalog data and build a catalog from it."""
    catalog_file = CatalogFile.model_validate(data)
    return InMemorySessionCatalog(entry.to_definition() for entry in catalog_file.sessions)


def load_catalog(path: Path) -> InMemorySessionCatalog:
    """Load a JSON catalog file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    try:
        catalog = parse_catalog(data)
    except ValidationError as e:
        logger.error(f"Invalid catalog file {path}: {e.error_count()} errors")
        raise
    logger.debug(f"Loaded {len(catalog)} sessions from {path}")
    return catalog


def default_catalog() -> InMemorySessionCatalog:
    """Catalog seeded with the built-in sample quizzes and workouts."""
    from .sample_data import SAMPLE_CATALOG

    return parse_catalog(SAMPLE_CATALOG)
