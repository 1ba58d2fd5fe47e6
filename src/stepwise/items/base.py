"""
Item definitions and the handler protocol.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, Union

from . import ItemKind

QUESTION_KINDS = frozenset({ItemKind.SINGLE_CHOICE, ItemKind.MULTI_SELECT, ItemKind.TRUE_FALSE})


@dataclass(frozen=True)
class Question:
    """A knowledge-check step with a correctness rule."""

    id: str
    prompt: str
    kind: ItemKind
    correct: int | frozenset[int] | bool
    options: tuple[str, ...] = ()
    explanation: str = ""

    def __post_init__(self):
        # Accept lists/sets from catalog data and freeze them
        kind = ItemKind(self.kind)
        if kind not in QUESTION_KINDS:
            raise ValueError(f"Question {self.id!r} cannot have kind {kind.value!r}")
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "options", tuple(self.options))
        if kind == ItemKind.MULTI_SELECT and not isinstance(self.correct, frozenset):
            if isinstance(self.correct, int):
                raise ValueError(f"Multi-select question {self.id!r} needs a set of correct indices")
            object.__setattr__(self, "correct", frozenset(self.correct))


@dataclass(frozen=True)
class Exercise:
    """A timed physical step. Success is simply reaching completion."""

    id: str
    name: str
    duration_seconds: int
    points: int = 0
    instructions: str = ""
    kind: ItemKind = field(default=ItemKind.EXERCISE, init=False)


Item = Union[Question, Exercise]


class ItemHandler(Protocol):
    """Protocol for item kind handlers."""

    def validate(self, item: Item) -> bool:
        """Check that the item definition is usable. Returns True if valid."""
        ...

    def normalize(self, item: Item, response: Any) -> Any:
        """Coerce a raw response into its canonical form.

        Raises OutOfRangeResponse when the response has the wrong shape
        or points outside the item's options.
        """
        ...

    def is_correct(self, item: Item, response: Any) -> bool:
        """Apply the correctness rule. A missing response (None) is never correct."""
        ...

    def format_response(self, item: Item, response: Any) -> str:
        """Human-readable rendering of a captured response."""
        ...
