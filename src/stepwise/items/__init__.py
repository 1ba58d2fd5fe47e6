"""
Item kinds for stepped sessions.

Each item kind (single choice, multi select, true/false, exercise) has its
own module with a handler exposing:
- validate(): Check that the item definition is usable
- normalize(): Validate and coerce a raw response
- is_correct(): Apply the kind's correctness rule
- format_response(): Render a captured response for display
"""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .base import ItemHandler


class ItemKind(str, Enum):
    """Supported item kinds."""
    SINGLE_CHOICE = "single_choice"
    MULTI_SELECT = "multi_select"
    TRUE_FALSE = "true_false"
    EXERCISE = "exercise"


# Handler registry - populated by @register decorator
HANDLERS: dict[ItemKind, "ItemHandler"] = {}


def register(kind: ItemKind):
    """Decorator to register an item handler."""
    def decorator(cls):
        HANDLERS[kind] = cls()
        return cls
    return decorator


def get_handler(kind: str | ItemKind) -> "ItemHandler | None":
    """Get the handler for an item kind."""
    if isinstance(kind, str) and not isinstance(kind, ItemKind):
        try:
            kind = ItemKind(kind.lower().replace("-", "_"))
        except ValueError:
            return None
    return HANDLERS.get(kind)


# Import handlers to trigger registration
from . import single_choice
from . import multi_select
from . import true_false
from . import exercise

from .base import Exercise, Item, ItemHandler, Question

__all__ = [
    "ItemKind",
    "HANDLERS",
    "get_handler",
    "register",
    "Question",
    "Exercise",
    "Item",
    "ItemHandler",
]
