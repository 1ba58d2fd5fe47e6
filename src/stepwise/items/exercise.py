"""
Exercise handler.

Exercises carry no correctness rule. The only response is an
acknowledgement that the exercise was completed.
"""

from typing import Any

from ..errors import OutOfRangeResponse
from . import ItemKind, register
from .base import Exercise


@register(ItemKind.EXERCISE)
class ExerciseHandler:
    """Handler for timed exercises."""

    def validate(self, item: Exercise) -> bool:
        return item.duration_seconds > 0 and item.points >= 0

    def normalize(self, item: Exercise, response: Any) -> bool:
        if response is None or response is True:
            return True
        raise OutOfRangeResponse(f"Exercise {item.id!r} only accepts a completion acknowledgement")

    def is_correct(self, item: Exercise, response: Any) -> bool:
        return response is True

    def format_response(self, item: Exercise, response: Any) -> str:
        return "done" if response is True else "skipped"
