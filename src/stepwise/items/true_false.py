"""
True/False question handler.

Binary statements; correct when the boolean response matches.
"""

from typing import Any

from ..errors import OutOfRangeResponse
from . import ItemKind, register
from .base import Question


@register(ItemKind.TRUE_FALSE)
class TrueFalseHandler:
    """Handler for true/false questions."""

    def validate(self, item: Question) -> bool:
        return isinstance(item.correct, bool)

    def normalize(self, item: Question, response: Any) -> bool:
        if not isinstance(response, bool):
            raise OutOfRangeResponse(
                f"Item {item.id!r} expects True or False, got {type(response).__name__}"
            )
        return response

    def is_correct(self, item: Question, response: Any) -> bool:
        if response is None:
            return False
        return response is item.correct

    def format_response(self, item: Question, response: Any) -> str:
        if response is None:
            return "-"
        return "True" if response else "False"
