"""
Single-choice question handler.

The user picks exactly one option; correct when the chosen index
equals the correct index.
"""

from typing import Any

from ..errors import OutOfRangeResponse
from . import ItemKind, register
from .base import Question


def _check_index(item: Question, index: Any) -> int:
    # bool is an int subclass; True/False are not option indices
    if isinstance(index, bool) or not isinstance(index, int):
        raise OutOfRangeResponse(
            f"Item {item.id!r} expects an option index, got {type(index).__name__}"
        )
    if not 0 <= index < len(item.options):
        raise OutOfRangeResponse(
            f"Option {index} is outside 0..{len(item.options) - 1} for item {item.id!r}"
        )
    return index


@register(ItemKind.SINGLE_CHOICE)
class SingleChoiceHandler:
    """Handler for single-choice questions."""

    def validate(self, item: Question) -> bool:
        if len(item.options) < 2:
            return False
        correct = item.correct
        return (
            isinstance(correct, int)
            and not isinstance(correct, bool)
            and 0 <= correct < len(item.options)
        )

    def normalize(self, item: Question, response: Any) -> int:
        return _check_index(item, response)

    def is_correct(self, item: Question, response: Any) -> bool:
        if response is None:
            return False
        return response == item.correct

    def format_response(self, item: Question, response: Any) -> str:
        if response is None:
            return "-"
        return item.options[response]
