"""
Multi-select question handler.

- The user selects any number of options, one toggle at a time.
- Correct only when the selected set equals the correct set exactly:
  no partial credit for subsets or supersets, order irrelevant.
"""

from typing import Any

from ..errors import OutOfRangeResponse
from . import ItemKind, register
from .base import Question
from .single_choice import _check_index


@register(ItemKind.MULTI_SELECT)
class MultiSelectHandler:
    """Handler for multi-select questions."""

    def validate(self, item: Question) -> bool:
        if len(item.options) < 2 or not isinstance(item.correct, frozenset):
            return False
        if not item.correct:
            return False
        return all(
            isinstance(i, int) and not isinstance(i, bool) and 0 <= i < len(item.options)
            for i in item.correct
        )

    def normalize(self, item: Question, response: Any) -> frozenset[int]:
        if isinstance(response, (str, bytes, dict)) or not hasattr(response, "__iter__"):
            raise OutOfRangeResponse(
                f"Item {item.id!r} expects a collection of option indices, "
                f"got {type(response).__name__}"
            )
        return frozenset(_check_index(item, index) for index in response)

    def toggle(self, item: Question, current: frozenset[int] | None, index: Any) -> frozenset[int]:
        """Flip one option in or out of the selection."""
        index = _check_index(item, index)
        selected = current or frozenset()
        if index in selected:
            return selected - {index}
        return selected | {index}

    def is_correct(self, item: Question, response: Any) -> bool:
        if response is None:
            return False
        return frozenset(response) == item.correct

    def format_response(self, item: Question, response: Any) -> str:
        if response is None:
            return "-"
        if not response:
            return "(none)"
        return ", ".join(item.options[i] for i in sorted(response))
