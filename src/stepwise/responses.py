"""
Response capture and validation for the item currently on screen.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from .errors import InvalidTransition, OutOfRangeResponse, UnknownItem
from .items import ItemKind, get_handler
from .items.base import Exercise, Item
from .models import SessionDefinition, SessionRun, SessionStatus


class ResponseCapture:
    """
    Records user input for one SessionRun.

    Only the current item accepts input, and only while the run is in
    progress. Submissions are last-write-wins.
    """

    def __init__(self, definition: SessionDefinition, run: SessionRun):
        self.definition = definition
        self.run = run

    def _current_item(self, operation: str, item_id: str) -> Item:
        if self.definition.index_of(item_id) is None:
            raise UnknownItem(item_id)
        if self.run.status != SessionStatus.IN_PROGRESS:
            raise InvalidTransition(operation, self.run.status.value)
        current = self.definition.items[self.run.current_index]
        if current.id != item_id:
            raise InvalidTransition(
                operation,
                self.run.status.value,
                f"item {item_id!r} is not the current item {current.id!r}",
            )
        return current

    def submit(self, item_id: str, response: Any) -> Any:
        """Store the response for the current item, replacing any earlier one."""
        item = self._current_item("submit", item_id)
        normalized = get_handler(item.kind).normalize(item, response)
        self.run.responses[item.id] = normalized
        logger.debug(f"Captured response for {item.id}: {normalized!r}")
        return normalized

    def toggle(self, item_id: str, option_index: int) -> frozenset[int]:
        """Flip one option of a multi-select question."""
        item = self._multi_select("toggle", item_id)
        handler = get_handler(ItemKind.MULTI_SELECT)
        selection = handler.toggle(item, self.run.responses.get(item.id), option_index)
        self.run.responses[item.id] = selection
        return selection

    def set_option(self, item_id: str, option_index: int, selected: bool = True) -> frozenset[int]:
        """Select or deselect one option. Repeating the same call is a no-op."""
        item = self._multi_select("select", item_id)
        current = self.run.responses.get(item.id) or frozenset()
        if (option_index in current) == selected:
            # Still validate the index so a bad option is reported
            get_handler(ItemKind.MULTI_SELECT).normalize(item, [option_index])
            return current
        return self.toggle(item_id, option_index)

    def _multi_select(self, operation: str, item_id: str) -> Item:
        item = self._current_item(operation, item_id)
        if item.kind != ItemKind.MULTI_SELECT:
            raise OutOfRangeResponse(f"Item {item_id!r} is not a multi-select question")
        return item

    def has_response(self, item: Item) -> bool:
        return item.id in self.run.responses

    def can_advance(self) -> bool:
        """A question without a submitted response blocks advancing; an exercise never does."""
        item = self.definition.items[self.run.current_index]
        if isinstance(item, Exercise):
            return True
        return self.has_response(item)
